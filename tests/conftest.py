"""
Global test configuration and fixtures for the debug flag sync test suite.

This module provides:
- Pytest collection hooks for automatic test categorization based on file location
- Fixtures that lay out throwaway project trees with flag declarations
"""

import os
import sys
import textwrap
from pathlib import Path
from typing import Dict

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))


# ============================================================================
# PYTEST CONFIGURATION AND HOOKS
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: marks tests as integration tests (CLI, real trees)")
    config.addinivalue_line("markers", "fast: marks tests as fast-running tests")
    config.addinivalue_line("markers", "extractors: marks tests related to flag extraction rules")


def pytest_collection_modifyitems(config, items):
    """Automatically add markers to tests based on path and file name."""
    tests_root = Path(__file__).parent

    for item in items:
        try:
            test_file = Path(item.fspath).relative_to(tests_root)
        except ValueError:
            test_file = Path(item.fspath)
        parts = test_file.parts

        if "unit" in parts:
            item.add_marker(pytest.mark.unit)
            item.add_marker(pytest.mark.fast)
        elif "integration" in parts:
            item.add_marker(pytest.mark.integration)

        if "extractor" in test_file.name:
            item.add_marker(pytest.mark.extractors)


# ============================================================================
# PROJECT TREE FIXTURES
# ============================================================================


@pytest.fixture
def make_tree(tmp_path):
    """
    Write a project tree under ``tmp_path``.

    Usage: ``make_tree({"path/in/tree": "content", ...})`` returns the root.
    Content is dedented so tests can use indented triple-quoted strings.
    """

    def _make(files: Dict[str, str]) -> Path:
        for relative, content in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content), encoding="utf-8")
        return tmp_path

    return _make


CARGO_CONFIG = """\
    [alias]
    test-gen-dev = "test -p test_gen --no-default-features --features gen-dev"

    [env]
    # debug flags; keep in sync with crates/compiler/debug_flags/src/lib.rs
    ROC_CHECK_MONO_IR = "0"
    ROC_PRINT_IR_AFTER_SPECIALIZATION = "0"
    ROC_TRACE_AREA = "0"
    RUST_BACKTRACE = "1"
    """

DEBUG_FLAGS_LIB = """\
    flags! {
        // Check mono IR before code generation
        ROC_CHECK_MONO_IR

        ROC_PRINT_IR_AFTER_SPECIALIZATION

        ROC_TRACE_AREA
    }
    """

SITES_CONFIG = """\
    reference: cargo_env
    sites:
      - name: cargo_env
        path: .cargo/config.toml
        rule: toml
        table: env
        match: "^ROC_"
      - name: debug_flags_crate
        path: crates/compiler/debug_flags/src
        rule: pattern
        pattern: '^\\s*(ROC_[A-Z0-9_]+)\\s*$'
        multiline: true
        include: ["**/*.rs"]
    """


@pytest.fixture
def roc_like_tree(make_tree):
    """A project whose cargo env table and debug_flags crate agree."""
    return make_tree(
        {
            ".cargo/config.toml": CARGO_CONFIG,
            "crates/compiler/debug_flags/src/lib.rs": DEBUG_FLAGS_LIB,
            "debug_flags.yaml": SITES_CONFIG,
        }
    )
