"""Tests for the flag extraction strategies and their registry."""

import pytest

from debug_flag_sync.exceptions import ConfigurationError, ExtractionError
from debug_flag_sync.extractors import (
    ExtractorRegistry,
    ListFileExtractor,
    PatternExtractor,
    TomlTableExtractor,
    YamlKeysExtractor,
)


class TestListFileExtractor:
    def test_one_flag_per_line_with_comments(self):
        content = "# debug flags\nROC_CHECK_MONO_IR\n\n  roc_trace_area  # tracing\n"
        assert ListFileExtractor().extract(content) == {"ROC_CHECK_MONO_IR", "ROC_TRACE_AREA"}

    def test_duplicates_are_collapsed(self):
        content = "ROC_CHECK_MONO_IR\nroc_check_mono_ir\n ROC_CHECK_MONO_IR \n"
        assert ListFileExtractor().extract(content) == {"ROC_CHECK_MONO_IR"}

    def test_malformed_entry_reports_line(self):
        with pytest.raises(ExtractionError) as exc_info:
            ListFileExtractor().extract("ROC_OK\nROC BROKEN ENTRY\n")
        assert exc_info.value.line == 2
        assert "ROC BROKEN ENTRY" in str(exc_info.value)

    def test_custom_comment_marker(self):
        extractor = ListFileExtractor({"comment": "//"})
        assert extractor.extract("// header\nROC_A // note\n") == {"ROC_A"}

    def test_empty_content(self):
        assert ListFileExtractor().extract("") == set()


class TestTomlTableExtractor:
    CONTENT = """
[env]
ROC_CHECK_MONO_IR = "0"
ROC_TRACE_AREA = "0"
RUST_BACKTRACE = "1"

[profile.dev.env]
ROC_NESTED = "1"
"""

    def test_keys_of_table(self):
        extractor = TomlTableExtractor({"table": "env"})
        assert extractor.extract(self.CONTENT) == {
            "ROC_CHECK_MONO_IR",
            "ROC_TRACE_AREA",
            "RUST_BACKTRACE",
        }

    def test_match_filters_unrelated_keys(self):
        extractor = TomlTableExtractor({"table": "env", "match": "^ROC_"})
        assert extractor.extract(self.CONTENT) == {"ROC_CHECK_MONO_IR", "ROC_TRACE_AREA"}

    def test_dotted_table(self):
        extractor = TomlTableExtractor({"table": "profile.dev.env"})
        assert extractor.extract(self.CONTENT) == {"ROC_NESTED"}

    def test_missing_table(self):
        with pytest.raises(ExtractionError, match="'missing' not found"):
            TomlTableExtractor({"table": "missing"}).extract(self.CONTENT)

    def test_non_table_value(self):
        with pytest.raises(ExtractionError, match="not a TOML table"):
            TomlTableExtractor({"table": "env.RUST_BACKTRACE"}).extract(self.CONTENT)

    def test_invalid_toml(self):
        with pytest.raises(ExtractionError, match="Invalid TOML"):
            TomlTableExtractor({"table": "env"}).extract("[env\nROC_A = ")


    def test_match_ignores_case(self):
        extractor = TomlTableExtractor({"table": "env", "match": "^roc_"})
        assert extractor.extract(self.CONTENT) == {"ROC_CHECK_MONO_IR", "ROC_TRACE_AREA"}


class TestYamlKeysExtractor:
    def test_list_of_names(self):
        content = "debug:\n  flags:\n    - ROC_A\n    - roc_b\n    - ROC_A\n"
        assert YamlKeysExtractor({"key": "debug.flags"}).extract(content) == {"ROC_A", "ROC_B"}

    def test_mapping_keys(self):
        content = "env:\n  ROC_A: '1'\n  OTHER: '0'\n"
        extractor = YamlKeysExtractor({"key": "env", "match": "^ROC_"})
        assert extractor.extract(content) == {"ROC_A"}

    def test_empty_node_is_empty_set(self):
        assert YamlKeysExtractor({"key": "flags"}).extract("flags:\n") == set()

    def test_scalar_node_is_malformed(self):
        with pytest.raises(ExtractionError, match="Expected a list or mapping"):
            YamlKeysExtractor({"key": "flags"}).extract("flags: ROC_A\n")

    def test_non_string_entry_is_malformed(self):
        with pytest.raises(ExtractionError, match="Malformed flag name"):
            YamlKeysExtractor({"key": "flags"}).extract("flags:\n  - 42\n")

    def test_invalid_yaml_reports_line(self):
        with pytest.raises(ExtractionError) as exc_info:
            YamlKeysExtractor().extract("flags: [ROC_A, ROC_B\n")
        assert exc_info.value.line is not None


class TestPatternExtractor:
    SOURCE = """
fn check(ir: &Ir) {
    dbg_do!(ROC_CHECK_MONO_IR, { check_ir(ir) });
    dbg_do!(ROC_TRACE_AREA, { trace() });
    dbg_do!(ROC_CHECK_MONO_IR, { again() });
}
"""

    def test_group_captures_flag(self):
        extractor = PatternExtractor({"pattern": r"dbg_do!\(\s*(ROC_[A-Z0-9_]+)"})
        assert extractor.extract(self.SOURCE) == {"ROC_CHECK_MONO_IR", "ROC_TRACE_AREA"}

    def test_whole_match_without_group(self):
        extractor = PatternExtractor({"pattern": r"\bROC_[A-Z0-9_]+\b"})
        assert extractor.extract(self.SOURCE) == {"ROC_CHECK_MONO_IR", "ROC_TRACE_AREA"}

    def test_multiline_anchors(self):
        extractor = PatternExtractor({"pattern": r"^\s*(ROC_\w+)\s*$", "multiline": True})
        assert extractor.extract("flags! {\n    ROC_A\n    ROC_B\n}\n") == {"ROC_A", "ROC_B"}

    def test_malformed_capture_reports_line(self):
        extractor = PatternExtractor({"pattern": r"flag=(.*)$", "multiline": True})
        with pytest.raises(ExtractionError) as exc_info:
            extractor.extract("flag=ROC_A\n\nflag=not a flag\n")
        assert exc_info.value.line == 3

    def test_pattern_is_required(self):
        with pytest.raises(ConfigurationError, match="requires a 'pattern'"):
            PatternExtractor({})

    def test_invalid_regex(self):
        with pytest.raises(ConfigurationError, match="not a valid regular expression"):
            PatternExtractor({"pattern": "(ROC_"})

    def test_more_than_one_group(self):
        with pytest.raises(ConfigurationError, match="at most one capturing group"):
            PatternExtractor({"pattern": r"(ROC)_(\w+)"})


class TestExtractorRegistry:
    def test_rule_names(self):
        assert ExtractorRegistry.get_all_rule_names() == ["list", "pattern", "toml", "yaml"]

    def test_create_known_rule(self):
        extractor = ExtractorRegistry.create("toml", {"table": "env"})
        assert isinstance(extractor, TomlTableExtractor)

    def test_unknown_rule(self):
        with pytest.raises(ConfigurationError, match="Unknown rule"):
            ExtractorRegistry.create("grep")

    def test_unknown_option(self):
        with pytest.raises(ConfigurationError, match="Unknown option"):
            ExtractorRegistry.create("list", {"table": "env"})
