"""
Loading of the declaration site configuration.

The configuration is a YAML file living alongside the checked source tree::

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
        pattern: '\\b(ROC_[A-Z0-9_]+)\\b'
        include: ["**/*.rs"]

Every key of a site entry other than ``name``, ``path``, ``rule``,
``include`` and ``exclude`` is passed to the extractor as an option.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .declaration_site import DeclarationSite
from .exceptions import ConfigurationError
from .extractors import ExtractorRegistry
from .yaml_validator import YamlValidator

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "debug_flags.yaml"
SITE_KEYS = frozenset({"name", "path", "rule", "include", "exclude"})
TOP_LEVEL_KEYS = frozenset({"reference", "sites"})


@dataclass(frozen=True)
class CheckConfig:
    """Sites to compare, the reference among them, and the tree they live in."""

    sites: Tuple[DeclarationSite, ...]
    reference: str
    root: Path
    source: Optional[Path] = None

    @property
    def site_names(self) -> List[str]:
        return [site.name for site in self.sites]


def find_config(root: Optional[Union[str, Path]] = None) -> Path:
    """Default configuration location: ``debug_flags.yaml`` in the root or working directory."""
    base = Path(root) if root is not None else Path.cwd()
    return base / DEFAULT_CONFIG_NAME


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    root: Optional[Union[str, Path]] = None,
) -> CheckConfig:
    """
    Load and validate the site configuration.

    Args:
        config_path: Configuration file; defaults to ``debug_flags.yaml`` under ``root``
        root: Project root that relative site paths resolve against;
            defaults to the directory holding the configuration file

    Raises:
        ConfigurationError: the file is missing, unparsable or invalid
    """
    path = Path(config_path) if config_path is not None else find_config(root)
    logger.info(f"Loading debug flag configuration from: {path}")

    validator = YamlValidator()
    is_valid, data, errors = validator.validate_file(path)
    if not is_valid:
        logger.error(f"Configuration file validation failed: {path}")
        raise ConfigurationError(validator.format_errors(errors))

    project_root = Path(root) if root is not None else path.resolve().parent
    return parse_config(data, project_root, source=path)


def parse_config(data: Any, root: Union[str, Path], source: Optional[Path] = None) -> CheckConfig:
    """Build a ``CheckConfig`` from already-parsed configuration data."""
    where = f" in {source}" if source else ""
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration root must be a mapping{where}")

    unknown = sorted(set(data) - TOP_LEVEL_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown top-level key(s){where}: {', '.join(unknown)}")

    entries = data.get("sites")
    if not isinstance(entries, list) or not entries:
        raise ConfigurationError(f"'sites' must be a non-empty list{where}")

    sites: List[DeclarationSite] = []
    seen = set()
    for index, entry in enumerate(entries):
        site = _parse_site(index, entry)
        if site.name in seen:
            raise ConfigurationError(f"Duplicate site name '{site.name}'{where}")
        seen.add(site.name)
        sites.append(site)

    reference = data.get("reference", sites[0].name)
    if not isinstance(reference, str) or not reference.strip():
        raise ConfigurationError(f"'reference' must be a non-empty site name{where}")
    reference = reference.strip()
    if reference not in seen:
        raise ConfigurationError(
            f"Reference site '{reference}' is not configured{where} "
            f"(configured: {', '.join(s.name for s in sites)})"
        )

    logger.debug(f"Configured {len(sites)} site(s), reference '{reference}'")
    return CheckConfig(sites=tuple(sites), reference=reference, root=Path(root), source=source)


def _parse_site(index: int, entry: Any) -> DeclarationSite:
    label = f"sites[{index}]"
    if not isinstance(entry, dict):
        raise ConfigurationError(f"{label} must be a mapping")

    for key in ("name", "path", "rule"):
        value = entry.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ConfigurationError(f"{label} requires a non-empty string '{key}'")

    name = entry["name"].strip()
    rule = entry["rule"].strip()
    options: Dict[str, Any] = {k: v for k, v in entry.items() if k not in SITE_KEYS}
    try:
        extractor = ExtractorRegistry.create(rule, options)
    except ConfigurationError as e:
        raise ConfigurationError(f"Site '{name}': {e}") from e

    return DeclarationSite(
        name=name,
        path=Path(entry["path"]),
        extractor=extractor,
        include=_globs(name, "include", entry.get("include", ["**/*"])),
        exclude=_globs(name, "exclude", entry.get("exclude", [])),
    )


def _globs(site: str, key: str, value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise ConfigurationError(f"Site '{site}': '{key}' must be a glob or a list of globs")
    return tuple(value)
