"""
Registry of extraction rules.

Maps the ``rule`` name used in site descriptors to the extractor class that
implements it.
"""

from typing import Any, Dict, List, Optional, Type

from ..exceptions import ConfigurationError
from .base import FlagExtractor
from .list_extractor import ListFileExtractor
from .pattern_extractor import PatternExtractor
from .toml_extractor import TomlTableExtractor
from .yaml_extractor import YamlKeysExtractor


class ExtractorRegistry:
    """Lookup and construction of extractors by rule name."""

    _EXTRACTORS: Dict[str, Type[FlagExtractor]] = {
        ListFileExtractor.rule: ListFileExtractor,
        TomlTableExtractor.rule: TomlTableExtractor,
        YamlKeysExtractor.rule: YamlKeysExtractor,
        PatternExtractor.rule: PatternExtractor,
    }

    @classmethod
    def get_all_rule_names(cls) -> List[str]:
        return sorted(cls._EXTRACTORS)

    @classmethod
    def is_valid_rule(cls, rule: str) -> bool:
        return rule in cls._EXTRACTORS

    @classmethod
    def create(cls, rule: str, options: Optional[Dict[str, Any]] = None) -> FlagExtractor:
        """Build the extractor for ``rule`` configured with ``options``."""
        if not cls.is_valid_rule(rule):
            raise ConfigurationError(cls._unknown(rule))
        return cls._EXTRACTORS[rule](options)

    @classmethod
    def _unknown(cls, rule: str) -> str:
        return f"Unknown rule: {rule!r} (available: {', '.join(cls.get_all_rule_names())})"
