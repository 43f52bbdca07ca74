"""
Pluggable flag extraction strategies.

Each strategy implements ``extract(content) -> set of flag names`` for one
kind of declaration site:
- ListFileExtractor: canonical list file, one name per line
- TomlTableExtractor: keys of a TOML table
- YamlKeysExtractor: a YAML list of names or the keys of a mapping
- PatternExtractor: regular-expression scan of source files
"""

from .base import FlagExtractor
from .list_extractor import ListFileExtractor
from .pattern_extractor import PatternExtractor
from .registry import ExtractorRegistry
from .toml_extractor import TomlTableExtractor
from .yaml_extractor import YamlKeysExtractor

__all__ = [
    "FlagExtractor",
    "ExtractorRegistry",
    "ListFileExtractor",
    "TomlTableExtractor",
    "YamlKeysExtractor",
    "PatternExtractor",
]
