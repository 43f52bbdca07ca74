"""Flags declared as keys of a TOML table, e.g. the ``[env]`` table of ``.cargo/config.toml``."""

import tomllib
from typing import Any, Dict, Set

from ..exceptions import ConfigurationError, ExtractionError
from .base import FlagExtractor, KeyFilterMixin, lookup_dotted


class TomlTableExtractor(KeyFilterMixin, FlagExtractor):
    rule = "toml"
    options = frozenset({"table", "match"})

    def _configure(self, options: Dict[str, Any]) -> None:
        table = options.get("table")
        if table is not None and not isinstance(table, str):
            raise ConfigurationError("Option 'table' must be a dotted key string")
        self._table = table
        self._configure_match(options)

    def extract(self, content: str) -> Set[str]:
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ExtractionError(f"Invalid TOML: {e}") from e

        table = lookup_dotted(data, self._table)
        if not isinstance(table, dict):
            raise ExtractionError(f"'{self._table}' is not a TOML table")

        return {self._flag(key) for key in table if self._keep(key.strip().upper())}
