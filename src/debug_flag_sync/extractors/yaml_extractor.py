"""Flags declared in a YAML document, as a list of names or as mapping keys."""

from typing import Any, Dict, Set

import yaml

from ..exceptions import ConfigurationError, ExtractionError
from .base import FlagExtractor, KeyFilterMixin, lookup_dotted


class YamlKeysExtractor(KeyFilterMixin, FlagExtractor):
    rule = "yaml"
    options = frozenset({"key", "match"})

    def _configure(self, options: Dict[str, Any]) -> None:
        key = options.get("key")
        if key is not None and not isinstance(key, str):
            raise ConfigurationError("Option 'key' must be a dotted key string")
        self._key = key
        self._configure_match(options)

    def extract(self, content: str) -> Set[str]:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            line = mark.line + 1 if mark is not None else None
            raise ExtractionError(f"Invalid YAML: {e}", line=line) from e

        node = lookup_dotted(data, self._key)
        if node is None:
            return set()
        if isinstance(node, dict):
            entries = list(node.keys())
        elif isinstance(node, list):
            entries = node
        else:
            raise ExtractionError(
                f"Expected a list or mapping of flag names, got {type(node).__name__}"
            )

        names: Set[str] = set()
        for entry in entries:
            if not isinstance(entry, str):
                raise ExtractionError(f"Malformed flag name: {entry!r}")
            if self._keep(entry.strip().upper()):
                names.add(self._flag(entry))
        return names
