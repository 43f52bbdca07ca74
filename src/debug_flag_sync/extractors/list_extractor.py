"""Canonical list files: one flag name per line."""

from typing import Any, Dict, Set

from ..exceptions import ConfigurationError
from .base import FlagExtractor


class ListFileExtractor(FlagExtractor):
    """
    Extract flags from a plain list file.

    Blank lines and comments are ignored. Every other line must hold exactly
    one flag name; anything else is a malformed entry.
    """

    rule = "list"
    options = frozenset({"comment"})

    def _configure(self, options: Dict[str, Any]) -> None:
        comment = options.get("comment", "#")
        if not isinstance(comment, str) or not comment:
            raise ConfigurationError("Option 'comment' must be a non-empty string")
        self._comment = comment

    def extract(self, content: str) -> Set[str]:
        names: Set[str] = set()
        for line_num, line in enumerate(content.splitlines(), 1):
            entry = line.split(self._comment, 1)[0].strip()
            if not entry:
                continue
            names.add(self._flag(entry, line=line_num))
        return names
