"""
Base interface for flag extraction strategies.

An extractor turns the text of one file into the set of flag names it
declares or references. Extractors never touch the file system; reading is
the job of ``DeclarationSite``.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, FrozenSet, Optional, Pattern, Set

from ..exceptions import ConfigurationError, ExtractionError
from ..flag_names import is_valid_flag_name, normalize_flag_name


class FlagExtractor(ABC):
    """Strategy interface: ``extract(content) -> set of flag names``."""

    rule: ClassVar[str] = ""
    options: ClassVar[FrozenSet[str]] = frozenset()

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        options = dict(options or {})
        unknown = sorted(set(options) - self.options)
        if unknown:
            allowed = ", ".join(sorted(self.options)) or "none"
            raise ConfigurationError(
                f"Unknown option(s) for rule '{self.rule}': {', '.join(unknown)} "
                f"(allowed: {allowed})"
            )
        self._configure(options)

    def _configure(self, options: Dict[str, Any]) -> None:
        """Hook for subclasses to read and validate their options."""

    @abstractmethod
    def extract(self, content: str) -> Set[str]:
        """Return the normalized flag names found in ``content``."""

    @staticmethod
    def _compile(option: str, value: Any, flags: int = 0) -> Pattern[str]:
        if not isinstance(value, str) or not value:
            raise ConfigurationError(f"Option '{option}' must be a non-empty regular expression")
        try:
            return re.compile(value, flags)
        except re.error as e:
            raise ConfigurationError(f"Option '{option}' is not a valid regular expression: {e}") from e

    @staticmethod
    def _flag(raw: str, line: Optional[int] = None) -> str:
        name = normalize_flag_name(raw)
        if not is_valid_flag_name(name):
            raise ExtractionError(f"Malformed flag name: {raw!r}", line=line)
        return name


class KeyFilterMixin:
    """Shared ``match`` option: keep only names matching a regular expression.

    Matching ignores case, since names are compared after normalization.
    """

    _match: Optional[Pattern[str]] = None

    def _configure_match(self, options: Dict[str, Any]) -> None:
        if options.get("match") is not None:
            self._match = FlagExtractor._compile("match", options["match"], re.IGNORECASE)

    def _keep(self, name: str) -> bool:
        return self._match is None or bool(self._match.search(name))


def lookup_dotted(data: Any, dotted: Optional[str]) -> Any:
    """Walk ``data`` along a dotted key path such as ``"env"`` or ``"a.b"``."""
    if not dotted:
        return data
    node = data
    walked = []
    for part in dotted.split("."):
        walked.append(part)
        if not isinstance(node, dict) or part not in node:
            raise ExtractionError(f"Key '{'.'.join(walked)}' not found")
        node = node[part]
    return node
