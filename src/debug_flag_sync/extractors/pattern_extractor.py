"""Source scanning: every match of a regular expression is a flag reference."""

import re
from typing import Any, Dict, Set

from ..exceptions import ConfigurationError
from .base import FlagExtractor


class PatternExtractor(FlagExtractor):
    """
    Scan text for flag references with a regular expression.

    When the pattern has a capturing group, group 1 is the flag name;
    otherwise the whole match is. Matches where the group did not
    participate are skipped.
    """

    rule = "pattern"
    options = frozenset({"pattern", "multiline", "ignore_case"})

    def _configure(self, options: Dict[str, Any]) -> None:
        if "pattern" not in options:
            raise ConfigurationError("Rule 'pattern' requires a 'pattern' option")
        flags = 0
        if options.get("multiline", False):
            flags |= re.MULTILINE
        if options.get("ignore_case", False):
            flags |= re.IGNORECASE
        self._pattern = self._compile("pattern", options["pattern"], flags)
        if self._pattern.groups > 1:
            raise ConfigurationError(
                f"Option 'pattern' must have at most one capturing group, "
                f"found {self._pattern.groups}"
            )

    def extract(self, content: str) -> Set[str]:
        names: Set[str] = set()
        group = 1 if self._pattern.groups else 0
        for match in self._pattern.finditer(content):
            raw = match.group(group)
            if raw is None:
                continue
            line = content.count("\n", 0, match.start()) + 1
            names.add(self._flag(raw, line=line))
        return names
