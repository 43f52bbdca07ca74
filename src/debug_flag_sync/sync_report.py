"""
Result data structures for a debug flag synchronization run.

A ``SyncReport`` is built fresh on every invocation. It records, for every
site other than the reference, which flags it lacks and which it adds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Tuple


@dataclass(frozen=True)
class SiteDifference:
    """Asymmetric differences between one site and the reference site."""

    site: str
    missing: FrozenSet[str] = frozenset()
    extra: FrozenSet[str] = frozenset()

    @property
    def in_sync(self) -> bool:
        return not self.missing and not self.extra

    def to_dict(self) -> Dict[str, Any]:
        return {
            "site": self.site,
            "missing": sorted(self.missing),
            "extra": sorted(self.extra),
        }


@dataclass(frozen=True)
class SyncReport:
    """Outcome of comparing the flag sets of all configured sites."""

    reference: str
    flags: Dict[str, FrozenSet[str]]
    differences: Tuple[SiteDifference, ...] = ()
    undeclared_environment: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def in_sync(self) -> bool:
        """True iff every site declares exactly the reference flag set."""
        return all(diff.in_sync for diff in self.differences)

    @property
    def ok(self) -> bool:
        """True iff the sites are in sync and no undeclared flag is exported."""
        return self.in_sync and not self.undeclared_environment

    @property
    def reference_flags(self) -> FrozenSet[str]:
        return self.flags[self.reference]

    @property
    def out_of_sync(self) -> List[SiteDifference]:
        return [diff for diff in self.differences if not diff.in_sync]

    def difference_for(self, site: str) -> SiteDifference:
        for diff in self.differences:
            if diff.site == site:
                return diff
        raise KeyError(site)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reference": self.reference,
            "in_sync": self.in_sync,
            "ok": self.ok,
            "sites": {name: sorted(names) for name, names in self.flags.items()},
            "differences": [diff.to_dict() for diff in self.differences],
            "undeclared_environment": sorted(self.undeclared_environment),
        }
