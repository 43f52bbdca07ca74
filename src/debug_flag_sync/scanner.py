"""
Flag registry scanner.

Collects the flag set of every declaration site and compares each against
the reference site. Divergence is returned in the ``SyncReport``; only
unreadable sites and malformed content abort the run.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Sequence, Union

from .config_loader import CheckConfig
from .declaration_site import DeclarationSite
from .exceptions import ConfigurationError
from .flag_names import normalize_flag_name
from .sync_report import SiteDifference, SyncReport

logger = logging.getLogger(__name__)


def compare_flag_sets(flags: Mapping[str, FrozenSet[str]], reference: str) -> SyncReport:
    """
    Compare every site's flag set with the reference site's.

    Args:
        flags: Flag set per site name, in configuration order
        reference: Name of the site the others are compared against

    Returns:
        SyncReport with one SiteDifference per non-reference site
    """
    if reference not in flags:
        raise ConfigurationError(f"Reference site '{reference}' is not configured")

    expected = frozenset(flags[reference])
    differences = []
    for site, names in flags.items():
        if site == reference:
            continue
        names = frozenset(names)
        differences.append(
            SiteDifference(site=site, missing=expected - names, extra=names - expected)
        )
    return SyncReport(
        reference=reference,
        flags={site: frozenset(names) for site, names in flags.items()},
        differences=tuple(differences),
    )


def find_undeclared_environment_flags(
    declared: Iterable[str], environ: Mapping[str, str], prefixes: Iterable[str]
) -> FrozenSet[str]:
    """Environment variables under any of ``prefixes`` that are not declared flags."""
    normalized_prefixes = [normalize_flag_name(p) for p in prefixes if p.strip()]
    if not normalized_prefixes:
        return frozenset()
    declared = frozenset(declared)
    exported = {normalize_flag_name(name) for name in environ}
    return frozenset(
        name
        for name in exported
        if any(name.startswith(prefix) for prefix in normalized_prefixes) and name not in declared
    )


class FlagRegistryScanner:
    """Reads the configured declaration sites and builds a ``SyncReport``."""

    def __init__(
        self,
        sites: Sequence[DeclarationSite],
        reference: Optional[str] = None,
        root: Union[str, Path] = ".",
        jobs: int = 1,
    ):
        if not sites:
            raise ConfigurationError("At least one declaration site is required")
        if jobs < 1:
            raise ConfigurationError(f"jobs must be at least 1, got {jobs}")
        names = [site.name for site in sites]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ConfigurationError(f"Duplicate site name(s): {', '.join(duplicates)}")
        self.sites = list(sites)
        self.reference = reference if reference is not None else names[0]
        if self.reference not in names:
            raise ConfigurationError(
                f"Reference site '{self.reference}' is not configured (configured: {', '.join(names)})"
            )
        self.root = Path(root)
        self.jobs = jobs

    @classmethod
    def from_config(cls, config: CheckConfig, jobs: int = 1) -> "FlagRegistryScanner":
        return cls(config.sites, reference=config.reference, root=config.root, jobs=jobs)

    def collect(self) -> Dict[str, FrozenSet[str]]:
        """
        Read every site's flag set.

        Sites are independent, so with ``jobs > 1`` they are read on a thread
        pool. Results are gathered in configuration order, which also decides
        which error surfaces when several sites fail.
        """
        if self.jobs == 1 or len(self.sites) == 1:
            return {site.name: site.read_flags(self.root) for site in self.sites}

        workers = min(self.jobs, len(self.sites))
        logger.debug(f"Reading {len(self.sites)} sites with {workers} worker thread(s)")
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [(site.name, executor.submit(site.read_flags, self.root)) for site in self.sites]
            return {name: future.result() for name, future in futures}

    def scan(
        self,
        environ: Optional[Mapping[str, str]] = None,
        env_prefixes: Iterable[str] = (),
    ) -> SyncReport:
        """
        Collect all sites and compare them with the reference.

        Args:
            environ: Environment to check for undeclared flags (only used with prefixes)
            env_prefixes: Prefixes selecting which environment variables are flags

        Raises:
            SiteUnreadable: a site path is missing or unreadable
            ExtractionError: a site's content is malformed
        """
        report = compare_flag_sets(self.collect(), self.reference)

        env_prefixes = list(env_prefixes)
        if env_prefixes:
            undeclared = find_undeclared_environment_flags(
                report.reference_flags, environ or {}, env_prefixes
            )
            if undeclared:
                logger.warning(f"Undeclared flag(s) set in environment: {', '.join(sorted(undeclared))}")
            report = replace(report, undeclared_environment=undeclared)

        if report.in_sync:
            logger.info(f"All {len(self.sites)} site(s) in sync with '{self.reference}'")
        else:
            logger.info(f"{len(report.out_of_sync)} site(s) out of sync with '{self.reference}'")
        return report
