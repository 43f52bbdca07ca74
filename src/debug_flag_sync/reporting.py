"""Rendering of a ``SyncReport`` for humans and for machines."""

from __future__ import annotations

import json
from typing import Iterable, List

from .sync_report import SyncReport


class SyncReporter:
    """Formats synchronization results."""

    @staticmethod
    def format_text(report: SyncReport, verbose: bool = False) -> str:
        """Format a report as plain text listing per-site differences.

        Args:
            report: Result of a scan
            verbose: Also list every site's full flag set

        Returns:
            Formatted report string
        """
        reference_count = len(report.reference_flags)
        parts = [
            f"Debug flag sync check: {len(report.flags)} site(s), "
            f"reference '{report.reference}' ({reference_count} flag(s))",
            "-" * 60,
        ]
        if verbose:
            parts.extend(SyncReporter._flag_lines(report.reference, report.reference_flags))

        for diff in report.differences:
            if diff.in_sync:
                parts.append(f"[OK] {diff.site}")
            else:
                parts.append(f"[OUT OF SYNC] {diff.site}")
                if diff.missing:
                    parts.append(f"   missing: {', '.join(sorted(diff.missing))}")
                if diff.extra:
                    parts.append(f"   extra:   {', '.join(sorted(diff.extra))}")
            if verbose:
                parts.extend(SyncReporter._flag_lines(diff.site, report.flags[diff.site]))

        if report.undeclared_environment:
            parts.append("[UNDECLARED] environment")
            parts.append(f"   not declared by '{report.reference}': {', '.join(sorted(report.undeclared_environment))}")

        parts.append("-" * 60)
        if report.ok:
            parts.append("[OK] Debug flag declarations are in sync.")
        else:
            parts.append(
                "[ERROR] Debug flag declarations diverge. 'missing' flags are declared by "
                f"'{report.reference}' but not by the site; 'extra' flags are the reverse."
            )
        return "\n".join(parts)

    @staticmethod
    def format_json(report: SyncReport) -> str:
        return json.dumps(report.to_dict(), indent=2, sort_keys=True)

    @staticmethod
    def _flag_lines(site: str, names: Iterable[str]) -> List[str]:
        names = sorted(names)
        if not names:
            return [f"   {site}: (no flags)"]
        return [f"   {site}: {', '.join(names)}"]
