"""
Exceptions raised by the debug flag synchronization checker.

Divergence between declaration sites is not an exception: it is reported
through ``SyncReport.in_sync``. Only tooling faults that make a report
meaningless are raised.
"""

from typing import Optional


class DebugFlagSyncError(Exception):
    """Base class for all checker errors."""
    pass


class ConfigurationError(DebugFlagSyncError):
    """Raised when the site configuration is missing or invalid."""
    pass


class SiteUnreadable(DebugFlagSyncError):
    """Raised when a configured site cannot be accessed."""

    def __init__(self, site: str, path, cause: object):
        self.site = site
        self.path = path
        self.cause = cause
        super().__init__(f"Site '{site}' is unreadable: {path}: {cause}")


class ExtractionError(DebugFlagSyncError):
    """Raised when a site's content does not match its declaration syntax."""

    def __init__(
        self,
        message: str,
        site: Optional[str] = None,
        path: Optional[str] = None,
        line: Optional[int] = None,
    ):
        self.message = message
        self.site = site
        self.path = path
        self.line = line
        super().__init__(self._describe())

    def _describe(self) -> str:
        location = self.path or ""
        if self.line is not None:
            location = f"{location}:{self.line}"
        prefix = f"Site '{self.site}'" if self.site else "Extraction failed"
        if location:
            return f"{prefix}: {location}: {self.message}"
        return f"{prefix}: {self.message}"

    def with_site(self, site: str, path: str) -> "ExtractionError":
        """Return a copy of this error annotated with its site and file."""
        return ExtractionError(self.message, site=site, path=path, line=self.line)
