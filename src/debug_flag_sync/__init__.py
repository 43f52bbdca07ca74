"""Package initializer for debug_flag_sync.

Exports the scanner, its configuration loader and the result types.
"""

from .config_loader import CheckConfig, load_config, parse_config
from .declaration_site import DeclarationSite
from .exceptions import (
    ConfigurationError,
    DebugFlagSyncError,
    ExtractionError,
    SiteUnreadable,
)
from .flag_names import is_valid_flag_name, normalize_flag_name
from .scanner import FlagRegistryScanner, compare_flag_sets
from .sync_report import SiteDifference, SyncReport

__all__ = [
    "CheckConfig",
    "load_config",
    "parse_config",
    "DeclarationSite",
    "ConfigurationError",
    "DebugFlagSyncError",
    "ExtractionError",
    "SiteUnreadable",
    "is_valid_flag_name",
    "normalize_flag_name",
    "FlagRegistryScanner",
    "compare_flag_sets",
    "SiteDifference",
    "SyncReport",
]
