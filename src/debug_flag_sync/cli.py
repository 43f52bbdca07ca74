"""
Command-line entry point for the debug flag synchronization check.

Exit codes:
    0: All declaration sites are in sync
    1: Sites diverge, or undeclared flags are set in the environment
    2: Configuration error, unreadable site, or malformed site content
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from .config_loader import DEFAULT_CONFIG_NAME, load_config
from .exceptions import ConfigurationError, ExtractionError, SiteUnreadable
from .reporting import SyncReporter
from .scanner import FlagRegistryScanner

EXIT_OK = 0
EXIT_OUT_OF_SYNC = 1
EXIT_ERROR = 2


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="debug-flag-sync",
        description="Check that debug flag declarations are kept in sync across the codebase.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  %(prog)s                                  # use ./{DEFAULT_CONFIG_NAME}
  %(prog)s --config ci/debug_flags.yaml     # explicit configuration
  %(prog)s --env-prefix ROC_                # also check exported ROC_* variables
  %(prog)s --format json                    # machine-readable report
        """,
    )
    parser.add_argument(
        "--config",
        "-c",
        help=f"Site configuration file (default: {DEFAULT_CONFIG_NAME} in the root or working directory)",
    )
    parser.add_argument(
        "--root",
        help="Project root that site paths are relative to (default: the configuration's directory)",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Report format.",
    )
    parser.add_argument(
        "--jobs",
        "-j",
        type=int,
        default=1,
        help="Number of sites to read in parallel.",
    )
    parser.add_argument(
        "--env-prefix",
        action="append",
        default=[],
        metavar="PREFIX",
        help="Fail if an environment variable with this prefix is not a declared flag (repeatable).",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="List every site's flags.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level.",
    )
    parser.add_argument("--log-file", help="Also write DEBUG logs to this file.")
    return parser


def _configure_logging(level_name: str, log_file: Optional[str]) -> None:
    log_level = getattr(logging, level_name.upper(), logging.WARNING)
    logging.basicConfig(
        level=log_level, format="%(asctime)s - %(levelname)s - %(message)s", force=True
    )
    if log_file:
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)
        for handler in root_logger.handlers:
            handler.setLevel(log_level)
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
        )
        root_logger.addHandler(file_handler)


def main(args: Optional[List[str]] = None) -> int:
    parser = _create_parser()
    parsed_args = parser.parse_args(args)

    try:
        _configure_logging(parsed_args.log_level, parsed_args.log_file)
    except OSError as e:
        print(f"[ERROR] Cannot open log file {parsed_args.log_file}: {e}", file=sys.stderr)
        return EXIT_ERROR
    logger = logging.getLogger(__name__)

    try:
        config = load_config(parsed_args.config, parsed_args.root)
        scanner = FlagRegistryScanner.from_config(config, jobs=parsed_args.jobs)
        report = scanner.scan(environ=os.environ, env_prefixes=parsed_args.env_prefix)
    except ConfigurationError as e:
        logger.error("Invalid debug flag configuration")
        print(f"[ERROR] Configuration error:\n{e}", file=sys.stderr)
        return EXIT_ERROR
    except (SiteUnreadable, ExtractionError) as e:
        logger.debug("Scan aborted", exc_info=True)
        print(f"[ERROR] {e}", file=sys.stderr)
        return EXIT_ERROR

    if parsed_args.format == "json":
        print(SyncReporter.format_json(report))
    else:
        print(SyncReporter.format_text(report, verbose=parsed_args.verbose))

    return EXIT_OK if report.ok else EXIT_OUT_OF_SYNC


if __name__ == "__main__":
    sys.exit(main())
