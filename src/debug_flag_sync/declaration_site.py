"""
Declaration sites: named locations that declare or reference debug flags.

A site is either a single file or a directory scanned for matching files.
Reading is a pure snapshot of the current tree; nothing is ever written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, List, Set, Tuple, Union

from .exceptions import ExtractionError, SiteUnreadable
from .extractors import FlagExtractor

logger = logging.getLogger(__name__)

# Never descended into when scanning directory sites
SKIP_DIRS = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        "__pycache__",
        ".pytest_cache",
        ".mypy_cache",
        ".venv",
        "node_modules",
        "target",
    }
)


@dataclass(frozen=True)
class DeclarationSite:
    """A named source of truth for a set of flag names."""

    name: str
    path: Path
    extractor: FlagExtractor
    include: Tuple[str, ...] = ("**/*",)
    exclude: Tuple[str, ...] = ()

    def resolve(self, root: Union[str, Path]) -> Path:
        path = Path(self.path)
        return path if path.is_absolute() else Path(root) / path

    def iter_files(self, root: Union[str, Path]) -> List[Path]:
        """List the files backing this site, in a stable order."""
        path = self.resolve(root)
        if not path.exists():
            raise SiteUnreadable(self.name, path, "path does not exist")
        if path.is_file():
            return [path]
        if not path.is_dir():
            raise SiteUnreadable(self.name, path, "not a regular file or directory")

        try:
            excluded: Set[Path] = set()
            for pattern in self.exclude:
                excluded.update(path.glob(pattern))
            files: Set[Path] = set()
            for pattern in self.include:
                for candidate in path.glob(pattern):
                    relative = candidate.relative_to(path)
                    if SKIP_DIRS.intersection(relative.parts[:-1]):
                        continue
                    if not candidate.is_file():
                        continue
                    # A directory match excludes everything beneath it
                    if candidate in excluded or excluded.intersection(candidate.parents):
                        continue
                    files.add(candidate)
        except OSError as e:
            raise SiteUnreadable(self.name, path, e) from e

        if not files:
            logger.warning(f"Site '{self.name}' matched no files under {path}")
        else:
            logger.debug(f"Site '{self.name}' scanning {len(files)} file(s) under {path}")
        return sorted(files)

    def read_flags(self, root: Union[str, Path] = ".") -> FrozenSet[str]:
        """
        Read every backing file and extract the union of their flag names.

        Raises:
            SiteUnreadable: the path is missing or cannot be read
            ExtractionError: a file does not match the site's declaration syntax
        """
        names: Set[str] = set()
        for file_path in self.iter_files(root):
            try:
                content = file_path.read_text(encoding="utf-8")
            except UnicodeDecodeError as e:
                raise ExtractionError(
                    f"File is not valid UTF-8: {e}", site=self.name, path=str(file_path)
                ) from e
            except OSError as e:
                raise SiteUnreadable(self.name, file_path, e) from e

            try:
                names.update(self.extractor.extract(content))
            except ExtractionError as e:
                raise e.with_site(self.name, str(file_path)) from e

        logger.info(f"Site '{self.name}' declares {len(names)} flag(s)")
        return frozenset(names)
