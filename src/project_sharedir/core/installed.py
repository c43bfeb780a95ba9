"""Installed share directories — where wheel data files land after install.

Data files shipped as ``<name>.data/data/share/<distname>/...`` in a wheel
are installed under the scheme's ``data`` path, so ``<prefix>/share/<distname>``.
The distribution's RECORD is consulted first since it knows exactly where
its files went; the interpreter prefixes are the fallback.
"""

from __future__ import annotations

import logging
import os
import sys
import sysconfig
from importlib import metadata
from pathlib import Path, PurePath, PurePosixPath

from project_sharedir.core.base import (
    NotAFileError,
    PermissionDeniedError,
    ShareDirNotFound,
)

log = logging.getLogger(__name__)

SHARE_SEGMENT = "share"


def join_under(root: Path, filename: str | PurePath) -> Path:
    """Join ``filename`` below ``root``; an absolute name loses its anchor."""
    rel = PurePath(filename)
    if rel.anchor:
        rel = PurePath(*rel.parts[1:])
    return root.joinpath(rel)


def check_readable_file(path: Path) -> Path:
    """Raise NotAFileError / PermissionDeniedError unless ``path`` is a readable file."""
    if not path.is_file():
        raise NotAFileError(path)
    if not os.access(path, os.R_OK):
        raise PermissionDeniedError(path)
    return path


def _default_prefixes() -> list[Path]:
    prefixes: list[Path] = []
    for candidate in (sysconfig.get_path("data"), sys.prefix, sys.base_prefix):
        if candidate and Path(candidate) not in prefixes:
            prefixes.append(Path(candidate))
    return prefixes


class InstalledShareDirs:
    """Default installed-mode lookup, queried by distribution name."""

    def __init__(
        self,
        prefixes: list[Path] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.prefixes = prefixes
        self.logger = logger or log

    def _from_record(self, distname: str) -> Path | None:
        try:
            dist = metadata.distribution(distname)
        except metadata.PackageNotFoundError:
            self.logger.debug("%s is not an installed distribution", distname)
            return None

        for entry in dist.files or []:
            parts = PurePosixPath(entry).parts
            for i in range(len(parts) - 2):
                if parts[i] == SHARE_SEGMENT and parts[i + 1] == distname:
                    located = Path(dist.locate_file(PurePosixPath(*parts[: i + 2])))
                    if located.is_dir():
                        return located.resolve()
        return None

    def _from_prefixes(self, distname: str) -> Path | None:
        prefixes = self.prefixes if self.prefixes is not None else _default_prefixes()
        for prefix in prefixes:
            candidate = prefix / SHARE_SEGMENT / distname
            if candidate.is_dir():
                return candidate
        return None

    def dist_dir(self, distname: str) -> str:
        if not distname:
            raise ShareDirNotFound("No distribution name given")

        found = self._from_record(distname) or self._from_prefixes(distname)
        if found is None:
            raise ShareDirNotFound(
                f"Failed to find share dir for dist '{distname}'",
            )
        self.logger.debug("Installed share dir for %s: %s", distname, found)
        return str(found)

    def dist_file(self, distname: str, filename: str) -> str:
        root = Path(self.dist_dir(distname))
        path = join_under(root, filename)
        if not path.exists():
            raise ShareDirNotFound(
                f"Failed to find shared file '{filename}' for dist '{distname}'",
                path,
            )
        return str(check_readable_file(path))


DEFAULT_LOOKUP = InstalledShareDirs()


def dist_dir(distname: str) -> str:
    return DEFAULT_LOOKUP.dist_dir(distname)


def dist_file(distname: str, filename: str) -> str:
    return DEFAULT_LOOKUP.dist_file(distname, filename)
