"""Development-root detection — walk upward looking for a project checkout."""

from __future__ import annotations

import logging
import site
import sysconfig
from collections.abc import Iterable, Iterator
from pathlib import Path

from project_sharedir.core.base import DevRootPredicate

log = logging.getLogger(__name__)

VCS_MARKERS = (".git", ".hg", ".svn", ".bzr", "_darcs")
BUILD_MARKERS = (
    "pyproject.toml",
    "setup.py",
    "setup.cfg",
    "Makefile.PL",
    "Build.PL",
    "dist.ini",
)
PACKAGING_MARKERS = ("MANIFEST.in", "MANIFEST", "Changes", "CHANGELOG.md")

DEFAULT_MARKERS = VCS_MARKERS + BUILD_MARKERS + PACKAGING_MARKERS


def _exists(path: Path) -> bool:
    try:
        return path.exists()
    except OSError:
        return False


def _same_dir(a: Path, b: Path) -> bool:
    try:
        return a.resolve() == b.resolve()
    except OSError:
        return False


def has_marker(directory: Path, markers: Iterable[str] = DEFAULT_MARKERS) -> str | None:
    """Return the first marker name present in ``directory``, if any."""
    for name in markers:
        if _exists(directory / name):
            return name
    return None


def _install_dirs() -> list[Path]:
    """Directories packages get installed into; these are never dev roots."""
    dirs: list[Path] = []
    for key in ("purelib", "platlib"):
        try:
            dirs.append(Path(sysconfig.get_path(key)))
        except KeyError:
            continue
    try:
        dirs.extend(Path(p) for p in site.getsitepackages())
    except AttributeError:
        # virtualenv's legacy site.py has no getsitepackages()
        pass
    user_site = site.getusersitepackages() if site.ENABLE_USER_SITE else None
    if user_site:
        dirs.append(Path(user_site))
    return dirs


def is_home_dir(directory: Path) -> bool:
    try:
        home = Path.home()
    except (KeyError, RuntimeError):
        return False
    return _same_dir(directory, home)


def is_install_dir(directory: Path) -> bool:
    if directory.name in ("site-packages", "dist-packages"):
        return True
    return any(_same_dir(directory, d) for d in _install_dirs() if _exists(d))


NEGATIVE_HEURISTICS: tuple[DevRootPredicate, ...] = (is_home_dir, is_install_dir)


def looks_like_dev_root(
    directory: Path,
    markers: Iterable[str] = DEFAULT_MARKERS,
    negative: Iterable[DevRootPredicate] = NEGATIVE_HEURISTICS,
    logger: logging.Logger | None = None,
) -> bool:
    """Default heuristic: a project marker is present and no veto applies.

    Positive markers are VCS directories, build manifests and packaging
    metadata. The home directory and installation targets such as
    site-packages are vetoed even when they carry a marker.
    """
    logger = logger or log
    found = has_marker(directory, markers)
    if found is None:
        return False
    for veto in negative:
        if veto(directory):
            logger.debug("%s has %s but is excluded by %s", directory, found, veto.__name__)
            return False
    logger.debug("%s matched marker %s", directory, found)
    return True


def iter_ancestors(start: Path) -> Iterator[Path]:
    """Yield ``start`` then each parent up to and including the filesystem root."""
    yield start
    yield from start.parents


class DevRootDetector:
    """Finds the nearest ancestor of a path that looks like a project checkout.

    The predicate is any ``Callable[[Path], bool]``; it defaults to
    :func:`looks_like_dev_root`. Errors raised by the predicate while probing
    a directory (unreadable parents, broken mounts) count as "no match".
    """

    def __init__(
        self,
        predicate: DevRootPredicate | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.logger = logger or log
        if predicate is None:
            def predicate(directory: Path) -> bool:
                return looks_like_dev_root(directory, logger=self.logger)

        self.predicate = predicate

    def _matches(self, directory: Path) -> bool:
        try:
            return bool(self.predicate(directory))
        except OSError as exc:
            self.logger.debug("Skipping unreadable %s: %s", directory, exc)
            return False

    def find(self, start: str | Path) -> Path | None:
        start = Path(start)
        if not start.is_absolute():
            start = start.absolute()
        if _exists(start) and not start.is_dir():
            start = start.parent

        for directory in iter_ancestors(start):
            if self._matches(directory):
                self.logger.debug("Found dev root %s (from %s)", directory, start)
                return directory

        self.logger.debug("No dev root above %s", start)
        return None


def find_dev_root(
    start: str | Path,
    predicate: DevRootPredicate | None = None,
    logger: logging.Logger | None = None,
) -> Path | None:
    """Return the nearest ancestor of ``start`` that looks like a dev root, or None."""
    return DevRootDetector(predicate, logger).find(start)
