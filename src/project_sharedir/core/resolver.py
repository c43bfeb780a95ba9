"""Accessor builders — project-local share dir in a checkout, installed one otherwise.

Each builder decides once, at build time, which mode applies:

* dev mode: the caller's file sits below a dev root that has a
  ``<root>/<projectdir>`` directory. The accessor always answers from there,
  whatever distribution name it is asked about. A checkout has one project
  root, so a wrong distname only shows up once the code is installed.
* installed mode: everything is delegated to an :class:`InstalledLookup`,
  with the distribution name pre-bound when the config pins one.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from project_sharedir.core import installed
from project_sharedir.core.base import (
    AccessorKind,
    BadArity,
    InstalledLookup,
    ShareDirConfig,
)
from project_sharedir.core.devroot import DevRootDetector
from project_sharedir.core.installed import check_readable_file, join_under
from project_sharedir.core.shapes import get_wrapper

log = logging.getLogger(__name__)


def devel_sharedir(
    filename: str | Path,
    projectdir: str,
    detector: DevRootDetector | None = None,
    logger: logging.Logger | None = None,
) -> Path | None:
    """Return ``<devroot>/<projectdir>`` for ``filename`` if it exists, else None."""
    logger = logger or log
    detector = detector or DevRootDetector(logger=logger)

    logger.debug("Working on: %s", filename)
    root = detector.find(Path(filename).parent)
    if root is None:
        return None

    candidate = root / projectdir
    if candidate.is_dir():
        logger.debug("ISDEV : exists : <devroot>/%s > %s", projectdir, candidate)
        return candidate

    logger.debug("ISPROD: does not exist : <devroot>/%s > %s", projectdir, candidate)
    return None


def build_dist_dir(
    config: ShareDirConfig,
    *,
    detector: DevRootDetector | None = None,
    lookup: InstalledLookup | None = None,
    logger: logging.Logger | None = None,
) -> Callable[..., Any]:
    """Build a ``dist_dir`` accessor for ``config``.

    In dev mode the accessor ignores its arguments. In installed mode it
    takes a distribution name, or nothing when ``config.distname`` is set.
    """
    wrap = get_wrapper(config.shape_for(AccessorKind.DIR))
    root = devel_sharedir(config.filename, config.projectdir, detector, logger)

    if root is not None:

        def dist_dir(*args: Any, **kwargs: Any) -> Any:
            return wrap(root)

        return dist_dir

    lookup = lookup or installed.DEFAULT_LOOKUP
    distname = config.distname

    if distname is None:

        def dist_dir(distname: str) -> Any:
            return wrap(lookup.dist_dir(distname))

        return dist_dir

    def dist_dir(*args: Any) -> Any:
        if args:
            raise BadArity(
                "dist_dir takes no arguments, due to distname being specified"
            )
        return wrap(lookup.dist_dir(distname))

    return dist_dir


def _pick_filename(args: tuple[Any, ...], prebound: bool) -> Any:
    if prebound and len(args) in (1, 2):
        # (filename) or (ignored distname, filename)
        filename = args[-1]
    elif not prebound and len(args) == 2:
        filename = args[1]
    else:
        filename = None
    if filename is None:
        expected = "a filename" if prebound else "a distname and a filename"
        raise BadArity(f"dist_file takes {expected}, got {len(args)} argument(s)")
    return filename


def build_dist_file(
    config: ShareDirConfig,
    *,
    detector: DevRootDetector | None = None,
    lookup: InstalledLookup | None = None,
    logger: logging.Logger | None = None,
) -> Callable[..., Any]:
    """Build a ``dist_file`` accessor for ``config``.

    The dev-mode accessor returns None for a missing file and raises
    NotAFileError or PermissionDeniedError for something it cannot hand
    back as a readable file.
    """
    wrap = get_wrapper(config.shape_for(AccessorKind.FILE))
    root = devel_sharedir(config.filename, config.projectdir, detector, logger)
    distname = config.distname

    if root is not None:
        prebound = distname is not None

        def dist_file(*args: Any) -> Any:
            filename = _pick_filename(args, prebound)
            path = join_under(root, filename).absolute()
            if not path.exists():
                return None
            return wrap(check_readable_file(path))

        return dist_file

    lookup = lookup or installed.DEFAULT_LOOKUP

    if distname is None:

        def dist_file(distname: str, filename: str) -> Any:
            return wrap(lookup.dist_file(distname, filename))

        return dist_file

    def dist_file(*args: Any) -> Any:
        if len(args) != 1 or args[0] is None:
            raise BadArity(
                "dist_file takes only one argument, a filename, "
                "due to distname being specified"
            )
        return wrap(lookup.dist_file(distname, args[0]))

    return dist_file
