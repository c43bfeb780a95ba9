"""Set-and-forget access to a project's ``share/`` directory.

During development the accessors return ``<project root>/share``; once the
package is installed they return wherever the installed data files went::

    from project_sharedir import build_accessors

    dist_dir, dist_file = build_accessors(distname="An-Example")

    templates = dist_dir()
    schema = dist_file("schema/scoring.yaml")
"""

from __future__ import annotations

import logging

from project_sharedir.core.accessors import build_accessors, dist_dir, dist_file
from project_sharedir.core.base import (
    Accessors,
    BadArity,
    InvalidConfig,
    NotAFileError,
    PermissionDeniedError,
    ReturnShape,
    ShareDirConfig,
    ShareDirError,
    ShareDirNotFound,
    UnknownReturnShape,
)
from project_sharedir.core.config import configure_debug_logging, debug_enabled
from project_sharedir.core.devroot import DevRootDetector, find_dev_root, looks_like_dev_root
from project_sharedir.core.resolver import build_dist_dir, build_dist_file

logging.getLogger(__name__).addHandler(logging.NullHandler())

if debug_enabled():
    configure_debug_logging(__name__)

__all__ = [
    "Accessors",
    "BadArity",
    "DevRootDetector",
    "InvalidConfig",
    "NotAFileError",
    "PermissionDeniedError",
    "ReturnShape",
    "ShareDirConfig",
    "ShareDirError",
    "ShareDirNotFound",
    "UnknownReturnShape",
    "build_accessors",
    "build_dist_dir",
    "build_dist_file",
    "dist_dir",
    "dist_file",
    "find_dev_root",
    "looks_like_dev_root",
]
