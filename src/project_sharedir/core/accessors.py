"""Caller-facing surface — merge options, find the caller, build accessor pairs."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from project_sharedir.core.base import Accessors, InstalledLookup, ShareDirConfig
from project_sharedir.core.config import (
    check_option_names,
    get_process_defaults,
    make_config,
    merge_options,
)
from project_sharedir.core.devroot import DevRootDetector
from project_sharedir.core.resolver import build_dist_dir, build_dist_file


def caller_filename(depth: int = 1) -> Path:
    """Return the source file of the frame ``depth`` levels above our caller."""
    frame = inspect.currentframe()
    try:
        target = frame.f_back if frame is not None else None
        for _ in range(depth):
            if target is None:
                break
            target = target.f_back
        if target is None:
            raise RuntimeError("Cannot determine the calling file; pass filename=")
        return Path(target.f_code.co_filename).absolute()
    finally:
        # Frames hold references to their locals
        del frame


def resolve_config(
    filename: str | Path | None,
    defaults: Mapping[str, Any] | None,
    options: Mapping[str, Any],
    depth: int,
) -> ShareDirConfig:
    """Merge process defaults ⊕ ``defaults`` ⊕ ``options`` into a config."""
    check_option_names(options)
    if defaults:
        check_option_names(defaults)
    if filename is None and not (defaults or {}).get("filename"):
        filename = caller_filename(depth + 1)
    merged = merge_options(
        get_process_defaults(),
        defaults,
        options,
        {"filename": filename},
    )
    return make_config(merged)


def build_accessors(
    filename: str | Path | None = None,
    *,
    defaults: Mapping[str, Any] | None = None,
    detector: DevRootDetector | None = None,
    lookup: InstalledLookup | None = None,
    logger: logging.Logger | None = None,
    **options: Any,
) -> Accessors:
    """Build a ``(dist_dir, dist_file)`` pair for the calling module.

    Typical use at module level::

        dist_dir, dist_file = build_accessors(distname="An-Example")

    ``filename`` defaults to the caller's source file. ``options`` are
    ``projectdir``, ``distname``, ``return_shape`` and ``as_path``; they
    override ``defaults``, which override the process-wide defaults.
    """
    config = resolve_config(filename, defaults, options, depth=1)
    collaborators = {"detector": detector, "lookup": lookup, "logger": logger}
    return Accessors(
        build_dist_dir(config, **collaborators),
        build_dist_file(config, **collaborators),
    )


def dist_dir(*args: Any) -> Any:
    """Share dir for the calling module, resolved on every call."""
    config = resolve_config(None, None, {}, depth=1)
    return build_dist_dir(config)(*args)


def dist_file(*args: Any) -> Any:
    """Shared file for the calling module, resolved on every call."""
    config = resolve_config(None, None, {}, depth=1)
    return build_dist_file(config)(*args)
