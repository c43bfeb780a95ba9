"""Configuration loading — process-wide defaults and option merging."""

from __future__ import annotations

import logging
import os
import sys
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from project_sharedir.core.base import (
    DEFAULT_PROJECTDIR,
    InvalidConfig,
    ShareDirConfig,
)

DEFAULT_CONFIG_PATHS = [
    Path.home() / ".config" / "project-sharedir" / "config.toml",
    Path("sharedir.toml"),
]

DEBUG_ENV = "PROJECT_SHAREDIR_DEBUG"
ENV_OPTIONS = {
    "projectdir": "PROJECT_SHAREDIR_PROJECTDIR",
    "distname": "PROJECT_SHAREDIR_DISTNAME",
}
OPTION_NAMES = frozenset({"filename", "projectdir", "distname", "return_shape", "as_path"})

BUILTIN_DEFAULTS: dict[str, Any] = {"projectdir": DEFAULT_PROJECTDIR}

_TRUTHY = {"1", "true", "yes", "on"}


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Searches default paths if no explicit path is given.
    Returns an empty dict if no config file is found. The ``[defaults]``
    table holds accessor options; see get_process_defaults().
    """
    paths = [path] if path is not None else DEFAULT_CONFIG_PATHS

    for p in paths:
        if p.exists():
            with open(p, "rb") as f:
                return tomllib.load(f)

    return {}


def check_option_names(options: Mapping[str, Any]) -> None:
    unknown = sorted(set(options) - OPTION_NAMES)
    if unknown:
        raise TypeError(f"Unknown option(s): {', '.join(unknown)}")


def merge_options(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge option mappings left to right into a new dict.

    Later layers win. ``None`` values never override, so an omitted
    keyword argument leaves the lower layer's value in place.
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        merged.update({k: v for k, v in layer.items() if v is not None})
    return merged


def get_process_defaults(config: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Process-wide defaults: env vars → config.toml [defaults] → built-ins."""
    if config is None:
        config = load_config()
    from_file = dict(config.get("defaults", {}))
    check_option_names(from_file)
    from_env = {key: os.environ.get(var) or None for key, var in ENV_OPTIONS.items()}
    return merge_options(BUILTIN_DEFAULTS, from_file, from_env)


def make_config(options: Mapping[str, Any]) -> ShareDirConfig:
    """Validate merged options into an immutable ShareDirConfig.

    An unknown return shape raises UnknownReturnShape; anything else
    pydantic rejects is re-raised as InvalidConfig.
    """
    check_option_names(options)
    try:
        return ShareDirConfig(**options)
    except ValidationError as exc:
        raise InvalidConfig(str(exc)) from exc


def debug_enabled() -> bool:
    return os.environ.get(DEBUG_ENV, "").strip().lower() in _TRUTHY


def configure_debug_logging(logger_name: str = "project_sharedir") -> logging.Logger:
    """Send this package's debug messages to stderr."""
    logger = logging.getLogger(logger_name)
    if not any(getattr(h, "_sharedir_debug", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("[ProjectDistDir] %(message)s"))
        handler._sharedir_debug = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return logger
