"""Return-shape wrapping — normalize resolved paths before handing them back."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable

from project_sharedir.core.base import ReturnShape

Wrapper = Callable[[Any], Any]


def as_string(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return os.fspath(value)


def as_path(value: Any) -> Path | None:
    if value is None or isinstance(value, Path):
        return value
    return Path(value)


# Conversion only. Dev-mode accessors check the type on disk before
# wrapping; installed lookups hand back whatever they resolved.
as_dir = as_path
as_file = as_path

_WRAPPERS: dict[ReturnShape, Wrapper] = {
    ReturnShape.STR: as_string,
    ReturnShape.PATH: as_path,
    ReturnShape.DIR: as_dir,
    ReturnShape.FILE: as_file,
}


def get_wrapper(shape: ReturnShape | str | None) -> Wrapper:
    """Look up the wrapper for ``shape``.

    Called while building an accessor so an unknown shape fails there,
    not on first use. Every wrapper passes ``None`` through and returns
    values already in its target type unchanged.
    """
    return _WRAPPERS[ReturnShape.coerce(shape)]


def wrap_return(shape: ReturnShape | str | None, value: Any) -> Any:
    return get_wrapper(shape)(value)
