"""Base contract — configuration, return shapes, collaborators and errors."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path, PurePath
from typing import Any, Callable, NamedTuple, Protocol

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_PROJECTDIR = "share"


class ShareDirError(Exception):
    """Base class for every error raised by project_sharedir."""


class NotAFileError(ShareDirError, OSError):
    """A dist file exists but is not a regular file."""

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        super().__init__(f"Found dist_file '{self.path}', but not a file")


class PermissionDeniedError(ShareDirError, PermissionError):
    """A dist file exists but cannot be read by this process."""

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        super().__init__(f"File '{self.path}', no read permissions")


class UnknownReturnShape(ShareDirError, ValueError):
    """The configured return shape is not one this package knows how to build."""

    def __init__(self, shape: Any) -> None:
        self.shape = shape
        valid = ", ".join(s.value for s in ReturnShape)
        super().__init__(f"Unknown return type {shape!r} (expected one of: {valid})")


class BadArity(ShareDirError, TypeError):
    """A pre-bound accessor was called with the wrong arguments."""


class ShareDirNotFound(ShareDirError, LookupError):
    """No installed share directory (or file within it) could be found."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = None if path is None else str(path)
        super().__init__(message)


class InvalidConfig(ShareDirError, ValueError):
    """Accessor options failed validation."""


class ReturnShape(StrEnum):
    STR = "str"  # plain string
    PATH = "path"  # pathlib.Path
    DIR = "dir"  # pathlib.Path, chosen for dist_dir by as_path
    FILE = "file"  # pathlib.Path, chosen for dist_file by as_path

    @classmethod
    def coerce(cls, value: ReturnShape | str | None) -> ReturnShape:
        """Turn a user-supplied shape name into a member, or raise UnknownReturnShape."""
        if value is None:
            return cls.STR
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownReturnShape(value) from None


class AccessorKind(StrEnum):
    DIR = "dist_dir"
    FILE = "dist_file"


class ShareDirConfig(BaseModel):
    """Fully merged options for building one accessor.

    Built once per accessor and never mutated; use ``model_copy(update=...)``
    to derive a variant.
    """

    model_config = ConfigDict(frozen=True)

    filename: Path
    projectdir: str = DEFAULT_PROJECTDIR
    distname: str | None = None
    return_shape: ReturnShape | None = None
    as_path: bool = False

    def __init__(self, **data: Any) -> None:
        # Coerced before validation so UnknownReturnShape is not wrapped
        # in a pydantic ValidationError.
        if data.get("return_shape") is not None:
            data["return_shape"] = ReturnShape.coerce(data["return_shape"])
        super().__init__(**data)

    @field_validator("filename", mode="before")
    @classmethod
    def _filename_not_empty(cls, v: Any) -> Any:
        if v is None or str(v) == "":
            raise ValueError("filename must be a non-empty path")
        return v

    @field_validator("filename")
    @classmethod
    def _filename_absolute(cls, v: Path) -> Path:
        return v if v.is_absolute() else v.absolute()

    @field_validator("projectdir")
    @classmethod
    def _projectdir_relative(cls, v: str) -> str:
        if not v:
            raise ValueError("projectdir must not be empty")
        parts = PurePath(v)
        if parts.is_absolute() or parts.anchor:
            raise ValueError(f"projectdir must be a relative path, got {v!r}")
        if ".." in parts.parts:
            raise ValueError(f"projectdir must not traverse upwards, got {v!r}")
        return v

    @field_validator("distname")
    @classmethod
    def _distname_blank_is_unset(cls, v: str | None) -> str | None:
        return v or None

    @field_validator("return_shape", mode="before")
    @classmethod
    def _known_shape(cls, v: Any) -> Any:
        if v is None:
            return None
        return ReturnShape.coerce(v)

    def shape_for(self, kind: AccessorKind) -> ReturnShape:
        """Return shape for an accessor of ``kind``.

        ``as_path`` picks the flavored path type matching the accessor;
        an explicit ``return_shape`` always wins.
        """
        if self.return_shape is not None:
            return self.return_shape
        if self.as_path:
            return ReturnShape.DIR if kind is AccessorKind.DIR else ReturnShape.FILE
        return ReturnShape.STR


class InstalledLookup(Protocol):
    """Where installed shared data lives, queried by distribution name."""

    def dist_dir(self, distname: str) -> str | Path: ...

    def dist_file(self, distname: str, filename: str) -> str | Path: ...


DevRootPredicate = Callable[[Path], bool]


class Accessors(NamedTuple):
    dist_dir: Callable[..., Any]
    dist_file: Callable[..., Any]
