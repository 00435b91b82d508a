"""
Data models for dependency extraction results.

Matcher results and failures are immutable (frozen) dataclasses;
FileDependencies is mutable so callers can build it up incrementally.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from emberdeps.constants import (
    CONTROLLER_NAMESPACE,
    TEMPLATE_NAMESPACE,
    VIEW_NAMESPACE,
    NAMESPACE_SEPARATOR,
    DEFAULT_FILE_KIND,
    FILE_KIND_EXTENSION_MAP,
)

if TYPE_CHECKING:
    from emberdeps.session import ExtractionSession


class UnsupportedFileKind(ValueError):
    """Raised when a file kind is neither 'script' nor 'template'."""

    def __init__(self, kind: object):
        super().__init__(f"Cannot parse type {kind!r}")
        self.kind = kind


class Namespace(Enum):
    """Categories of referenced dependencies."""
    CONTROLLER = CONTROLLER_NAMESPACE
    TEMPLATE = TEMPLATE_NAMESPACE
    VIEW = VIEW_NAMESPACE

    def qualify(self, short_name: str) -> str:
        """Build the fully-qualified name, e.g. 'controller:post'."""
        return f"{self.value}{NAMESPACE_SEPARATOR}{short_name}"


def split_full_name(full_name: str) -> tuple[Namespace, str]:
    """
    Split a fully-qualified name into its namespace and short name.

    Raises:
        ValueError: If the tag is missing or not a known namespace
    """
    tag, sep, short_name = full_name.partition(NAMESPACE_SEPARATOR)
    if not sep:
        raise ValueError(f"Not a fully-qualified name: {full_name!r}")
    return Namespace(tag), short_name


class FileKind(Enum):
    """Kinds of source files the extractor understands."""
    SCRIPT = "script"
    TEMPLATE = "template"

    @classmethod
    def from_extension(cls, ext: str) -> Optional["FileKind"]:
        """Map file extension to file kind, or None if unknown."""
        kind_str = FILE_KIND_EXTENSION_MAP.get(ext.lower())
        if kind_str:
            return cls(kind_str)
        return None

    @classmethod
    def coerce(cls, kind: Union["FileKind", str, None]) -> "FileKind":
        """
        Normalize a user-supplied kind.

        None means the default ('script'). Strings must match a member
        value exactly.

        Raises:
            UnsupportedFileKind: For anything else
        """
        if kind is None:
            return cls(DEFAULT_FILE_KIND)
        if isinstance(kind, cls):
            return kind
        if isinstance(kind, str):
            for member in cls:
                if member.value == kind:
                    return member
        raise UnsupportedFileKind(kind)


@dataclass(frozen=True)
class RenderOutlet:
    """Names collected from the this.render() calls of one renderTemplate."""
    controllers: tuple[str, ...] = ()
    templates: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.controllers or self.templates)


@dataclass(frozen=True)
class ExtractionFailure:
    """A file that could not be analyzed."""
    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"

    def to_dict(self) -> dict:
        """JSON-serializable representation."""
        return {"path": str(self.path), "message": self.message}

    @classmethod
    def from_dict(cls, data: dict) -> "ExtractionFailure":
        """Reconstruct from dictionary."""
        return cls(path=Path(data["path"]), message=data["message"])


@dataclass
class FileDependencies:
    """Dependencies referenced by a single file."""
    path: Optional[Path]
    file_kind: FileKind
    controllers: dict[str, str] = field(default_factory=dict)
    templates: dict[str, str] = field(default_factory=dict)
    views: dict[str, str] = field(default_factory=dict)
    names: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"FileDependencies({self.path}, {len(self.all_names)} names)"

    @classmethod
    def from_session(
        cls,
        session: "ExtractionSession",
        path: Optional[Path] = None,
    ) -> "FileDependencies":
        """Snapshot the results of a finished extraction session."""
        return cls(
            path=path,
            file_kind=session.file_kind,
            controllers=dict(session.controllers),
            templates=dict(session.templates),
            views=dict(session.views),
            names=session.ordered_names(),
        )

    @property
    def all_names(self) -> list[str]:
        """Ordered names with repeats removed, keeping first occurrences."""
        return list(dict.fromkeys(self.names))

    @property
    def is_empty(self) -> bool:
        return not (self.controllers or self.templates or self.views)

    def to_dict(self) -> dict:
        """JSON-serializable representation."""
        return {
            "path": str(self.path) if self.path is not None else None,
            "file_kind": self.file_kind.value,
            "controllers": self.controllers,
            "templates": self.templates,
            "views": self.views,
            "names": self.names,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FileDependencies":
        """Reconstruct from dictionary."""
        path = data.get("path")
        return cls(
            path=Path(path) if path is not None else None,
            file_kind=FileKind(data["file_kind"]),
            controllers=dict(data.get("controllers", {})),
            templates=dict(data.get("templates", {})),
            views=dict(data.get("views", {})),
            names=list(data.get("names", [])),
        )
