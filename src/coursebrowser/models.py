"""Data models for coursebrowser."""

import pathlib
from dataclasses import dataclass
from enum import Enum


class EntryKind(str, Enum):
    """Filesystem object classification."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class FileEntry:
    """One object found directly inside a directory.

    Attributes:
        name: Base name of the entry
        path: Resolved filesystem path
        kind: Whether the entry is a file or a directory
        size: Size in bytes (files only)
        extension: Name suffix from the last dot, e.g. ".pdf" (files only)
    """

    name: str
    path: pathlib.Path
    kind: EntryKind
    size: int | None = None
    extension: str | None = None

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(frozen=True)
class MaterialGroup:
    """Files of one department/course/instructor/type leaf directory.

    The four keys are raw directory names; together they identify the leaf.
    Display names are resolved from sidecar metadata at scan time.

    Attributes:
        department: Department directory name
        course: Course directory name
        instructor: Instructor directory name
        type: Material type directory name
        files: Leaf entries sorted by name
        course_display_name: Human-readable course label
        instructor_display_name: Human-readable instructor label
        type_display_name: Human-readable material type label
    """

    department: str
    course: str
    instructor: str
    type: str
    files: tuple[FileEntry, ...] = ()
    course_display_name: str | None = None
    instructor_display_name: str | None = None
    type_display_name: str | None = None

    @property
    def key(self) -> tuple[str, str, str, str]:
        return (self.department, self.course, self.instructor, self.type)
