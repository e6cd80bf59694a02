"""CourseBrowser: browse a tree of academic course materials.

This package scans a department/course/instructor/type directory tree,
attaches display names from sidecar JSON files, and renders searchable
listings and Markdown pages for it.
"""

from coursebrowser.cli import main
from coursebrowser.models import EntryKind, FileEntry, MaterialGroup
from coursebrowser.scanner import (
    get_department_materials,
    get_materials_at_path,
    scan_departments,
)

__version__ = "0.1.0"
__all__ = [
    "main",
    "EntryKind",
    "FileEntry",
    "MaterialGroup",
    "get_department_materials",
    "get_materials_at_path",
    "scan_departments",
]
