"""Search, filter, sort and display helpers for material listings."""

import pathlib
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from urllib.parse import quote

from coursebrowser.constants import (
    ALL_OPTION,
    DEFAULT_BASE_URL,
    DEFAULT_FILE_ICON,
    FILE_ICONS,
    FOLDER_ICON,
    IMAGE_EXTENSIONS,
    PDF_EXTENSIONS,
    SIZE_UNITS,
    SORT_FIELDS,
    VIEWABLE_EXTENSIONS,
)
from coursebrowser.file_operations import name_sort_key
from coursebrowser.models import FileEntry, MaterialGroup


def format_file_size(num_bytes: int) -> str:
    """Format a byte count with 1024-based units.

    Args:
        num_bytes: Size in bytes

    Returns:
        Size rounded half-up to two decimals, e.g. "1.5 KB" or "0 Bytes"
    """
    if num_bytes <= 0:
        return "0 Bytes"

    index = 0
    while index < len(SIZE_UNITS) - 1 and num_bytes >= 1024 ** (index + 1):
        index += 1

    value = Decimal(num_bytes) / Decimal(1024**index)
    value = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    # normalize() drops trailing zeros; ":f" keeps "2048" out of exponent form
    number = f"{value.normalize():f}"
    return f"{number} {SIZE_UNITS[index]}"


def is_viewable(extension: str | None) -> bool:
    """Whether a file can be previewed inline rather than only downloaded."""
    if not extension:
        return False
    return extension.lower() in VIEWABLE_EXTENSIONS


def viewer_kind(extension: str | None) -> str | None:
    """Return "pdf" or "image" for viewable extensions, None otherwise."""
    if not extension:
        return None
    ext = extension.lower()
    if ext in PDF_EXTENSIONS:
        return "pdf"
    if ext in IMAGE_EXTENSIONS:
        return "image"
    return None


def file_icon(extension: str | None) -> str:
    if not extension:
        return FOLDER_ICON
    ext = extension.lower()
    for icon, extensions in FILE_ICONS.items():
        if ext in extensions:
            return icon
    return DEFAULT_FILE_ICON


def file_url(entry: FileEntry, data_root: pathlib.Path, base_url: str = DEFAULT_BASE_URL) -> str:
    """Build the public URL of a file below the data root.

    Args:
        entry: File to link to
        data_root: Root of the department tree
        base_url: URL prefix the data root is served under

    Returns:
        URL such as "/data/cs/algo1/smith/slides/lec1.pdf"
    """
    relative = entry.path.relative_to(data_root).as_posix()
    return f"{base_url.rstrip('/')}/{quote(relative)}"


def material_url(group: MaterialGroup) -> str:
    return "/" + "/".join(quote(part) for part in group.key) + "/"


@dataclass
class MaterialQuery:
    """Search, filter and sort settings for a department listing.

    Attributes:
        search: Case-insensitive substring matched against course and
            instructor names and the type key
        course: Course key to keep, or "all"
        material_type: Type key to keep, or "all"
        sort_by: One of "course", "instructor" or "type"
    """

    search: str = ""
    course: str = ALL_OPTION
    material_type: str = ALL_OPTION
    sort_by: str = "course"


def _matches_search(group: MaterialGroup, query: str) -> bool:
    course_name = (group.course_display_name or group.course).lower()
    instructor_name = (group.instructor_display_name or group.instructor).lower()
    return query in course_name or query in instructor_name or query in group.type.lower()


def filter_materials(
    materials: Iterable[MaterialGroup], query: MaterialQuery | None = None
) -> list[MaterialGroup]:
    """Apply a MaterialQuery to a department's material groups.

    Args:
        materials: Groups produced by the scanner
        query: Settings to apply (defaults to no filtering, sorted by course)

    Returns:
        Matching groups, sorted stably by the requested field

    Raises:
        ValueError: If query.sort_by is not a known field
    """
    query = query or MaterialQuery()
    if query.sort_by not in SORT_FIELDS:
        raise ValueError(f"Unknown sort field: {query.sort_by!r} (expected one of {SORT_FIELDS})")

    filtered = list(materials)

    if query.search:
        needle = query.search.lower()
        filtered = [m for m in filtered if _matches_search(m, needle)]

    if query.course != ALL_OPTION:
        filtered = [m for m in filtered if m.course == query.course]

    if query.material_type != ALL_OPTION:
        filtered = [m for m in filtered if m.type == query.material_type]

    filtered.sort(key=lambda m: name_sort_key(getattr(m, query.sort_by)))
    return filtered


def course_options(materials: Iterable[MaterialGroup]) -> list[tuple[str, str]]:
    """Unique course keys with the display name of their first group."""
    names: dict[str, str] = {}
    for group in materials:
        names.setdefault(group.course, group.course_display_name or group.course)
    return [(course, names[course]) for course in sorted(names)]


def type_options(materials: Iterable[MaterialGroup]) -> list[str]:
    return sorted({group.type for group in materials})


def results_label(count: int) -> str:
    return f"{count} {'result' if count == 1 else 'results'} found"


def file_count_label(count: int) -> str:
    return f"{count} file{'' if count == 1 else 's'}"
