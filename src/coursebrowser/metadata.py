"""Sidecar metadata loading and display-name resolution.

Each scope has an optional JSON document mapping directory names to display
records::

    <data-root>/dept.json                 department key -> {displayName, farsiName, aliases}
    <data-root>/type.json                 type key -> {displayName, description}
    <data-root>/<dept>/course.json        course key -> {displayName, farsiName, code, aliases}
    <data-root>/<dept>/instructor.json    instructor key -> {displayName, farsiName, email, web}

Documents are re-read on every call; nothing is cached.
"""

import pathlib
import re
from collections.abc import Callable, Mapping
from typing import Any

from coursebrowser.constants import (
    COURSE_FILE,
    DEPARTMENT_FILE,
    INSTRUCTOR_FILE,
    TYPE_FALLBACK_LABEL,
    TYPE_FILE,
)
from coursebrowser.file_operations import load_json_mapping
from coursebrowser.paths import resolve_data_root

_WORD_START = re.compile(r"(^|\s)(\S)")


def _root(data_root: pathlib.Path | None) -> pathlib.Path:
    return resolve_data_root() if data_root is None else pathlib.Path(data_root)


def load_department_data(data_root: pathlib.Path | None = None) -> dict[str, Any]:
    """Load dept.json from the data root."""
    return load_json_mapping(_root(data_root) / DEPARTMENT_FILE)


def load_type_data(data_root: pathlib.Path | None = None) -> dict[str, Any]:
    """Load type.json from the data root."""
    return load_json_mapping(_root(data_root) / TYPE_FILE)


def load_course_data(department: str, data_root: pathlib.Path | None = None) -> dict[str, Any]:
    """Load course.json of a department."""
    return load_json_mapping(_root(data_root) / department / COURSE_FILE)


def load_instructor_data(
    department: str, data_root: pathlib.Path | None = None
) -> dict[str, Any]:
    """Load instructor.json of a department."""
    return load_json_mapping(_root(data_root) / department / INSTRUCTOR_FILE)


def humanize_key(key: str) -> str:
    """Turn a directory key into a label.

    Underscores become spaces and the first letter of each word is upper-cased;
    the rest of each word is left alone.

    Examples:
        >>> humanize_key("data_structures")
        'Data Structures'
        >>> humanize_key("algo1")
        'Algo1'
    """
    return _WORD_START.sub(lambda m: m.group(1) + m.group(2).upper(), key.replace("_", " "))


def get_mapped_name(key: str, mapping: Mapping[str, Any]) -> str | None:
    """Return the non-empty displayName recorded for key, if any."""
    record = mapping.get(key)
    if not isinstance(record, Mapping):
        return None
    name = record.get("displayName")
    if isinstance(name, str) and name:
        return name
    return None


def display_name(
    key: str,
    mapping: Mapping[str, Any],
    fallback: Callable[[str], str] = humanize_key,
) -> str:
    """Resolve the label shown for a directory key.

    Args:
        key: Raw directory name
        mapping: Scope metadata loaded from a sidecar file
        fallback: Builds a label when the mapping has none

    Returns:
        The mapped displayName, or fallback(key)
    """
    name = get_mapped_name(key, mapping)
    return name if name is not None else fallback(key)


def type_display_name(key: str, mapping: Mapping[str, Any]) -> str:
    """Resolve a material type label.

    Unlike the other scopes, unknown types are labelled "etc" rather than
    derived from the key.
    """
    return display_name(key, mapping, fallback=lambda _key: TYPE_FALLBACK_LABEL)


def department_display_name(key: str, mapping: Mapping[str, Any]) -> str:
    """Resolve a department label, falling back to the upper-cased key."""
    return display_name(key, mapping, fallback=str.upper)


def get_department_display_name(dept_key: str, data_root: pathlib.Path | None = None) -> str:
    return department_display_name(dept_key, load_department_data(data_root))


def get_course_display_name(
    department: str, course_key: str, data_root: pathlib.Path | None = None
) -> str:
    return display_name(course_key, load_course_data(department, data_root))


def get_instructor_display_name(
    department: str, instructor_key: str, data_root: pathlib.Path | None = None
) -> str:
    return display_name(instructor_key, load_instructor_data(department, data_root))


def get_type_display_name(type_key: str, data_root: pathlib.Path | None = None) -> str:
    return type_display_name(type_key, load_type_data(data_root))
