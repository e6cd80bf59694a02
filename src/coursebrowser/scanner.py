"""Walks the department/course/instructor/type hierarchy under the data root."""

import logging
import pathlib

import pathspec

from coursebrowser.file_operations import (
    filter_ignored,
    get_ignore_spec,
    is_directory,
    list_directory,
    list_subdirectories,
)
from coursebrowser.metadata import (
    display_name,
    load_course_data,
    load_instructor_data,
    load_type_data,
    type_display_name,
)
from coursebrowser.models import FileEntry, MaterialGroup
from coursebrowser.paths import resolve_data_root

logger = logging.getLogger(__name__)


def _root(data_root: pathlib.Path | None) -> pathlib.Path:
    return resolve_data_root() if data_root is None else pathlib.Path(data_root)


def _is_plain_name(component: str) -> bool:
    """Check that a path component cannot leave its parent directory."""
    if component in ("", ".", ".."):
        return False
    return "/" not in component and "\\" not in component


def _is_ignored_path(spec: pathspec.PathSpec, components: tuple[str, ...]) -> bool:
    """Check every directory level of a relative path against the ignore spec."""
    return any(
        spec.match_file("/".join(components[: depth + 1]) + "/") for depth in range(len(components))
    )


def _visible_subdirectories(
    directory: pathlib.Path, spec: pathspec.PathSpec, root: pathlib.Path
) -> list[FileEntry]:
    return filter_ignored(list_subdirectories(directory), spec, root)


def _department_path(
    department: str, root: pathlib.Path, spec: pathspec.PathSpec
) -> pathlib.Path | None:
    """Return the department directory if it may be browsed, else None."""
    if not _is_plain_name(department):
        logger.warning("Invalid department name: %r", department)
        return None
    if _is_ignored_path(spec, (department,)):
        logger.debug("Ignored department: %s", department)
        return None

    dept_path = root / department
    if not is_directory(dept_path):
        return None
    return dept_path


def scan_departments(data_root: pathlib.Path | None = None) -> list[str]:
    """List department directory names under the data root.

    Args:
        data_root: Root of the department tree (resolved when omitted)

    Returns:
        Department keys sorted by name, empty if the root does not exist
    """
    root = _root(data_root)
    if not is_directory(root):
        logger.warning("Data directory not found: %s", root)
        return []

    spec = get_ignore_spec(root)
    return [entry.name for entry in _visible_subdirectories(root, spec, root)]


def get_department_courses(department: str, data_root: pathlib.Path | None = None) -> list[str]:
    """List course directory names of a department, sorted by name."""
    root = _root(data_root)
    spec = get_ignore_spec(root)
    dept_path = _department_path(department, root, spec)
    if dept_path is None:
        return []

    return [entry.name for entry in _visible_subdirectories(dept_path, spec, root)]


def get_department_materials(
    department: str, data_root: pathlib.Path | None = None
) -> list[MaterialGroup]:
    """Collect one MaterialGroup per leaf directory of a department.

    Walks exactly four levels (course, instructor, type, files). Courses,
    instructors or types without subdirectories contribute nothing. A
    directory that cannot be read is logged by the enumerator and treated
    as empty, so the rest of the department is still scanned.

    Args:
        department: Department directory name
        data_root: Root of the department tree (resolved when omitted)

    Returns:
        Groups ordered by course, then instructor, then type name
    """
    root = _root(data_root)
    spec = get_ignore_spec(root)
    dept_path = _department_path(department, root, spec)
    if dept_path is None:
        return []

    course_data = load_course_data(department, root)
    instructor_data = load_instructor_data(department, root)
    type_data = load_type_data(root)

    materials: list[MaterialGroup] = []
    for course in _visible_subdirectories(dept_path, spec, root):
        for instructor in _visible_subdirectories(course.path, spec, root):
            for material_type in _visible_subdirectories(instructor.path, spec, root):
                files = filter_ignored(list_directory(material_type.path), spec, root)
                materials.append(
                    MaterialGroup(
                        department=department,
                        course=course.name,
                        instructor=instructor.name,
                        type=material_type.name,
                        files=tuple(files),
                        course_display_name=display_name(course.name, course_data),
                        instructor_display_name=display_name(instructor.name, instructor_data),
                        type_display_name=type_display_name(material_type.name, type_data),
                    )
                )

    logger.debug("Found %d material groups in %s", len(materials), department)
    return materials


def get_materials_at_path(
    department: str,
    course: str,
    instructor: str,
    material_type: str,
    data_root: pathlib.Path | None = None,
) -> list[FileEntry]:
    """List the files of a single leaf directory.

    Args:
        department: Department directory name
        course: Course directory name
        instructor: Instructor directory name
        material_type: Material type directory name
        data_root: Root of the department tree (resolved when omitted)

    Returns:
        Leaf entries sorted by name, empty if the leaf does not exist or
        any level of its path is ignored
    """
    components = (department, course, instructor, material_type)
    if not all(_is_plain_name(component) for component in components):
        logger.warning("Invalid material path: %s", "/".join(components))
        return []

    root = _root(data_root)
    spec = get_ignore_spec(root)
    if _is_ignored_path(spec, components):
        logger.debug("Ignored material path: %s", "/".join(components))
        return []

    return filter_ignored(list_directory(root.joinpath(*components)), spec, root)
