"""Markdown page generation for the browsable materials site."""

import logging
import pathlib
import re
from collections import defaultdict
from collections.abc import Iterable
from urllib.parse import quote

from tqdm import tqdm

from coursebrowser.constants import DEFAULT_BASE_URL
from coursebrowser.listing import (
    file_count_label,
    file_icon,
    file_url,
    format_file_size,
    is_viewable,
    results_label,
)
from coursebrowser.metadata import department_display_name, load_department_data
from coursebrowser.models import FileEntry, MaterialGroup
from coursebrowser.paths import resolve_data_root
from coursebrowser.scanner import get_department_materials, scan_departments

logger = logging.getLogger(__name__)

INDEX_PAGE = "index.md"

_MARKDOWN_SPECIAL = re.compile(r"([\\`*_\[\]<>#|])")


def generate_gfm_anchor(heading_text: str) -> str:
    """Generate a GitHub-Flavored Markdown anchor from heading text.

    Args:
        heading_text: The heading text (without # prefix)

    Returns:
        Anchor slug matching GFM behavior

    Examples:
        >>> generate_gfm_anchor("Data Structures (CS 201)")
        'data-structures-cs-201'
    """
    # Remove backticks and lowercase
    slug = heading_text.replace("`", "").lower()
    # Replace spaces and special chars with hyphens
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_]+", "-", slug)
    # Remove leading/trailing hyphens
    slug = slug.strip("-")
    return slug


def escape_markdown(text: str) -> str:
    """Escape text so it renders literally in headings, links and table cells.

    Examples:
        >>> escape_markdown("C++ [Advanced] | *Lab*")
        'C++ \\\\[Advanced\\\\] \\\\| \\\\*Lab\\\\*'
    """
    return _MARKDOWN_SPECIAL.sub(r"\\\1", text).replace("\n", " ")


def code_span(text: str) -> str:
    # Backticks cannot be escaped inside a code span
    return "`" + text.replace("`", "'") + "`"


def page_link(*parts: str) -> str:
    """Build a relative link to the index page below the given directories."""
    return "/".join(quote(part) for part in (*parts, INDEX_PAGE))


def generate_department_cards(departments: Iterable[tuple[str, str, str | None]]) -> str:
    """Render the landing page list of departments.

    Args:
        departments: (key, display name, optional description) triples

    Returns:
        Markdown-formatted cards, one per department
    """
    cards = ""
    for key, name, description in departments:
        cards += f"### 🎓 {escape_markdown(name)}\n\n"
        if description:
            cards += f"{escape_markdown(description)}\n\n"
        cards += f"[View Materials →]({page_link(key)})\n\n"
    return cards


def generate_material_card(group: MaterialGroup) -> str:
    course = escape_markdown(group.course_display_name or group.course)
    instructor = escape_markdown(group.instructor_display_name or group.instructor)
    badge = code_span(group.type_display_name or group.type)
    link = page_link(group.course, group.instructor, group.type)
    return (
        f"- [**{course}**]({link}) · 👤 {instructor} · "
        f"📁 {file_count_label(len(group.files))} · {badge}\n"
    )


def generate_department_page(
    department: str, department_name: str, materials: list[MaterialGroup]
) -> str:
    """Render a department page with its material groups grouped by course.

    Args:
        department: Department key
        department_name: Department display name
        materials: Groups from the scanner, in scan order

    Returns:
        Markdown page content
    """
    page = f"# {escape_markdown(department_name)}\n\n"
    page += f"📊 {results_label(len(materials))}\n\n"

    if not materials:
        page += "No materials found matching your criteria.\n"
        return page

    by_course: dict[str, list[MaterialGroup]] = defaultdict(list)
    for group in materials:
        by_course[group.course].append(group)

    page += "## Courses\n\n"
    for groups in by_course.values():
        heading = groups[0].course_display_name or groups[0].course
        page += f"- [{escape_markdown(heading)}](#{generate_gfm_anchor(heading)})\n"
    page += "\n---\n\n"

    for groups in by_course.values():
        page += f"## {escape_markdown(groups[0].course_display_name or groups[0].course)}\n\n"
        for group in groups:
            page += generate_material_card(group)
        page += "\n"

    logger.debug("Rendered %s with %d groups", department, len(materials))
    return page


def generate_file_table(
    files: Iterable[FileEntry], data_root: pathlib.Path, base_url: str = DEFAULT_BASE_URL
) -> str:
    """Render a leaf directory listing as a Markdown table.

    Args:
        files: Entries of the leaf directory
        data_root: Root of the department tree, for building URLs
        base_url: URL prefix the data root is served under

    Returns:
        Markdown table with icon, name, size and actions
    """
    table = "| | Name | Size | Actions |\n"
    table += "|---|------|------|---------|\n"

    for entry in files:
        if entry.is_dir:
            table += f"| {file_icon(None)} | {escape_markdown(entry.name)} | - | |\n"
            continue
        url = file_url(entry, data_root, base_url)
        actions = f"[Download]({url})"
        if is_viewable(entry.extension):
            actions = f"[View]({url}) · {actions}"
        table += (
            f"| {file_icon(entry.extension)} | {escape_markdown(entry.name)} | "
            f"{format_file_size(entry.size or 0)} | {actions} |\n"
        )

    return table


def generate_material_page(
    group: MaterialGroup, data_root: pathlib.Path, base_url: str = DEFAULT_BASE_URL
) -> str:
    course = escape_markdown(group.course_display_name or group.course)
    instructor = escape_markdown(group.instructor_display_name or group.instructor)
    page = f"# {course}\n\n"
    page += f"👤 {instructor} · {code_span(group.type_display_name or group.type)}\n\n"
    if not group.files:
        page += "No files in this folder yet.\n"
        return page
    page += generate_file_table(group.files, data_root, base_url)
    return page



def write_page(path: pathlib.Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def build_site(
    output_dir: str | pathlib.Path,
    data_root: pathlib.Path | None = None,
    base_url: str = DEFAULT_BASE_URL,
    verbose: bool = False,
) -> int:
    """Write the landing, department and material pages.

    Args:
        output_dir: Directory the Markdown pages are written to
        data_root: Root of the department tree (resolved when omitted)
        base_url: URL prefix the data root is served under
        verbose: Whether to show a progress bar

    Returns:
        Number of pages written

    Raises:
        OSError: If a page cannot be written
    """
    root = resolve_data_root() if data_root is None else pathlib.Path(data_root)
    output_path = pathlib.Path(output_dir)

    logger.info("Scanning data directory: %s", root)
    departments = scan_departments(root)
    dept_data = load_department_data(root)

    cards = []
    for key in departments:
        record = dept_data.get(key)
        description = record.get("farsiName") if isinstance(record, dict) else None
        cards.append((key, department_display_name(key, dept_data), description))

    index = "# 📚 Course Materials\n\n"
    if cards:
        index += generate_department_cards(cards)
    else:
        index += "No departments found.\n"
    write_page(output_path / INDEX_PAGE, index)
    pages = 1

    for key, name, _description in tqdm(cards, desc="Departments", unit="dept", disable=not verbose):
        materials = get_department_materials(key, root)
        write_page(output_path / key / INDEX_PAGE, generate_department_page(key, name, materials))
        pages += 1
        for group in materials:
            leaf_dir = output_path.joinpath(*group.key)
            write_page(leaf_dir / INDEX_PAGE, generate_material_page(group, root, base_url))
            pages += 1

    logger.info("Wrote %d pages to %s", pages, output_path)
    return pages
