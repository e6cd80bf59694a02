"""Command-line interface for coursebrowser."""

import argparse
import logging
import pathlib
import sys

from coursebrowser.constants import ALL_OPTION, DEFAULT_BASE_URL, SORT_FIELDS
from coursebrowser.listing import (
    MaterialQuery,
    file_count_label,
    filter_materials,
    format_file_size,
    is_viewable,
    material_url,
    results_label,
)
from coursebrowser.metadata import department_display_name, load_department_data
from coursebrowser.output_generators import build_site
from coursebrowser.paths import resolve_data_root
from coursebrowser.scanner import get_department_materials, get_materials_at_path, scan_departments


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coursebrowser",
        description="Browse and publish a department/course/instructor/type tree of course materials.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--data-root",
        type=pathlib.Path,
        default=None,
        help="Data directory to read (default: first existing public/data candidate).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show detailed processing information.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("departments", help="List departments.")

    materials = subparsers.add_parser(
        "materials",
        help="List the material groups of a department.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    materials.add_argument("department", help="Department directory name.")
    materials.add_argument("--search", default="", help="Search courses, instructors, or types.")
    materials.add_argument("--course", default=ALL_OPTION, help="Only show this course key.")
    materials.add_argument("--type", dest="material_type", default=ALL_OPTION, help="Only show this type key.")
    materials.add_argument("--sort-by", choices=SORT_FIELDS, default="course", help="Sort field.")

    files = subparsers.add_parser("files", help="List the files of one material folder.")
    files.add_argument("department")
    files.add_argument("course")
    files.add_argument("instructor")
    files.add_argument("material_type", metavar="type")

    build = subparsers.add_parser(
        "build",
        help="Write the site as Markdown pages.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    build.add_argument("-o", "--output", default="site", help="Output directory.")
    build.add_argument("--base-url", default=DEFAULT_BASE_URL, help="URL prefix the data directory is served under.")

    return parser


def _print_departments(data_root: pathlib.Path) -> int:
    departments = scan_departments(data_root)
    dept_data = load_department_data(data_root)
    for key in departments:
        print(f"{key}\t{department_display_name(key, dept_data)}")
    if not departments:
        print("No departments found.")
    return 0


def _print_materials(args: argparse.Namespace, data_root: pathlib.Path) -> int:
    query = MaterialQuery(
        search=args.search,
        course=args.course,
        material_type=args.material_type,
        sort_by=args.sort_by,
    )
    materials = filter_materials(get_department_materials(args.department, data_root), query)
    print(results_label(len(materials)))
    for group in materials:
        print(
            f"{group.course_display_name}\t{group.instructor_display_name}\t"
            f"{group.type_display_name}\t{file_count_label(len(group.files))}\t{material_url(group)}"
        )
    if not materials:
        print("No materials found matching your criteria.")
    return 0


def _print_files(args: argparse.Namespace, data_root: pathlib.Path) -> int:
    entries = get_materials_at_path(
        args.department, args.course, args.instructor, args.material_type, data_root
    )
    for entry in entries:
        if entry.is_dir:
            print(f"{entry.name}/")
            continue
        action = "view" if is_viewable(entry.extension) else "download"
        print(f"{entry.name}\t{format_file_size(entry.size or 0)}\t{action}")
    if not entries:
        print("No files found.")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the coursebrowser CLI."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    data_root = args.data_root if args.data_root is not None else resolve_data_root()

    if args.command == "departments":
        return _print_departments(data_root)
    if args.command == "materials":
        return _print_materials(args, data_root)
    if args.command == "files":
        return _print_files(args, data_root)

    try:
        pages = build_site(args.output, data_root, args.base_url, args.verbose)
    except OSError as e:
        print(f"Error: Could not write to {args.output}: {e}", file=sys.stderr)
        return 1
    print(f"Wrote {pages} pages to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
