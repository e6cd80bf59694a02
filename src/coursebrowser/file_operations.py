"""File system operations: directory listing, sidecar JSON and ignore rules."""

import json
import logging
import os
import pathlib
import unicodedata
from collections.abc import Iterable
from typing import Any

import pathspec

from coursebrowser.constants import ALWAYS_IGNORE_PATTERNS, IGNORE_FILE
from coursebrowser.models import EntryKind, FileEntry

logger = logging.getLogger(__name__)


def name_sort_key(name: str) -> tuple[str, str, str]:
    """Build a sort key that orders names the way a reader expects.

    Letters compare case- and accent-insensitively first; accents and then
    case only break ties, with lowercase before uppercase.

    Examples:
        >>> sorted(["b", "B", "a", "A"], key=name_sort_key)
        ['a', 'A', 'b', 'B']
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), decomposed.casefold(), name.swapcase())


def get_extension(name: str) -> str | None:
    """Return the suffix from the last dot, or None when there is none.

    Leading dots of hidden files do not count (".bashrc" has no extension).
    """
    extension = os.path.splitext(name)[1]
    return extension or None


def list_directory(directory: str | os.PathLike) -> list[FileEntry]:
    """List the immediate children of a directory.

    Never raises: a missing or unreadable directory yields an empty list.
    Entries that disappear before they can be stat'ed are skipped.

    Args:
        directory: Directory to list

    Returns:
        Entries sorted by name
    """
    directory = pathlib.Path(directory)
    entries: list[FileEntry] = []
    try:
        if not directory.exists():
            return []
        children = list(directory.iterdir())
    except OSError as e:
        logger.error("Error reading directory %s: %s", directory, e)
        return []

    for child in children:
        try:
            if child.is_dir():
                entries.append(FileEntry(name=child.name, path=child, kind=EntryKind.DIRECTORY))
                continue
            stat = child.stat()
        except OSError as e:
            logger.warning("Skipping %s: %s", child, e)
            continue
        entries.append(
            FileEntry(
                name=child.name,
                path=child,
                kind=EntryKind.FILE,
                size=stat.st_size,
                extension=get_extension(child.name),
            )
        )

    return sorted(entries, key=lambda entry: name_sort_key(entry.name))


def is_directory(path: str | os.PathLike) -> bool:
    """Check for a directory without letting permission errors escape."""
    try:
        return pathlib.Path(path).is_dir()
    except OSError as e:
        logger.error("Error accessing %s: %s", path, e)
        return False


def list_subdirectories(directory: str | os.PathLike) -> list[FileEntry]:
    """List only the directory children of a directory, sorted by name."""
    return [entry for entry in list_directory(directory) if entry.is_dir]


def load_json_mapping(json_path: str | os.PathLike) -> dict[str, Any]:
    """Load a sidecar JSON object keyed by directory name.

    Args:
        json_path: Path to the JSON document

    Returns:
        The parsed object, or an empty dict when the file is absent,
        unreadable, malformed, or not a JSON object
    """
    json_path = pathlib.Path(json_path)
    try:
        if not json_path.is_file():
            return {}
        with open(json_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to load %s: %s", json_path, e)
        return {}

    if not isinstance(data, dict):
        logger.error("Failed to load %s: expected a JSON object, got %s", json_path, type(data).__name__)
        return {}
    return data


def get_ignore_spec(data_root: pathlib.Path) -> pathspec.PathSpec:
    """Combine ALWAYS_IGNORE_PATTERNS with the data root's ignore file.

    Args:
        data_root: Root of the department tree

    Returns:
        PathSpec matching paths relative to data_root
    """
    all_patterns = list(ALWAYS_IGNORE_PATTERNS)

    ignore_path = data_root / IGNORE_FILE
    try:
        if ignore_path.is_file():
            with open(ignore_path, encoding="utf-8", errors="ignore") as f:
                all_patterns.extend(f.readlines())
    except OSError as e:
        logger.warning("Could not read %s: %s", ignore_path, e)

    return pathspec.PathSpec.from_lines(pathspec.patterns.GitWildMatchPattern, all_patterns)


def filter_ignored(
    entries: Iterable[FileEntry], spec: pathspec.PathSpec, root: pathlib.Path
) -> list[FileEntry]:
    """Drop entries matched by an ignore spec, keeping the input order.

    Args:
        entries: Entries to filter
        spec: Ignore patterns relative to root
        root: Directory the patterns are anchored at

    Returns:
        Entries that are not ignored
    """
    kept = []
    for entry in entries:
        try:
            relative = entry.path.relative_to(root).as_posix()
        except ValueError:
            kept.append(entry)
            continue
        # Trailing slash so directory patterns like ".git/" match
        if entry.is_dir:
            relative += "/"
        if not spec.match_file(relative):
            kept.append(entry)
    return kept
