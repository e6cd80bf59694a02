"""Data root resolution."""

import pathlib

from coursebrowser.constants import DATA_ROOT_CANDIDATES


def get_data_root_candidates(cwd: pathlib.Path | None = None) -> list[pathlib.Path]:
    """List the candidate data root locations in priority order.

    Args:
        cwd: Directory relative candidates are resolved against (defaults to
            the current working directory)

    Returns:
        Absolute candidate paths
    """
    base = pathlib.Path.cwd() if cwd is None else pathlib.Path(cwd)
    return [(base / candidate).resolve() for candidate in DATA_ROOT_CANDIDATES]


def resolve_data_root(cwd: pathlib.Path | None = None) -> pathlib.Path:
    """Find the directory holding the department tree.

    The lookup runs on every call so the result always follows the current
    working directory. A missing directory is not an error: callers treat a
    returned path that does not exist as "no data".

    Args:
        cwd: Directory relative candidates are resolved against

    Returns:
        The first existing candidate, or the first candidate if none exist
    """
    candidates = get_data_root_candidates(cwd)
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return candidates[0]
