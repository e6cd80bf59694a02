"""Shared fixtures: small data trees built under tmp_path."""

import json
import pathlib

import pytest


def write_file(path: pathlib.Path, size: int = 0) -> pathlib.Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


def write_json(path: pathlib.Path, data) -> pathlib.Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def raise_for(monkeypatch, method: str, blocked: pathlib.Path) -> None:
    """Make pathlib.Path.<method> fail with EACCES for one path."""
    real = getattr(pathlib.Path, method)

    def checked(self, *args, **kwargs):
        if self == blocked:
            raise PermissionError(13, "Permission denied", str(self))
        return real(self, *args, **kwargs)

    monkeypatch.setattr(pathlib.Path, method, checked)


@pytest.fixture
def data_root(tmp_path: pathlib.Path) -> pathlib.Path:
    """A data root with one department, two courses and sidecar metadata."""
    root = tmp_path / "public" / "data"
    write_json(root / "dept.json", {"cs": {"displayName": "Computer Science", "farsiName": "علوم کامپیوتر"}})
    write_json(root / "type.json", {"slides": {"displayName": "Slides"}})
    write_json(root / "cs" / "course.json", {"ds101": {"displayName": "DS 101"}})
    write_json(root / "cs" / "instructor.json", {"smith": {"displayName": "Dr. Smith"}})

    write_file(root / "cs" / "ds101" / "smith" / "slides" / "lec2.pdf", 1536)
    write_file(root / "cs" / "ds101" / "smith" / "slides" / "lec1.pdf", 2048)
    write_file(root / "cs" / "ds101" / "smith" / "exams" / "midterm.docx", 10)
    write_file(root / "cs" / "data_structures" / "jones" / "slides" / "intro.png", 5)
    return root
