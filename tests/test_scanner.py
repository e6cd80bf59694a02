import logging
import pathlib

from conftest import raise_for, write_file

from coursebrowser.models import EntryKind, FileEntry, MaterialGroup
from coursebrowser.scanner import (
    get_department_courses,
    get_department_materials,
    get_materials_at_path,
    scan_departments,
)


def test_scan_departments(data_root: pathlib.Path) -> None:
    (data_root / "math").mkdir()
    (data_root / ".git").mkdir()

    assert scan_departments(data_root) == ["cs", "math"]


def test_scan_departments_missing_root(tmp_path: pathlib.Path, caplog) -> None:
    with caplog.at_level(logging.WARNING):
        assert scan_departments(tmp_path / "missing") == []
    assert "Data directory not found" in caplog.text


def test_get_department_courses(data_root: pathlib.Path) -> None:
    assert get_department_courses("cs", data_root) == ["data_structures", "ds101"]
    assert get_department_courses("math", data_root) == []


def test_materials_are_ordered_and_named(data_root: pathlib.Path) -> None:
    materials = get_department_materials("cs", data_root)

    assert [m.key for m in materials] == [
        ("cs", "data_structures", "jones", "slides"),
        ("cs", "ds101", "smith", "exams"),
        ("cs", "ds101", "smith", "slides"),
    ]
    first, exams, slides = materials
    assert first.course_display_name == "Data Structures"
    assert first.instructor_display_name == "Jones"
    assert first.type_display_name == "Slides"
    assert exams.type_display_name == "etc"
    assert slides.course_display_name == "DS 101"
    assert slides.instructor_display_name == "Dr. Smith"
    assert [f.name for f in slides.files] == ["lec1.pdf", "lec2.pdf"]
    assert [f.size for f in slides.files] == [2048, 1536]


def test_department_without_subdirectories(data_root: pathlib.Path) -> None:
    (data_root / "math").mkdir()
    write_file(data_root / "math" / "readme.txt")

    assert get_department_materials("math", data_root) == []


def test_missing_department(data_root: pathlib.Path) -> None:
    assert get_department_materials("physics", data_root) == []


def test_shallow_branches_contribute_nothing(tmp_path: pathlib.Path) -> None:
    write_file(tmp_path / "cs" / "algo1" / "notes.pdf")
    write_file(tmp_path / "cs" / "algo2" / "smith" / "notes.pdf")
    (tmp_path / "cs" / "algo3" / "lee" / "slides").mkdir(parents=True)

    materials = get_department_materials("cs", tmp_path)

    assert [m.key for m in materials] == [("cs", "algo3", "lee", "slides")]
    assert materials[0].files == ()


def test_single_chain_scenario(tmp_path: pathlib.Path) -> None:
    leaf = tmp_path / "cs" / "algo1" / "smith" / "slides"
    write_file(leaf / "lec1.pdf", 2048)

    materials = get_department_materials("cs", tmp_path)

    assert materials == [
        MaterialGroup(
            department="cs",
            course="algo1",
            instructor="smith",
            type="slides",
            files=(
                FileEntry(
                    name="lec1.pdf",
                    path=leaf / "lec1.pdf",
                    kind=EntryKind.FILE,
                    size=2048,
                    extension=".pdf",
                ),
            ),
            course_display_name="Algo1",
            instructor_display_name="Smith",
            type_display_name="etc",
        )
    ]


def test_repeated_scans_are_equal(data_root: pathlib.Path) -> None:
    assert get_department_materials("cs", data_root) == get_department_materials("cs", data_root)


def test_unreadable_subtree_does_not_abort_scan(data_root: pathlib.Path, monkeypatch) -> None:
    real_iterdir = pathlib.Path.iterdir
    blocked = data_root / "cs" / "data_structures"

    def iterdir(self):
        if self == blocked:
            raise PermissionError("denied")
        return real_iterdir(self)

    monkeypatch.setattr(pathlib.Path, "iterdir", iterdir)

    materials = get_department_materials("cs", data_root)

    assert [m.course for m in materials] == ["ds101", "ds101"]


def test_malformed_sidecar_degrades_to_fallback(data_root: pathlib.Path) -> None:
    (data_root / "cs" / "course.json").write_text("{oops", encoding="utf-8")

    materials = get_department_materials("cs", data_root)

    assert materials[-1].course_display_name == "Ds101"


def test_ignored_files_are_hidden(data_root: pathlib.Path) -> None:
    leaf = data_root / "cs" / "ds101" / "smith" / "slides"
    write_file(leaf / ".DS_Store")
    write_file(leaf / ".gitkeep")

    files = get_materials_at_path("cs", "ds101", "smith", "slides", data_root)

    assert [f.name for f in files] == ["lec1.pdf", "lec2.pdf"]


def test_get_materials_at_path_missing_leaf(data_root: pathlib.Path) -> None:
    assert get_materials_at_path("cs", "ds101", "smith", "videos", data_root) == []


def test_get_materials_at_path_rejects_traversal(data_root: pathlib.Path) -> None:
    assert get_materials_at_path("cs", "..", "smith", "slides", data_root) == []
    assert get_materials_at_path("cs/ds101", "smith", "slides", "x", data_root) == []
    assert get_department_materials("..", data_root) == []


def test_resolves_data_root_from_cwd(data_root: pathlib.Path, monkeypatch) -> None:
    monkeypatch.chdir(data_root.parent.parent)

    assert scan_departments() == ["cs"]
    assert len(get_department_materials("cs")) == 3


def test_unreadable_sidecar_does_not_abort_scan(data_root: pathlib.Path, monkeypatch) -> None:
    raise_for(monkeypatch, "is_file", data_root / "cs" / "course.json")

    materials = get_department_materials("cs", data_root)

    assert len(materials) == 3
    assert materials[-1].course_display_name == "Ds101"
    assert materials[-1].instructor_display_name == "Dr. Smith"


def test_inaccessible_department_is_empty(data_root: pathlib.Path, monkeypatch) -> None:
    raise_for(monkeypatch, "is_dir", data_root / "cs")

    assert get_department_materials("cs", data_root) == []
    assert get_department_courses("cs", data_root) == []


def test_inaccessible_data_root_is_empty(data_root: pathlib.Path, monkeypatch) -> None:
    raise_for(monkeypatch, "is_dir", data_root)

    assert scan_departments(data_root) == []


def test_inaccessible_leaf_is_empty(data_root: pathlib.Path, monkeypatch) -> None:
    leaf = data_root / "cs" / "ds101" / "smith" / "slides"
    raise_for(monkeypatch, "exists", leaf)

    assert get_materials_at_path("cs", "ds101", "smith", "slides", data_root) == []


def test_ignored_department_is_not_browsable(data_root: pathlib.Path) -> None:
    (data_root / ".materialsignore").write_text("archive/\n", encoding="utf-8")
    write_file(data_root / "archive" / "old" / "lee" / "slides" / "lec.pdf")
    write_file(data_root / ".git" / "objects" / "ab" / "cd" / "blob")

    assert scan_departments(data_root) == ["cs"]
    assert get_department_materials("archive", data_root) == []
    assert get_department_courses("archive", data_root) == []
    assert get_department_materials(".git", data_root) == []
    assert get_materials_at_path("archive", "old", "lee", "slides", data_root) == []
    assert get_materials_at_path(".git", "objects", "ab", "cd", data_root) == []


def test_ignored_course_is_not_browsable(data_root: pathlib.Path) -> None:
    (data_root / ".materialsignore").write_text("cs/ds101/\n", encoding="utf-8")

    assert [m.course for m in get_department_materials("cs", data_root)] == ["data_structures"]
    assert get_materials_at_path("cs", "ds101", "smith", "slides", data_root) == []
