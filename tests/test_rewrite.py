from __future__ import annotations

from pathlib import Path

import pytest

from create_net.replacements import ReplacementSet, build_replacements
from create_net.rewrite import RewriteReport, is_binary_path, rewrite_file, rewrite_tree
from tests.fixtures.tree import snapshot, write_tree


@pytest.fixture()
def replacements() -> ReplacementSet:
    return build_replacements("MyApp", "AcmeCorp")


def test_rewrites_file_content(tmp_path: Path, replacements: ReplacementSet):
    write_tree(tmp_path, {"notes.txt": "My_App / my-app / MyApp"})
    report = rewrite_tree(tmp_path, replacements)

    assert (tmp_path / "notes.txt").read_text(encoding="utf-8") == "Acme_Corp / acme-corp / AcmeCorp"
    assert report.rewritten == [tmp_path / "notes.txt"]


def test_renames_directories(tmp_path: Path, replacements: ReplacementSet):
    (tmp_path / "my-app-assets").mkdir()
    report = rewrite_tree(tmp_path, replacements)

    assert (tmp_path / "acme-corp-assets").is_dir()
    assert not (tmp_path / "my-app-assets").exists()
    assert report.renamed == [(tmp_path / "my-app-assets", tmp_path / "acme-corp-assets")]


def test_children_are_renamed_before_parents(tmp_path: Path):
    write_tree(tmp_path, {"A/my-app/my-app.txt": "hello"})
    report = rewrite_tree(tmp_path, ReplacementSet.from_pairs([("my-app", "acme-corp")]))

    assert (tmp_path / "A" / "acme-corp" / "acme-corp.txt").read_text(encoding="utf-8") == "hello"
    assert report.renamed == [
        (tmp_path / "A" / "my-app" / "my-app.txt", tmp_path / "A" / "my-app" / "acme-corp.txt"),
        (tmp_path / "A" / "my-app", tmp_path / "A" / "acme-corp"),
    ]


def test_nested_template_layout(tmp_path: Path, replacements: ReplacementSet):
    write_tree(
        tmp_path,
        {
            "MyApp.sln": 'Project("MyApp") = "MyApp.ServiceModel"',
            "MyApp/Program.cs": "namespace MyApp;",
            "MyApp/wwwroot/my_app.css": ".my-app { }",
            "MyApp.ServiceModel/Hello.cs": "namespace MyApp.ServiceModel;",
        },
    )
    rewrite_tree(tmp_path, replacements)

    assert snapshot(tmp_path) == {
        "AcmeCorp": None,
        "AcmeCorp.ServiceModel": None,
        "AcmeCorp.ServiceModel/Hello.cs": b"namespace AcmeCorp.ServiceModel;",
        "AcmeCorp.sln": b'Project("AcmeCorp") = "AcmeCorp.ServiceModel"',
        "AcmeCorp/Program.cs": b"namespace AcmeCorp;",
        "AcmeCorp/wwwroot": None,
        "AcmeCorp/wwwroot/acme_corp.css": b".acme-corp { }",
    }


def test_second_run_is_a_no_op(tmp_path: Path, replacements: ReplacementSet):
    write_tree(
        tmp_path,
        {
            "src/MyApp/my-app.json": '{"name": "my-app", "title": "My App"}',
            "README.md": "# MyApp\n",
        },
    )
    rewrite_tree(tmp_path, replacements)
    first = snapshot(tmp_path)

    report = rewrite_tree(tmp_path, replacements)

    assert snapshot(tmp_path) == first
    assert not report.changed


def test_binary_files_are_not_read_but_are_renamed(tmp_path: Path, replacements: ReplacementSet):
    payload = b"\x89PNG\r\n\x1a\nMyApp my-app"
    write_tree(tmp_path, {"MyApp-logo.png": payload})
    report = rewrite_tree(tmp_path, replacements)

    assert (tmp_path / "AcmeCorp-logo.png").read_bytes() == payload
    assert report.skipped_binary == [tmp_path / "MyApp-logo.png"]
    assert report.rewritten == []


@pytest.mark.parametrize("name, expected", [("logo.PNG", True), ("font.woff2", True), ("app.cs", False)])
def test_is_binary_path(name, expected):
    assert is_binary_path(Path(name)) is expected


def test_undecodable_file_is_skipped_with_warning(tmp_path: Path, replacements: ReplacementSet):
    payload = b"\xff\xfe\x00MyApp"
    write_tree(tmp_path, {"MyApp.dat": payload})
    report = rewrite_tree(tmp_path, replacements)

    assert (tmp_path / "AcmeCorp.dat").read_bytes() == payload
    assert [warning.path for warning in report.warnings] == [tmp_path / "MyApp.dat"]


def test_missing_file_is_recorded(tmp_path: Path, replacements: ReplacementSet):
    report = RewriteReport()
    rewrite_file(tmp_path / "gone.txt", replacements, report)

    assert [(warning.path, warning.reason) for warning in report.warnings] == [
        (tmp_path / "gone.txt", "missing")
    ]


def test_unwritable_file_is_recorded(
    tmp_path: Path, replacements: ReplacementSet, monkeypatch: pytest.MonkeyPatch
):
    target = write_tree(tmp_path, {"notes.txt": "MyApp"}) / "notes.txt"
    original_open = Path.open

    def read_only_open(self, mode="r", *args, **kwargs):
        if mode.startswith("w"):
            raise PermissionError(13, "Permission denied", str(self))
        return original_open(self, mode, *args, **kwargs)

    monkeypatch.setattr(Path, "open", read_only_open)
    report = RewriteReport()
    rewrite_file(target, replacements, report)

    assert [(warning.path, warning.reason) for warning in report.warnings] == [
        (target, "unwritable: Permission denied")
    ]
    assert report.rewritten == []
    assert target.read_text(encoding="utf-8") == "MyApp"


def test_rename_collision_keeps_both_entries(tmp_path: Path, replacements: ReplacementSet):
    write_tree(tmp_path, {"MyApp.txt": "old", "AcmeCorp.txt": "existing"})
    report = rewrite_tree(tmp_path, replacements)

    assert (tmp_path / "MyApp.txt").read_text(encoding="utf-8") == "old"
    assert (tmp_path / "AcmeCorp.txt").read_text(encoding="utf-8") == "existing"
    assert report.warnings[0].path == tmp_path / "MyApp.txt"
    assert "already exists" in report.warnings[0].reason


def test_line_endings_are_preserved(tmp_path: Path, replacements: ReplacementSet):
    write_tree(tmp_path, {"app.bat": b"echo MyApp\r\necho done\r\n"})
    rewrite_tree(tmp_path, replacements)

    assert (tmp_path / "app.bat").read_bytes() == b"echo AcmeCorp\r\necho done\r\n"


def test_root_directory_is_not_renamed(tmp_path: Path, replacements: ReplacementSet):
    root = tmp_path / "MyApp"
    write_tree(root, {"file.txt": "MyApp"})
    rewrite_tree(root, replacements)

    assert (root / "file.txt").read_text(encoding="utf-8") == "AcmeCorp"


def test_rewrite_tree_requires_a_directory(tmp_path: Path, replacements: ReplacementSet):
    target = tmp_path / "file.txt"
    target.write_text("MyApp", encoding="utf-8")
    with pytest.raises(NotADirectoryError):
        rewrite_tree(target, replacements)
