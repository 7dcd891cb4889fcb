from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from git_ingest.config import Digest, FileEntry, RepositoryKind, RepositoryTarget, TreeLine, printable


@pytest.mark.unit
@pytest.mark.parametrize(
    ("flags", "expected"),
    [
        ((True,), "└── a"),
        ((False,), "├── a"),
        ((False, True), "│   └── a"),
        ((True, False), "    ├── a"),
        ((False, True, True), "│       └── a"),
    ],
)
def test_tree_line_render(flags: tuple[bool, ...], expected: str) -> None:
    line = TreeLine(name="a", last_flags=flags)

    assert line.render() == expected
    assert line.depth == len(flags) - 1


@pytest.mark.unit
def test_tree_line_requires_a_level() -> None:
    with pytest.raises(ValidationError):
        TreeLine(name="a", last_flags=())


@pytest.mark.unit
def test_digest_render_has_both_sections() -> None:
    digest = Digest(tree="└── a.txt\n", content="File: a.txt\nhi\n")

    assert digest.render() == (
        "Repository Tree Structure:\n└── a.txt\n\n\nRepository Content:\nFile: a.txt\nhi\n"
    )


@pytest.mark.unit
def test_file_entry_match_path_marks_directories(tmp_path: Path) -> None:
    directory = FileEntry(path=tmp_path / "src", rel="src", is_dir=True)
    file = FileEntry(path=tmp_path / "src" / "a.py", rel="src/a.py")

    assert directory.match_path == "src/"
    assert file.match_path == "src/a.py"
    assert file.name == "a.py"


@pytest.mark.unit
def test_repository_target_constructors() -> None:
    local = RepositoryTarget.local(".")
    remote = RepositoryTarget.remote("https://github.com/o/r.git", "main")

    assert local.kind is RepositoryKind.LOCAL
    assert not local.is_remote
    assert remote.is_remote
    assert remote.branch == "main"


@pytest.mark.unit
def test_repository_target_rejects_mixed_fields() -> None:
    with pytest.raises(ValidationError):
        RepositoryTarget(kind=RepositoryKind.REMOTE, path=Path("."))
    with pytest.raises(ValidationError):
        RepositoryTarget(kind=RepositoryKind.LOCAL, clone_url="https://github.com/o/r.git")


@pytest.mark.unit
def test_file_entry_display_names_replace_undecodable_bytes(tmp_path: Path) -> None:
    raw = "dir/bad\udcff.txt"
    entry = FileEntry(path=tmp_path / raw, rel=raw)

    assert printable("plain.txt") == "plain.txt"
    assert entry.display_rel == "dir/bad�.txt"
    assert entry.display_name == "bad�.txt"
    assert entry.match_path == raw
