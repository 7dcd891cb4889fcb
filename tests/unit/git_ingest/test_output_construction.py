from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from git_ingest import output_construction
from git_ingest.ignore_rules import build_ignore_filter
from git_ingest.output_construction import iter_tree_lines, render_tree

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


def write(root: Path, rel: str, content: str | bytes = "") -> None:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")


@pytest.mark.unit
def test_render_tree_directories_first_with_corner_for_last_entry(tmp_path: Path) -> None:
    write(tmp_path, "src/a.ts", "export {}")
    write(tmp_path, "package.json", "{}")
    write(tmp_path, "README.md", "# demo")

    tree = render_tree(tmp_path, build_ignore_filter(tmp_path))

    assert tree == "├── src\n│   └── a.ts\n├── package.json\n└── README.md\n"


@pytest.mark.unit
def test_render_tree_uses_blank_prefix_under_last_directory(tmp_path: Path) -> None:
    write(tmp_path, "a.txt", "a")
    write(tmp_path, "z/inner/deep.txt", "d")
    write(tmp_path, "z/b.txt", "b")

    tree = render_tree(tmp_path, build_ignore_filter(tmp_path))

    assert tree.splitlines() == [
        "├── z",
        "│   ├── inner",
        "│   │   └── deep.txt",
        "│   └── b.txt",
        "└── a.txt",
    ]


@pytest.mark.unit
def test_render_tree_excludes_ignored_entries(tmp_path: Path) -> None:
    write(tmp_path, ".gitignore", "*.log\nnode_modules/\n")
    write(tmp_path, "main.log", "log")
    write(tmp_path, "main.txt", "text")
    write(tmp_path, "node_modules/pkg/index.js", "x")
    write(tmp_path, ".git/HEAD", "ref")

    tree = render_tree(tmp_path, build_ignore_filter(tmp_path, ["docs/"]))

    assert tree == "├── .gitignore\n└── main.txt\n"


@pytest.mark.unit
def test_render_tree_lists_binary_files(tmp_path: Path) -> None:
    write(tmp_path, "logo.png", b"\x89PNG\x00\x00")

    assert render_tree(tmp_path, build_ignore_filter(tmp_path)) == "└── logo.png\n"


@pytest.mark.unit
def test_render_tree_of_unreadable_root_is_empty(tmp_path: Path) -> None:
    missing = tmp_path / "missing"

    assert render_tree(missing, build_ignore_filter(tmp_path)) == ""


@pytest.mark.unit
def test_iter_tree_lines_tracks_last_sibling_flags(tmp_path: Path) -> None:
    write(tmp_path, "dir/x.txt", "x")
    write(tmp_path, "file.txt", "f")

    lines = list(iter_tree_lines(tmp_path, tmp_path, build_ignore_filter(tmp_path)))

    assert [(line.name, line.last_flags, line.depth) for line in lines] == [
        ("dir", (False,), 0),
        ("x.txt", (False, True), 1),
        ("file.txt", (True,), 0),
    ]


@pytest.mark.unit
def test_render_tree_shows_unreadable_directory_without_children(tmp_path: Path, mocker: MockerFixture) -> None:
    write(tmp_path, "locked/secret.txt", "s")
    write(tmp_path, "open/visible.txt", "v")
    write(tmp_path, "top.txt", "t")
    locked = tmp_path / "locked"
    real_list = output_construction.list_visible_entries

    def guarded_list(directory: Path, root: Path, ignore_filter: object) -> list:
        if directory == locked:
            msg = "permission denied"
            raise PermissionError(msg)
        return real_list(directory, root, ignore_filter)

    mocker.patch.object(output_construction, "list_visible_entries", side_effect=guarded_list)
    warning = mocker.patch.object(output_construction.logger, "warning")

    tree = render_tree(tmp_path, build_ignore_filter(tmp_path))

    assert tree == "├── locked\n├── open\n│   └── visible.txt\n└── top.txt\n"
    warning.assert_called_once_with("directory_unreadable", path="locked", error="permission denied")


@pytest.mark.unit
def test_render_tree_lists_symlinked_directory_without_descending(tmp_path: Path) -> None:
    write(tmp_path, "real/inner.txt", "inner")
    try:
        (tmp_path / "alias").symlink_to(tmp_path / "real", target_is_directory=True)
    except OSError:
        pytest.skip("symlinks are not supported here")

    tree = render_tree(tmp_path, build_ignore_filter(tmp_path))

    assert tree == "├── real\n│   └── inner.txt\n└── alias\n"
