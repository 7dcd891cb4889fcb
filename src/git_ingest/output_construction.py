from __future__ import annotations

from typing import TYPE_CHECKING

from git_ingest.config import TreeLine
from git_ingest.file_manipulation import list_visible_entries
from git_ingest.logging import logger

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from git_ingest.ignore_rules import IgnoreFilter


def iter_tree_lines(
    directory: Path,
    root: Path,
    ignore_filter: IgnoreFilter,
    ancestors: tuple[bool, ...] = (),
) -> Iterator[TreeLine]:
    """Yield the tree lines for the visible entries below `directory`.

    Args:
        directory (Path): the directory being listed
        root (Path): the repository root, base of the paths given to `ignore_filter`
        ignore_filter (IgnoreFilter): predicate over root-relative paths
        ancestors (tuple[bool, ...]): for each enclosing level, whether that
            ancestor was the last visible sibling

    Raises:
        OSError: if `directory` itself cannot be listed

    Yields:
        TreeLine: one line per visible entry, depth first
    """
    entries = list_visible_entries(directory, root, ignore_filter)
    for idx, entry in enumerate(entries):
        flags = (*ancestors, idx == len(entries) - 1)
        yield TreeLine(name=entry.display_name, last_flags=flags)
        if not entry.is_dir:
            continue
        try:
            yield from iter_tree_lines(entry.path, root, ignore_filter, flags)
        except OSError as e:
            logger.warning("directory_unreadable", path=entry.rel, error=str(e))


def render_tree(root: Path, ignore_filter: IgnoreFilter) -> str:
    """Render the visible part of the repository as a box-drawing tree.

    Tree rendering never looks at file contents, so binary files are listed.

    Args:
        root (Path): the repository root
        ignore_filter (IgnoreFilter): predicate over root-relative paths

    Returns:
        str: the tree lines joined by newlines, plus a trailing newline.
            Empty if the root cannot be listed.
    """
    try:
        lines = [line.render() for line in iter_tree_lines(root, root, ignore_filter)]
    except OSError as e:
        logger.warning("tree_generation_failed", path=str(root), error=str(e))
        return ""
    return "\n".join(lines) + "\n"
