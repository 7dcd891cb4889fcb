from __future__ import annotations

import locale
import os
import stat
from pathlib import Path
from typing import TYPE_CHECKING

from git_ingest.config import BINARY_SNIFF_BYTES, FILE_HEADER, FileEntry
from git_ingest.logging import logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from git_ingest.ignore_rules import IgnoreFilter

    BinaryDetector = Callable[[Path], bool]


def relpath(path: Path, root: Path) -> str:
    """Send the relative path of path from root.

    Args:
        path (Path): the path to "relativise"
        root (Path): the root to relativise from

    Returns:
        str: the relative path from root to path, with POSIX separators.
            If path is not under root, returns the original path as a string.
    """
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def is_regular_file(path: Path) -> bool:
    """Check if a file is regular.

    Args:
        path (Path): path to test.

    Returns:
        bool: True if the file is regular, False otherwise.
    """
    try:
        st = path.stat()
        return stat.S_ISREG(st.st_mode)
    except OSError:
        return False


def is_binary(path: Path, nbytes: int = BINARY_SNIFF_BYTES) -> bool:
    """Check if a file is probably binary.

    Heuristic: the file is binary if a null byte shows up in its first
    `nbytes` bytes. Binaries without an early null byte pass as text.

    Args:
        path (Path): the file path to check
        nbytes (int, optional): size of the inspected prefix. Defaults to BINARY_SNIFF_BYTES.

    Returns:
        bool: True if the file is probably binary. False otherwise, including
            when the file cannot be read at all.
    """
    try:
        with path.open("rb") as f:
            chunk = f.read(nbytes)
    except OSError:
        return False
    return b"\x00" in chunk


def read_text(path: Path) -> str:
    """Read a file as UTF-8, replacing undecodable bytes and keeping line endings as-is."""
    return path.read_bytes().decode("utf-8", errors="replace")


def entry_sort_key(entry: FileEntry) -> tuple[int, str, str]:
    """Directories first, then case-insensitive names in the current collation locale."""
    return (0 if entry.is_dir else 1, locale.strxfrm(entry.name.casefold()), entry.name)


def list_visible_entries(directory: Path, root: Path, ignore_filter: IgnoreFilter) -> list[FileEntry]:
    """List the entries of `directory` that survive `ignore_filter`, in display order.

    Symlinked directories are listed as plain entries and never descended into.

    Args:
        directory (Path): the directory to list
        root (Path): the repository root, base of the paths given to `ignore_filter`
        ignore_filter (IgnoreFilter): predicate over root-relative paths

    Raises:
        OSError: if `directory` cannot be listed

    Returns:
        list[FileEntry]: the visible entries, sorted with `entry_sort_key`
    """
    entries: list[FileEntry] = []
    with os.scandir(directory) as it:
        for item in it:
            path = Path(item.path)
            entry = FileEntry(path=path, rel=relpath(path, root), is_dir=item.is_dir(follow_symlinks=False))
            if ignore_filter.matches(entry.match_path):
                continue
            entries.append(entry)
    return sorted(entries, key=entry_sort_key)


def iter_visible_files(directory: Path, root: Path, ignore_filter: IgnoreFilter) -> Iterator[FileEntry]:
    """Yield every visible non-directory entry under `directory`, in tree order.

    Ignored directories are pruned. A subdirectory that cannot be listed is
    logged and skipped; failing to list `directory` itself raises OSError.
    """
    for entry in list_visible_entries(directory, root, ignore_filter):
        if not entry.is_dir:
            yield entry
            continue
        try:
            yield from iter_visible_files(entry.path, root, ignore_filter)
        except OSError as e:
            logger.warning("directory_unreadable", path=entry.rel, error=str(e))


def extract_content(
    root: Path,
    ignore_filter: IgnoreFilter,
    *,
    binary_detector: BinaryDetector = is_binary,
) -> str:
    """Concatenate the text content of every visible file under `root`.

    Each kept file becomes a block made of a `File: <rel>` header line, the
    raw content and a trailing newline; blocks are joined by a blank line.
    Blocks follow tree order. Files that are ignored, binary, not regular or
    unreadable are left out; unreadable ones are logged.

    Args:
        root (Path): the repository root
        ignore_filter (IgnoreFilter): predicate over root-relative paths
        binary_detector (BinaryDetector, optional): predicate deciding which files
            are binary. Defaults to `is_binary`.

    Returns:
        str: the concatenated file blocks
    """
    blocks: list[str] = []
    skipped_binary = 0
    for entry in iter_visible_files(root, root, ignore_filter):
        if not is_regular_file(entry.path):
            logger.warning("skipping_non_regular_file", path=entry.rel)
            continue
        if binary_detector(entry.path):
            skipped_binary += 1
            continue
        try:
            text = read_text(entry.path)
        except OSError as e:
            logger.warning("file_read_failed", path=entry.rel, error=str(e))
            continue
        blocks.append(f"{FILE_HEADER.format(rel=entry.display_rel)}\n{text}\n")
    logger.debug("content_extracted", files=len(blocks), skipped_binary=skipped_binary)
    return "\n".join(blocks)
