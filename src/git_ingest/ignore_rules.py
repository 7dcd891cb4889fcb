from __future__ import annotations

from typing import TYPE_CHECKING

import pathspec

from git_ingest.config import GITIGNORE_FILENAME, VCS_METADATA_PATTERN
from git_ingest.logging import logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path


def normalize_globs(globs: Iterable[str]) -> list[str]:
    """Strip whitespace around glob patterns and drop empty ones.

    Args:
        globs (Iterable[str]): the glob patterns to normalize

    Returns:
        list[str]: the normalized glob patterns
    """
    out: list[str] = []
    for g in globs:
        g2 = (g or "").strip()
        if not g2:
            continue
        out.append(g2)
    return out


class IgnoreFilter:
    """Union of gitignore-style pattern sources.

    Each source is compiled on its own, so a negation (`!pattern`) only
    re-includes paths excluded earlier in the same source. A path is ignored
    as soon as any source ignores it.

    Paths are relative to the repository root, use `/` separators, and
    directories carry a trailing `/` so that directory-only patterns apply.
    """

    def __init__(self, sources: Sequence[tuple[str, pathspec.GitIgnoreSpec]]) -> None:
        self._sources = list(sources)

    @classmethod
    def from_pattern_sources(cls, sources: Iterable[tuple[str, Iterable[str]]]) -> IgnoreFilter:
        return cls([(name, pathspec.GitIgnoreSpec.from_lines(lines)) for name, lines in sources])

    @property
    def source_names(self) -> list[str]:
        return [name for name, _ in self._sources]

    def matches(self, rel_path: str) -> bool:
        """Tell whether `rel_path` is excluded by any source."""
        return any(spec.match_file(rel_path) for _, spec in self._sources)

    __call__ = matches


def read_gitignore(root: Path) -> list[str] | None:
    """Read the `.gitignore` lines at the repository root, or None if there is none."""
    gitignore = root / GITIGNORE_FILENAME
    if not gitignore.is_file():
        return None
    return gitignore.read_text(encoding="utf-8", errors="replace").splitlines()


def build_ignore_filter(root: Path, extra_patterns: Iterable[str] = ()) -> IgnoreFilter:
    """Build the ignore filter shared by tree rendering and content extraction.

    Sources, in order:
    1) the VCS metadata directory at the root (always),
    2) the root `.gitignore`, when present,
    3) caller-supplied glob patterns (e.g. repeated `--ignore` flags).

    Args:
        root (Path): the repository root
        extra_patterns (Iterable[str]): additional gitignore-style patterns

    Returns:
        IgnoreFilter: a predicate over root-relative paths
    """
    sources: list[tuple[str, Iterable[str]]] = [("vcs", [VCS_METADATA_PATTERN])]
    gitignore_lines = read_gitignore(root)
    if gitignore_lines is not None:
        sources.append((GITIGNORE_FILENAME, gitignore_lines))
    extra = normalize_globs(extra_patterns)
    if extra:
        sources.append(("extra", extra))
    ignore_filter = IgnoreFilter.from_pattern_sources(sources)
    logger.debug("ignore_filter_built", root=str(root), sources=ignore_filter.source_names)
    return ignore_filter
