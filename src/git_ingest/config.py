from __future__ import annotations

import os
from enum import StrEnum, auto
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

GITIGNORE_FILENAME = ".gitignore"

# Anchored to the repository root; covers the directory and a worktree ".git" file.
VCS_METADATA_PATTERN = "/.git"

BINARY_SNIFF_BYTES = 8000

TREE_BRANCH = "├── "
TREE_CORNER = "└── "
TREE_PIPE = "│   "
TREE_BLANK = "    "

TREE_SECTION_HEADER = "Repository Tree Structure:"
CONTENT_SECTION_HEADER = "Repository Content:"
FILE_HEADER = "File: {rel}"


def printable(name: str) -> str:
    """Replace undecodable bytes of a filesystem name with U+FFFD so it can be printed."""
    return os.fsencode(name).decode("utf-8", errors="replace")


class RepositoryKind(StrEnum):
    """Where the repository to digest lives."""

    LOCAL = auto()
    REMOTE = auto()


class RepositoryTarget(BaseModel):
    """A classified repository argument.

    Attributes:
        kind: Local filesystem path or remote clone target.
        path: Filesystem path (local targets only).
        clone_url: Canonical clone URL (remote targets only).
        branch: Branch or ref extracted from a web URL, if any (remote targets only).
    """

    model_config = ConfigDict(frozen=True)

    kind: RepositoryKind
    path: Path | None = None
    clone_url: str | None = None
    branch: str | None = None

    @model_validator(mode="after")
    def _check_kind_fields(self) -> RepositoryTarget:
        if self.kind is RepositoryKind.LOCAL and (self.path is None or self.clone_url is not None):
            msg = "local targets need a path and no clone_url"
            raise ValueError(msg)
        if self.kind is RepositoryKind.REMOTE and (self.clone_url is None or self.path is not None):
            msg = "remote targets need a clone_url and no path"
            raise ValueError(msg)
        return self

    @classmethod
    def local(cls, path: str | Path) -> RepositoryTarget:
        return cls(kind=RepositoryKind.LOCAL, path=Path(path))

    @classmethod
    def remote(cls, clone_url: str, branch: str | None = None) -> RepositoryTarget:
        return cls(kind=RepositoryKind.REMOTE, clone_url=clone_url, branch=branch)

    @property
    def is_remote(self) -> bool:
        return self.kind is RepositoryKind.REMOTE


class FileEntry(BaseModel):
    """A directory entry met while walking a repository.

    Attributes:
        path: Absolute path on disk.
        rel: Path relative to the repository root, with POSIX separators.
        is_dir: Whether the entry is a directory that can be descended into.
    """

    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Absolute path")
    rel: str = Field(..., description="Path relative to repository root")
    is_dir: bool = Field(default=False, description="Descendable directory")

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def display_name(self) -> str:
        return printable(self.name)

    @property
    def display_rel(self) -> str:
        return printable(self.rel)

    @computed_field
    @property
    def match_path(self) -> str:
        """The path handed to ignore rules; directories carry a trailing slash."""
        return f"{self.rel}/" if self.is_dir else self.rel


class TreeLine(BaseModel):
    """One rendered line of the repository tree.

    `last_flags[i]` tells whether the ancestor at depth `i` (the entry itself
    for the final element) is the last visible sibling at its level.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    last_flags: tuple[bool, ...] = Field(..., min_length=1)

    @computed_field
    @property
    def depth(self) -> int:
        return len(self.last_flags) - 1

    def render(self) -> str:
        prefix = "".join(TREE_BLANK if last else TREE_PIPE for last in self.last_flags[:-1])
        connector = TREE_CORNER if self.last_flags[-1] else TREE_BRANCH
        return f"{prefix}{connector}{self.name}"


class Digest(BaseModel):
    """The tree listing and concatenated file contents of one repository."""

    model_config = ConfigDict(frozen=True)

    tree: str = ""
    content: str = ""

    def render(self) -> str:
        return f"{TREE_SECTION_HEADER}\n{self.tree}\n\n{CONTENT_SECTION_HEADER}\n{self.content}"
