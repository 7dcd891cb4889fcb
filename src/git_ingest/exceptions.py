from dataclasses import dataclass
from pathlib import Path


@dataclass(eq=False)
class GitIngestError(Exception):
    """Base exception for errors in the git_ingest package."""

    def __str__(self) -> str:
        return self.__doc__ or self.__class__.__name__


@dataclass(eq=False)
class RepositoryNotFoundError(GitIngestError):
    """Raised when the repository path to extract does not exist."""

    path: Path

    def __str__(self) -> str:
        return f"Repository path does not exist: {self.path}"


@dataclass(eq=False)
class InvalidRepositoryUrlError(GitIngestError):
    """Raised when a repository URL is recognized but cannot be normalized."""

    url: str

    def __str__(self) -> str:
        return f"Invalid repository URL: {self.url}"


@dataclass(eq=False)
class GitCommandError(GitIngestError):
    """Raised when a git command fails."""

    command: str
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        detail = self.stderr.strip() or self.stdout.strip() or f"exit status {self.returncode}"
        return f"Failed to clone repository: {detail}"


@dataclass(eq=False)
class ClipboardError(GitIngestError):
    """Raised when the digest cannot be placed on the system clipboard."""

    reason: str

    def __str__(self) -> str:
        return f"Could not copy to clipboard: {self.reason}"
