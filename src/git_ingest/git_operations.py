from __future__ import annotations

import shutil
import subprocess  # noqa: S404
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from git_ingest.exceptions import GitCommandError
from git_ingest.logging import logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from git_ingest.config import RepositoryTarget

TEMP_DIR_PREFIX = "git-ingest-"


def clone_command(target: RepositoryTarget, destination: Path, *, git: str = "git") -> list[str]:
    """Build the `git clone` argument list for a remote target."""
    cmd = [git, "clone", "--depth", "1", "--quiet"]
    if target.branch:
        cmd.extend(["--branch", target.branch])
    cmd.extend(["--", str(target.clone_url), str(destination)])
    return cmd


def clone_repository(target: RepositoryTarget, destination: Path, *, git: str = "git") -> None:
    """Clone a remote target into `destination`, checking out `target.branch` when set.

    Args:
        target (RepositoryTarget): a remote target
        destination (Path): an empty directory to clone into
        git (str, optional): the git executable. Defaults to "git".

    Raises:
        GitCommandError: if git is missing or the clone fails
    """
    cmd = clone_command(target, destination, git=git)
    try:
        out = subprocess.run(  # noqa: S603
            cmd,
            text=True,
            capture_output=True,
            check=False,
        )
    except OSError as e:
        raise GitCommandError(command=" ".join(cmd), returncode=127, stdout="", stderr=str(e)) from e
    if out.returncode != 0:
        raise GitCommandError(
            command=" ".join(cmd),
            returncode=out.returncode,
            stdout=out.stdout,
            stderr=out.stderr,
        )


def remove_directory(path: Path) -> None:
    """Remove a directory tree, logging instead of raising on failure."""
    try:
        shutil.rmtree(path)
    except OSError as e:
        logger.warning("temp_dir_cleanup_failed", path=str(path), error=str(e))


@contextmanager
def temporary_directory(prefix: str = TEMP_DIR_PREFIX) -> Iterator[Path]:
    """Create a uniquely named scratch directory, removed on every exit path."""
    path = Path(tempfile.mkdtemp(prefix=prefix))
    try:
        yield path
    finally:
        remove_directory(path)


@contextmanager
def resolve_local_root(target: RepositoryTarget) -> Iterator[Path]:
    """Yield a local directory holding the target repository.

    Local targets are yielded as-is; remote ones are cloned into a temporary
    directory that lives as long as the context.
    """
    if not target.is_remote:
        yield Path(target.path)
        return
    with temporary_directory() as scratch:
        logger.info("cloning_repository", url=target.clone_url, branch=target.branch)
        clone_repository(target, scratch)
        yield scratch
