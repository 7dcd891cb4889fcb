from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from git_ingest.config import Digest
from git_ingest.exceptions import RepositoryNotFoundError
from git_ingest.file_manipulation import extract_content, is_binary
from git_ingest.git_operations import resolve_local_root
from git_ingest.ignore_rules import build_ignore_filter
from git_ingest.logging import logger
from git_ingest.output_construction import render_tree
from git_ingest.repository_url import classify

if TYPE_CHECKING:
    from collections.abc import Iterable

    from git_ingest.file_manipulation import BinaryDetector
    from git_ingest.settings import Settings


def extract_repository_content(
    root: str | Path,
    extra_ignore_patterns: Iterable[str] = (),
    *,
    binary_detector: BinaryDetector = is_binary,
) -> Digest:
    """Build the digest of a local repository.

    Content extraction and tree rendering are two separate passes over the
    filesystem sharing one ignore filter.

    Args:
        root (str | Path): the local repository root
        extra_ignore_patterns (Iterable[str], optional): gitignore-style patterns
            applied on top of `.git/` and the root `.gitignore`
        binary_detector (BinaryDetector, optional): predicate deciding which files
            are left out of the content. Defaults to `is_binary`.

    Raises:
        RepositoryNotFoundError: if `root` does not exist

    Returns:
        Digest: the tree and content of the repository
    """
    root = Path(root)
    if not root.exists():
        raise RepositoryNotFoundError(path=root)
    root = root.resolve()

    ignore_filter = build_ignore_filter(root, extra_ignore_patterns)
    content = extract_content(root, ignore_filter, binary_detector=binary_detector)
    tree = render_tree(root, ignore_filter)
    logger.info("repository_extracted", root=str(root), content_chars=len(content))
    return Digest(tree=tree, content=content)


def ingest(settings: Settings) -> Digest:
    """Classify the repository argument, clone it if remote, and extract its digest."""
    target = classify(settings.repository)
    with resolve_local_root(target) as root:
        return extract_repository_content(root, settings.ignore)
