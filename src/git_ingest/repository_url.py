"""Recognize repository URLs and rewrite GitHub/GitLab web URLs into clone targets.

Anything that is not recognized as a URL is a local filesystem path.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit, urlunsplit

from git_ingest.config import RepositoryTarget
from git_ingest.exceptions import InvalidRepositoryUrlError

GIT_SUFFIX = ".git"

_SSH_PREFIX = "git@"
_GIT_SCHEMES = frozenset({"git", "ssh"})
_WEB_SCHEMES = frozenset({"http", "https"})
# Ref segments only valid right after the project; seen deeper in a GitLab
# namespace they mean a legacy link without the "/-/" separator.
_REF_SEGMENTS = frozenset({"tree", "blob"})

# Matched against the URL path with leading and trailing slashes removed.
_WEB_URL_PATTERNS: dict[str, re.Pattern[str]] = {
    "github.com": re.compile(
        r"(?P<owner>[^/]+)/(?P<repo>[^/]+)(?:/(?:tree|blob)/(?P<branch>[^/]+)(?:/.*)?)?",
    ),
    # GitLab namespaces nest (group/subgroup/project) and every page below
    # the project lives under "/-/".
    "gitlab.com": re.compile(
        r"(?P<owner>[^/]+(?:/[^/]+)*?)/(?P<repo>[^/]+)(?:/-/(?:tree|blob)/(?P<branch>[^/]+)(?:/.*)?)?",
    ),
}


def _web_host(hostname: str | None) -> str:
    return (hostname or "").lower().removeprefix("www.")


def with_git_suffix(url: str) -> str:
    """Strip a trailing `.git` (if any) and append exactly one."""
    return url.removesuffix(GIT_SUFFIX) + GIT_SUFFIX


def is_repository_url(value: str) -> bool:
    """Tell whether `value` looks like a repository URL rather than a local path.

    Recognized shapes are SSH (`git@host:owner/repo.git`), `git://` and
    `ssh://` URLs, any HTTP(S) URL whose path ends in `.git`, and GitHub or
    GitLab web URLs.

    Args:
        value (str): the repository argument as given by the user

    Returns:
        bool: True if `value` should be cloned, False if it is a local path
    """
    if not value:
        return False
    value = value.strip()
    if value.startswith(_SSH_PREFIX):
        return True
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    scheme = parts.scheme.lower()
    if scheme in _GIT_SCHEMES:
        return bool(parts.netloc)
    if scheme not in _WEB_SCHEMES or not parts.netloc:
        return False
    if _web_host(parts.hostname) in _WEB_URL_PATTERNS:
        return True
    return parts.path.rstrip("/").endswith(GIT_SUFFIX)


def normalize_repository_url(url: str) -> RepositoryTarget:
    """Turn a repository URL into a canonical clone URL plus optional branch.

    - Trailing slashes are stripped and the result always ends in exactly one `.git`.
    - GitHub `/tree/<ref>` or `/blob/<ref>` and GitLab `/-/tree/<ref>` or
      `/-/blob/<ref>` segments become the `branch`; anything after the ref is dropped.
    - A web URL pointing at the repository root yields no branch.

    Args:
        url (str): a value for which `is_repository_url` holds

    Raises:
        InvalidRepositoryUrlError: if the URL cannot be turned into a clone target

    Returns:
        RepositoryTarget: a remote target
    """
    url = url.strip().rstrip("/")
    if url.startswith(_SSH_PREFIX):
        return RepositoryTarget.remote(with_git_suffix(url))

    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidRepositoryUrlError(url=url) from e
    scheme = parts.scheme.lower()

    if scheme in _GIT_SCHEMES and parts.netloc:
        return RepositoryTarget.remote(with_git_suffix(url))
    if scheme not in _WEB_SCHEMES or not parts.netloc:
        raise InvalidRepositoryUrlError(url=url)

    host = _web_host(parts.hostname)
    pattern = _WEB_URL_PATTERNS.get(host)
    if pattern is None:
        path = parts.path.rstrip("/")
        if not path.endswith(GIT_SUFFIX):
            raise InvalidRepositoryUrlError(url=url)
        return RepositoryTarget.remote(urlunsplit((scheme, parts.netloc, path, "", "")))

    match = pattern.fullmatch(parts.path.strip("/"))
    if match is None:
        raise InvalidRepositoryUrlError(url=url)
    owner_segments = match["owner"].split("/")
    if "-" in owner_segments or _REF_SEGMENTS.intersection(owner_segments[2:]):
        raise InvalidRepositoryUrlError(url=url)
    repo = match["repo"].removesuffix(GIT_SUFFIX)
    if not repo:
        raise InvalidRepositoryUrlError(url=url)
    return RepositoryTarget.remote(f"https://{host}/{match['owner']}/{repo}{GIT_SUFFIX}", match["branch"])


def classify(value: str) -> RepositoryTarget:
    """Classify the repository argument as a remote clone target or a local path.

    Args:
        value (str): a local path or a repository URL

    Raises:
        InvalidRepositoryUrlError: if `value` is a URL that cannot be normalized

    Returns:
        RepositoryTarget: the classified target
    """
    if is_repository_url(value):
        return normalize_repository_url(value)
    return RepositoryTarget.local(value)
