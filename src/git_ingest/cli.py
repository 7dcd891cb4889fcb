"""
git-ingest: turn a Git repository into a single text digest for an LLM.

The repository argument is a local path (default: the current directory) or
a repository URL. Remote repositories are cloned into a temporary directory
first; GitHub and GitLab web URLs are accepted, including `/tree/<branch>`
links.

The digest is printed to stdout:

    Repository Tree Structure:
    <tree>

    Repository Content:
    File: <path>
    <content>

`.git/`, the root `.gitignore` and any `--ignore` globs filter both sections;
binary files are listed in the tree but left out of the content.

Usage
-----
    git-ingest
    git-ingest path/to/repo --ignore "*.lock" --ignore "docs/"
    git-ingest https://github.com/owner/repo/tree/dev --copy

Defaults can also come from the environment or a `.env` file:
`GIT_INGEST_IGNORE` (comma-separated globs) and `GIT_INGEST_LOG_FILE`.
"""

from __future__ import annotations

import argparse
import locale
import sys
from typing import TYPE_CHECKING

from git_ingest import __version__
from git_ingest.clipboard import copy_to_clipboard
from git_ingest.exceptions import GitIngestError
from git_ingest.ingest import ingest
from git_ingest.logging import logger, setup_logging
from git_ingest.settings import Settings, read_environment, split_patterns

if TYPE_CHECKING:
    from collections.abc import Sequence

COPIED_MESSAGE = "Content has been copied to clipboard!"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="git-ingest",
        description="Turn a Git repository into a text digest for LLM consumption.",
        epilog="Examples:\n"
        "  git-ingest\n"
        "  git-ingest ./my-repo --ignore '*.lock'\n"
        "  git-ingest https://github.com/owner/repo/tree/main --copy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "repository",
        nargs="?",
        default=".",
        help="Local path or repository URL (default: current directory).",
    )
    p.add_argument(
        "-c",
        "--copy",
        action="store_true",
        help="Copy the digest to the clipboard instead of printing it.",
    )
    p.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="GLOB",
        help="Additional gitignore-style pattern to exclude (repeatable).",
    )
    p.add_argument("--log-file", type=str, default="", help="Log file path.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    env = read_environment()
    args = build_parser().parse_args(argv)
    return Settings(
        repository=args.repository,
        copy_to_clipboard=args.copy,
        ignore=[*split_patterns(env.get("ignore", "")), *args.ignore],
        log_file=args.log_file or env.get("log_file", ""),
    )


def use_user_collation() -> None:
    """Sort names with the user's collation locale, keeping the C locale if it is unavailable."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.debug("collation_locale_unavailable", error=str(e))


def main(argv: Sequence[str] | None = None) -> int:
    settings = parse_args(argv)
    if settings.log_file:
        setup_logging(settings.log_file)
    use_user_collation()

    try:
        output = ingest(settings).render()
        if settings.copy_to_clipboard:
            copy_to_clipboard(output)
            print(COPIED_MESSAGE)
        else:
            print(output)
    except (GitIngestError, OSError) as e:
        logger.error("git_ingest_failed", repository=settings.repository, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
