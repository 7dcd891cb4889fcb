from __future__ import annotations

import os

from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, ConfigDict, Field

ENV_FILE = find_dotenv(usecwd=True)
ENV_PREFIX = "GIT_INGEST_"


def read_environment() -> dict[str, str]:
    """Collect `GIT_INGEST_*` variables from the `.env` file and the process environment.

    Process variables win over the `.env` file.

    Returns:
        dict[str, str]: values keyed by the lower-cased name without the prefix
            (e.g. `GIT_INGEST_LOG_FILE` becomes `log_file`)
    """
    values: dict[str, str] = {}
    if ENV_FILE:
        values.update({k: v for k, v in dotenv_values(ENV_FILE).items() if v is not None})
    values.update(os.environ)
    return {k.removeprefix(ENV_PREFIX).lower(): v for k, v in values.items() if k.startswith(ENV_PREFIX)}


def split_patterns(raw: str) -> list[str]:
    """Split a comma-separated list of globs, dropping blanks."""
    return [p.strip() for p in raw.split(",") if p.strip()]


class Settings(BaseModel):
    """Configuration settings for one git_ingest invocation."""

    model_config = ConfigDict(frozen=True)

    repository: str = Field(default=".", description="Local path or repository URL.")
    copy_to_clipboard: bool = Field(default=False, description="Copy the digest to the clipboard.")
    ignore: list[str] = Field(default_factory=list, description="Extra ignore globs.")
    log_file: str = Field(default="", description="Log file path.")
