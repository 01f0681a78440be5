"""Runtime configuration model for taxonomy import.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_COMMITTER_EMAIL,
    DEFAULT_COMMITTER_NAME,
    DEFAULT_GIT_DIR,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
)
from core.errors import ImportConfigError
from core.types import CommitIdentity


@dataclass(frozen=True)
class ImportConfig:
    """Validated runtime configuration.

    Attributes:
        git_dir: Git directory that receives tree, blob, and commit objects.
        http_timeout: Timeout in seconds for source fetches.
        committer: Identity recorded on commits created with ``--commit-to``.
    """

    git_dir: Path
    http_timeout: float
    committer: CommitIdentity

    @classmethod
    def from_env(cls) -> "ImportConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ImportConfigError: If environment values are invalid.
        """
        git_dir_value = os.getenv("TAXONOMY_GIT_DIR") or os.getenv("GIT_DIR") or str(
            DEFAULT_GIT_DIR
        )
        timeout_value = os.getenv("TAXONOMY_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT_SECONDS))
        committer = CommitIdentity(
            name=os.getenv("TAXONOMY_COMMITTER_NAME", DEFAULT_COMMITTER_NAME),
            email=os.getenv("TAXONOMY_COMMITTER_EMAIL", DEFAULT_COMMITTER_EMAIL),
        )
        return cls(
            git_dir=Path(git_dir_value).expanduser().resolve(),
            http_timeout=_parse_http_timeout(timeout_value),
            committer=committer,
        )


def _parse_http_timeout(raw_value: str) -> float:
    """Parse the HTTP timeout environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Positive timeout in seconds.

    Raises:
        ImportConfigError: If value is not a positive number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise ImportConfigError(
            "Invalid TAXONOMY_HTTP_TIMEOUT value: "
            f"expected number of seconds, got '{raw_value}'. "
            "Set TAXONOMY_HTTP_TIMEOUT to a numeric value."
        ) from error
    if timeout <= 0:
        raise ImportConfigError(
            f"Invalid TAXONOMY_HTTP_TIMEOUT value: expected a positive number, got {timeout}."
        )
    return timeout
