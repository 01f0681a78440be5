"""Handle-prefixed tag source adapter.

This module imports tags from a Laddr-style REST API whose handles
carry a classification prefix, e.g. ``tech.python``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core.constants import (
    DEFAULT_LADDR_HOST,
    LADDR_ACCEPTED_PREFIXES,
    LADDR_SILENT_PREFIXES,
    LADDR_TAGS_PATH,
    SOURCE_TYPE_LADDR,
)
from core.errors import SourceFetchError
from core.logging_config import get_logger
from core.types import ImportEntry, SkippedRecord, SourceReadResult
from ingest.http_fetch import HttpFetcher
from transforms.path_derivation import build_tree_path, is_path_segment, split_handle

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class HandlePrefixedSettings:
    """Settings for the handle-prefixed adapter.

    Attributes:
        default_host: Host queried when no source is given.
        accepted_prefixes: Prefixes that become tree directories.
        silent_prefixes: Prefixes excluded without a warning.
    """

    default_host: str = DEFAULT_LADDR_HOST
    accepted_prefixes: tuple[str, ...] = LADDR_ACCEPTED_PREFIXES
    silent_prefixes: tuple[str, ...] = LADDR_SILENT_PREFIXES


class HandlePrefixedSource:
    """Reads ``{"data": [{"Handle": ..., "Title": ...}]}`` tag listings."""

    source_type = SOURCE_TYPE_LADDR

    def __init__(
        self,
        fetcher: HttpFetcher,
        settings: HandlePrefixedSettings | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._settings = settings or HandlePrefixedSettings()

    def read(self, source: str | None = None) -> SourceReadResult:
        """Fetch the tag listing and map accepted tags to entries.

        Args:
            source: Optional host overriding the default host.

        Returns:
            Entries at ``{prefix}/{tag}.toml`` plus warned skips.

        Raises:
            SourceFetchError: If the listing cannot be fetched or is malformed.
        """
        url = _build_tags_url(source or self._settings.default_host)
        payload = self._fetcher.fetch_json(url, params={"format": "json"})
        return self.parse_records(_extract_records(url, payload))

    def parse_records(self, records: list[dict[str, Any]]) -> SourceReadResult:
        """Apply prefix filtering and path derivation to raw records."""
        entries: list[ImportEntry] = []
        skipped: list[SkippedRecord] = []
        for record in records:
            handle = str(record.get("Handle") or "")
            parts = split_handle(handle)
            if parts is None:
                skipped.append(_skip(handle, "unprefixed handle"))
                continue
            prefix, tag = parts
            if prefix in self._settings.silent_prefixes:
                continue
            if prefix not in self._settings.accepted_prefixes:
                skipped.append(_skip(handle, f"unhandled prefix '{prefix}'"))
                continue
            if not is_path_segment(tag):
                skipped.append(_skip(handle, "tag is not a single path segment"))
                continue
            entries.append(
                ImportEntry(
                    path=build_tree_path(tag, directory=prefix),
                    document={"title": record.get("Title")},
                )
            )
        return SourceReadResult(entries=tuple(entries), skipped=tuple(skipped))


def _build_tags_url(source: str) -> str:
    """Build the tag listing URL from a bare host or a full base URL."""
    base = source if "://" in source else f"http://{source}"
    return f"{base.rstrip('/')}{LADDR_TAGS_PATH}"


def _extract_records(url: str, payload: Any) -> list[dict[str, Any]]:
    """Extract the record list from the listing envelope.

    Raises:
        SourceFetchError: If the envelope has no ``data`` list of objects.
    """
    records = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(records, list) or not all(isinstance(item, dict) for item in records):
        raise SourceFetchError(
            f"Unexpected tag listing from {url}: expected an object with a 'data' list "
            "of tag objects."
        )
    return records


def _skip(handle: str, reason: str) -> SkippedRecord:
    _LOGGER.warning(
        "record_skipped", source_type=SOURCE_TYPE_LADDR, record=handle, reason=reason
    )
    return SkippedRecord(record_key=handle, reason=reason)
