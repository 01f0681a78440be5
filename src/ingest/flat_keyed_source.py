"""Flat-keyed tag source adapter.

This module imports a JSON object mapping tag keys to tag records,
writing each record to ``{key}.toml`` at the tree root.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core.constants import (
    DEFAULT_MATCHMAKER_URL,
    MATCHMAKER_IDENTITY_FIELD,
    SOURCE_TYPE_MATCHMAKER,
)
from core.errors import SourceFetchError
from core.logging_config import get_logger
from core.types import ImportEntry, SkippedRecord, SourceReadResult
from ingest.http_fetch import HttpFetcher
from transforms.path_derivation import build_tree_path, is_path_segment

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class FlatKeyedSettings:
    """Settings for the flat-keyed adapter.

    Attributes:
        default_url: URL fetched when no source is given.
        identity_field: Record field that duplicates the key and is dropped.
    """

    default_url: str = DEFAULT_MATCHMAKER_URL
    identity_field: str = MATCHMAKER_IDENTITY_FIELD


class FlatKeyedSource:
    """Reads ``{tag_key: {field: value}}`` JSON blobs."""

    source_type = SOURCE_TYPE_MATCHMAKER

    def __init__(self, fetcher: HttpFetcher, settings: FlatKeyedSettings | None = None) -> None:
        self._fetcher = fetcher
        self._settings = settings or FlatKeyedSettings()

    def read(self, source: str | None = None) -> SourceReadResult:
        """Fetch the JSON blob and map every key to an entry.

        Raises:
            SourceFetchError: If the payload is not an object of objects.
        """
        url = source or self._settings.default_url
        payload = self._fetcher.fetch_json(url)
        if not isinstance(payload, dict):
            raise SourceFetchError(
                f"Unexpected payload from {url}: expected a JSON object keyed by tag."
            )
        return self.parse_records(payload)

    def parse_records(self, records: dict[str, Any]) -> SourceReadResult:
        """Build one entry per tag key, in payload order.

        Keys that cannot be a single file name are skipped with a warning.
        """
        entries: list[ImportEntry] = []
        skipped: list[SkippedRecord] = []
        for key, record in records.items():
            if not isinstance(record, dict):
                raise SourceFetchError(
                    f"Invalid record for tag '{key}': expected a JSON object, "
                    f"got {type(record).__name__}."
                )
            if not is_path_segment(str(key)):
                skipped.append(_skip(str(key), "key is not a single path segment"))
                continue
            document = {**record, self._settings.identity_field: None}
            entries.append(ImportEntry(path=build_tree_path(str(key)), document=document))
        return SourceReadResult(entries=tuple(entries), skipped=tuple(skipped))


def _skip(key: str, reason: str) -> SkippedRecord:
    _LOGGER.warning("record_skipped", source_type=SOURCE_TYPE_MATCHMAKER, record=key, reason=reason)
    return SkippedRecord(record_key=key, reason=reason)
