"""CSV-categorized tag source adapter.

This module imports a tag definitions CSV export whose rows carry a
category and canonical name. Rows are buffered until the stream ends
so that path derivation only runs over the complete row set.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from typing import Iterable

from core.constants import (
    CSV_CATEGORY_FIELD,
    CSV_NAME_FIELD,
    CSV_OPTIONAL_FIELDS,
    DEFAULT_DEMOCRACYLAB_URL,
    SOURCE_TYPE_DEMOCRACYLAB,
)
from core.errors import SourceFetchError
from core.logging_config import get_logger
from core.types import ImportEntry, SkippedRecord, SourceReadResult
from ingest.http_fetch import HttpFetcher
from transforms.path_derivation import (
    build_tree_path,
    is_path_segment,
    normalize_category,
    normalize_field_name,
)

_LOGGER = get_logger(__name__)
_BYTE_ORDER_MARK = "\ufeff"


@dataclass(frozen=True)
class CsvCategorizedSettings:
    """Settings for the CSV-categorized adapter.

    Attributes:
        default_url: CSV export URL fetched when no source is given.
        category_field: Canonical field naming the tree directory.
        name_field: Canonical field naming the document file.
        optional_fields: Fields omitted from output when blank.
    """

    default_url: str = DEFAULT_DEMOCRACYLAB_URL
    category_field: str = CSV_CATEGORY_FIELD
    name_field: str = CSV_NAME_FIELD
    optional_fields: tuple[str, ...] = CSV_OPTIONAL_FIELDS


class CsvCategorizedSource:
    """Reads category/canonical-name CSV exports."""

    source_type = SOURCE_TYPE_DEMOCRACYLAB

    def __init__(
        self,
        fetcher: HttpFetcher,
        settings: CsvCategorizedSettings | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._settings = settings or CsvCategorizedSettings()

    def read(self, source: str | None = None) -> SourceReadResult:
        """Stream the CSV export, then map every buffered row to an entry.

        Args:
            source: Optional URL overriding the default export location.

        Returns:
            Entries at ``{category}/{canonical_name}.toml`` plus warned skips.

        Raises:
            SourceFetchError: If the download or CSV decoding fails.
        """
        url = source or self._settings.default_url
        with self._fetcher.stream_lines(url) as lines:
            rows = read_csv_rows(url, lines)
        _LOGGER.info("csv_rows_buffered", url=url, row_count=len(rows))
        return self.parse_rows(rows)

    def parse_rows(self, rows: list[dict[str, str]]) -> SourceReadResult:
        """Normalize buffered rows into entries.

        Args:
            rows: Raw rows keyed by original column header.

        Returns:
            Entries in row order plus rows skipped for missing path fields.
        """
        entries: list[ImportEntry] = []
        skipped: list[SkippedRecord] = []
        for row_number, row in enumerate(rows, 1):
            fields = _normalize_row(row)
            category = fields.get(self._settings.category_field, "").strip()
            name = fields.get(self._settings.name_field, "").strip()
            if not category or not name:
                skipped.append(_skip(row_number, "missing category or canonical name"))
                continue
            directory = normalize_category(category)
            if not is_path_segment(directory) or not is_path_segment(name):
                skipped.append(_skip(row_number, "category or canonical name is not a single path segment"))
                continue
            entries.append(
                ImportEntry(
                    path=build_tree_path(name, directory=directory),
                    document=self._build_document(fields),
                )
            )
        return SourceReadResult(entries=tuple(entries), skipped=tuple(skipped))

    def _build_document(self, fields: dict[str, str]) -> dict[str, str | None]:
        document: dict[str, str | None] = dict(fields)
        document[self._settings.category_field] = None
        document[self._settings.name_field] = None
        for field_name in self._settings.optional_fields:
            document[field_name] = fields.get(field_name) or None
        return document


def read_csv_rows(url: str, lines: Iterable[str]) -> list[dict[str, str]]:
    """Decode CSV lines into a fully materialized list of row mappings.

    Args:
        url: Source URL for error context.
        lines: Text lines including the header row.

    Returns:
        Rows keyed by the original column headers.

    Raises:
        SourceFetchError: If the CSV payload cannot be decoded.
    """
    reader = csv.DictReader(_strip_byte_order_mark(lines))
    rows: list[dict[str, str]] = []
    try:
        for row in reader:
            rows.append(
                {key: value or "" for key, value in row.items() if key is not None}
            )
    except csv.Error as error:
        raise SourceFetchError(
            f"Failed to decode CSV from {url} at line {reader.line_num}: {error}."
        ) from error
    return rows


def _normalize_row(row: dict[str, str]) -> dict[str, str]:
    return {normalize_field_name(header): value for header, value in row.items()}


def _strip_byte_order_mark(lines: Iterable[str]) -> Iterable[str]:
    for index, line in enumerate(lines):
        yield line.removeprefix(_BYTE_ORDER_MARK) if index == 0 else line


def _skip(row_number: int, reason: str) -> SkippedRecord:
    record_key = f"row {row_number}"
    _LOGGER.warning(
        "record_skipped",
        source_type=SOURCE_TYPE_DEMOCRACYLAB,
        record=record_key,
        reason=reason,
    )
    return SkippedRecord(record_key=record_key, reason=reason)
