"""Source adapter registry.

This module maps explicit source-type tags onto adapter classes.
Adapters are never chosen by inspecting payload shape.
"""

from __future__ import annotations

from typing import Callable, Protocol

from core.constants import (
    SOURCE_TYPE_DEMOCRACYLAB,
    SOURCE_TYPE_LADDR,
    SOURCE_TYPE_MATCHMAKER,
    SUPPORTED_SOURCE_TYPES,
)
from core.errors import UnsupportedSourceTypeError
from core.types import SourceReadResult
from ingest.csv_categorized_source import CsvCategorizedSource
from ingest.flat_keyed_source import FlatKeyedSource
from ingest.handle_prefixed_source import HandlePrefixedSource
from ingest.http_fetch import HttpFetcher


class TaxonomySource(Protocol):
    """Capability shared by all source adapters."""

    source_type: str

    def read(self, source: str | None = None) -> SourceReadResult:
        """Fetch the source and return normalized entries."""
        ...


_SOURCE_FACTORIES: dict[str, Callable[[HttpFetcher], TaxonomySource]] = {
    SOURCE_TYPE_LADDR: HandlePrefixedSource,
    SOURCE_TYPE_MATCHMAKER: FlatKeyedSource,
    SOURCE_TYPE_DEMOCRACYLAB: CsvCategorizedSource,
}


def supported_source_types() -> tuple[str, ...]:
    """Return supported source-type tags."""
    return SUPPORTED_SOURCE_TYPES


def validate_source_type(source_type: str) -> None:
    """Ensure a source-type tag has a registered adapter.

    Raises:
        UnsupportedSourceTypeError: If the tag is unknown.
    """
    if source_type not in _SOURCE_FACTORIES:
        raise UnsupportedSourceTypeError(
            f"Unsupported source type '{source_type}'. "
            f"Use one of: {', '.join(supported_source_types())}."
        )


def build_source(source_type: str, fetcher: HttpFetcher) -> TaxonomySource:
    """Create the adapter registered for a source-type tag.

    Args:
        source_type: Source-type tag such as ``laddr``.
        fetcher: Fetch collaborator handed to the adapter.

    Returns:
        Adapter instance with default settings.

    Raises:
        UnsupportedSourceTypeError: If the tag is unknown.
    """
    validate_source_type(source_type)
    return _SOURCE_FACTORIES[source_type](fetcher)
