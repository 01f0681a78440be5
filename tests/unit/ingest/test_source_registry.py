"""Unit tests for source adapter dispatch."""

from __future__ import annotations

import httpx
import pytest

from core.errors import UnsupportedSourceTypeError
from ingest.csv_categorized_source import CsvCategorizedSource
from ingest.flat_keyed_source import FlatKeyedSource
from ingest.handle_prefixed_source import HandlePrefixedSource
from ingest.http_fetch import HttpFetcher
from ingest.source_registry import build_source, supported_source_types


def _fetcher() -> HttpFetcher:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))
    return HttpFetcher(client=httpx.Client(transport=transport))


@pytest.mark.parametrize(
    ("source_type", "expected_class"),
    [
        ("laddr", HandlePrefixedSource),
        ("matchmaker", FlatKeyedSource),
        ("democracylab", CsvCategorizedSource),
    ],
)
def test_build_source_selects_adapter_by_tag(source_type: str, expected_class: type) -> None:
    """Each tag should map onto exactly one adapter class."""
    assert isinstance(build_source(source_type, _fetcher()), expected_class)


def test_build_source_rejects_unknown_tag() -> None:
    """Unknown tags should fail with a dedicated error."""
    with pytest.raises(UnsupportedSourceTypeError):
        build_source("airtable", _fetcher())

    assert "airtable" not in supported_source_types()
