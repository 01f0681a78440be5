"""Unit tests for the handle-prefixed source adapter."""

from __future__ import annotations

import httpx
import pytest

from core.errors import SourceFetchError
from ingest.handle_prefixed_source import HandlePrefixedSettings, HandlePrefixedSource
from ingest.http_fetch import HttpFetcher


def _fetcher(payload: object, requests: list[httpx.Request] | None = None) -> HttpFetcher:
    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return httpx.Response(200, json=payload)

    return HttpFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)))


def _source(records: list[dict[str, str]]) -> HandlePrefixedSource:
    return HandlePrefixedSource(_fetcher({"data": records}))


def test_read_maps_prefixed_handle_to_nested_path() -> None:
    """Accepted handles should land at prefix/tag.toml without the handle."""
    result = _source([{"Handle": "tech.cloud", "Title": "Cloud"}]).read("example.org")

    assert result.entries[0].path == "tech/cloud.toml"
    assert dict(result.entries[0].document) == {"title": "Cloud"}


def test_read_drops_event_tags_silently() -> None:
    """Event tags should be excluded without a skip record."""
    result = _source([{"Handle": "event.launch", "Title": "Launch"}]).read()

    assert result.entries == () and result.skipped == ()


def test_read_skips_unprefixed_handle_with_warning() -> None:
    """Handles without a dot should be reported as skipped."""
    result = _source([{"Handle": "orphan", "Title": "Orphan"}]).read()

    assert result.entries == ()
    assert result.skipped[0].record_key == "orphan"


def test_read_skips_unhandled_prefix_with_warning() -> None:
    """Prefixes outside the accepted set should be reported as skipped."""
    result = _source([{"Handle": "misc.widget", "Title": "Widget"}]).read()

    assert result.entries == ()
    assert "misc" in result.skipped[0].reason


def test_read_queries_tags_endpoint_as_json() -> None:
    """The listing should be requested from /tags with format=json."""
    requests: list[httpx.Request] = []
    source = HandlePrefixedSource(_fetcher({"data": []}, requests))

    source.read("tags.example.org")

    assert str(requests[0].url) == "http://tags.example.org/tags?format=json"


def test_read_uses_configured_default_host() -> None:
    """Per-instance settings should override the default host."""
    requests: list[httpx.Request] = []
    settings = HandlePrefixedSettings(default_host="localhost:8080")
    source = HandlePrefixedSource(_fetcher({"data": []}, requests), settings)

    source.read()

    assert requests[0].url.host == "localhost"


def test_accepted_prefixes_can_be_overridden() -> None:
    """Settings should control which prefixes are accepted."""
    settings = HandlePrefixedSettings(accepted_prefixes=("misc",))
    source = HandlePrefixedSource(_fetcher({"data": []}), settings)

    result = source.parse_records([{"Handle": "misc.widget", "Title": "Widget"}])

    assert result.entries[0].path == "misc/widget.toml"


def test_read_raises_for_missing_data_envelope() -> None:
    """A payload without a data list should abort the run."""
    source = HandlePrefixedSource(_fetcher({"tags": []}))

    with pytest.raises(SourceFetchError):
        source.read()


def test_read_skips_tag_containing_slash() -> None:
    """A tag with a slash would nest deeper than prefix/tag.toml."""
    result = _source(
        [{"Handle": "tech.a/b", "Title": "Nested"}, {"Handle": "tech.cloud", "Title": "Cloud"}]
    ).read()

    assert [entry.path for entry in result.entries] == ["tech/cloud.toml"]
    assert result.skipped[0].record_key == "tech.a/b"
