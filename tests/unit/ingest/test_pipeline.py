"""Unit tests for the taxonomy import pipeline."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from core.config import ImportConfig
from core.errors import SourceFetchError, UnimplementedModeError, UnsupportedSourceTypeError
from core.types import CommitIdentity, ImportOptions
from ingest.http_fetch import HttpFetcher
from ingest.pipeline import build_default_commit_message, import_taxonomy
from store.git_objects import MemoryObjectStore

_LADDR_PAYLOAD = {
    "data": [
        {"Handle": "tech.cloud", "Title": "Cloud"},
        {"Handle": "topic.housing", "Title": "Housing"},
        {"Handle": "event.launch", "Title": "Launch"},
        {"Handle": "orphan", "Title": "Orphan"},
    ]
}


def _config(git_dir: Path) -> ImportConfig:
    return ImportConfig(
        git_dir=git_dir,
        http_timeout=5.0,
        committer=CommitIdentity(name="Importer", email="importer@example.org"),
    )


def _fetcher(requests: list[httpx.Request], status_code: int = 200) -> HttpFetcher:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, json=_LADDR_PAYLOAD)

    return HttpFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_import_taxonomy_counts_entries_and_skips(tmp_path: Path) -> None:
    """Accepted records are written and warned drops are counted."""
    requests: list[httpx.Request] = []

    result = import_taxonomy(
        ImportOptions(source_type="laddr", source="example.org"),
        _config(tmp_path),
        fetcher=_fetcher(requests),
        object_store=MemoryObjectStore(),
    )

    assert (result.entry_count, result.skipped_count) == (2, 1)


def test_import_taxonomy_is_idempotent(tmp_path: Path) -> None:
    """The same payload should always finalize to the same tree id."""
    requests: list[httpx.Request] = []
    options = ImportOptions(source_type="laddr")

    first = import_taxonomy(options, _config(tmp_path), _fetcher(requests), MemoryObjectStore())
    second = import_taxonomy(options, _config(tmp_path), _fetcher(requests), MemoryObjectStore())

    assert first.tree_id == second.tree_id


def test_import_taxonomy_rejects_append_before_fetch(tmp_path: Path) -> None:
    """Append mode should fail fast without touching the source."""
    requests: list[httpx.Request] = []

    with pytest.raises(UnimplementedModeError):
        import_taxonomy(
            ImportOptions(source_type="laddr", append=True),
            _config(tmp_path),
            fetcher=_fetcher(requests),
            object_store=MemoryObjectStore(),
        )

    assert requests == []


def test_import_taxonomy_rejects_unknown_source_before_fetch(tmp_path: Path) -> None:
    """Unknown source types should fail before any request."""
    requests: list[httpx.Request] = []

    with pytest.raises(UnsupportedSourceTypeError):
        import_taxonomy(
            ImportOptions(source_type="airtable"),
            _config(tmp_path),
            fetcher=_fetcher(requests),
            object_store=MemoryObjectStore(),
        )

    assert requests == []


def test_import_taxonomy_does_not_finalize_on_fetch_failure(tmp_path: Path) -> None:
    """Fetch failures abort the run without writing a tree."""
    requests: list[httpx.Request] = []
    store = MemoryObjectStore()

    with pytest.raises(SourceFetchError):
        import_taxonomy(
            ImportOptions(source_type="laddr"),
            _config(tmp_path),
            fetcher=_fetcher(requests, status_code=500),
            object_store=store,
        )

    assert store.objects == {}


def test_build_default_commit_message_mentions_source() -> None:
    """Default messages name the source type and location."""
    options = ImportOptions(source_type="laddr", source="example.org")

    assert build_default_commit_message(options) == "imported laddr from example.org"
