"""Public SDK surface for taxonomy import.

This module provides a stable import path for library users.
It re-exports the pipeline entry point and typed option models.
"""

from __future__ import annotations

from core.config import ImportConfig
from core.types import ImportEntry, ImportOptions, ImportResult, SourceReadResult
from ingest.csv_categorized_source import CsvCategorizedSettings, CsvCategorizedSource
from ingest.flat_keyed_source import FlatKeyedSettings, FlatKeyedSource
from ingest.handle_prefixed_source import HandlePrefixedSettings, HandlePrefixedSource
from ingest.http_fetch import HttpFetcher
from ingest.pipeline import import_taxonomy
from ingest.source_registry import build_source, supported_source_types
from store.git_objects import LooseObjectStore, MemoryObjectStore
from store.import_tree import ImportTree
from transforms.canonical_serializer import serialize_document

__all__ = [
    "CsvCategorizedSettings",
    "CsvCategorizedSource",
    "FlatKeyedSettings",
    "FlatKeyedSource",
    "HandlePrefixedSettings",
    "HandlePrefixedSource",
    "HttpFetcher",
    "ImportConfig",
    "ImportEntry",
    "ImportOptions",
    "ImportResult",
    "ImportTree",
    "LooseObjectStore",
    "MemoryObjectStore",
    "SourceReadResult",
    "build_source",
    "import_taxonomy",
    "serialize_document",
    "supported_source_types",
]
