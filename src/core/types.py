"""Shared typed models.

This module defines immutable data models passed between source
adapters, the import pipeline, and the tree store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class ImportEntry:
    """One normalized tag document and the tree path it is written to.

    Attributes:
        path: Slash-separated tree path, e.g. ``tech/cloud.toml``.
        document: Canonical field mapping; ``None`` values mark absent fields.
    """

    path: str
    document: Mapping[str, Any]


@dataclass(frozen=True)
class SkippedRecord:
    """A source record excluded from the tree with a warning.

    Attributes:
        record_key: Identifying value of the record (handle, row number).
        reason: Short human-readable reason for the skip.
    """

    record_key: str
    reason: str


@dataclass(frozen=True)
class SourceReadResult:
    """Adapter output for one source payload.

    Attributes:
        entries: Accepted entries in source order.
        skipped: Records dropped with a warning.
    """

    entries: tuple[ImportEntry, ...]
    skipped: tuple[SkippedRecord, ...] = ()


@dataclass(frozen=True)
class ImportOptions:
    """Import command options.

    Attributes:
        source_type: Source type tag selecting the adapter.
        source: Optional host or URL overriding the adapter default.
        append: Layer imported data on top of the current tree.
        commit_to: Optional branch or ref to commit the imported tree to.
        commit_message: Optional commit message used with ``commit_to``.
    """

    source_type: str
    source: str | None = None
    append: bool = False
    commit_to: str | None = None
    commit_message: str | None = None


@dataclass(frozen=True)
class ImportResult:
    """Outcome of one import run.

    Attributes:
        tree_id: Content identifier of the finalized tree.
        entry_count: Number of documents written into the tree.
        skipped_count: Number of records skipped with a warning.
        commit_id: Commit id when the tree was committed to a ref.
    """

    tree_id: str
    entry_count: int
    skipped_count: int
    commit_id: str | None = None


@dataclass(frozen=True)
class CommitIdentity:
    """Author and committer identity for created commits."""

    name: str
    email: str
