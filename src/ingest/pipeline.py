"""Taxonomy import orchestration.

This module coordinates adapter selection, source reads, canonical
serialization, tree assembly, and optional commits for one run.
"""

from __future__ import annotations

from datetime import datetime, timezone

from core.config import ImportConfig
from core.errors import UnimplementedModeError
from core.logging_config import get_logger
from core.types import ImportEntry, ImportOptions, ImportResult, SourceReadResult
from ingest.http_fetch import HttpFetcher
from ingest.source_registry import build_source, validate_source_type
from store.commit_writer import (
    collect_parents,
    commit_tree,
    normalize_commit_ref,
    update_ref,
)
from store.git_objects import LooseObjectStore, ObjectStore
from store.import_tree import ImportTree
from transforms.canonical_serializer import serialize_document

_LOGGER = get_logger(__name__)


class ImportPipelineRunner:
    """Single-use runner for one taxonomy import."""

    def __init__(
        self,
        options: ImportOptions,
        config: ImportConfig,
        fetcher: HttpFetcher | None = None,
        object_store: ObjectStore | None = None,
    ) -> None:
        _validate_options(options)
        self._options = options
        self._config = config
        self._fetcher = fetcher
        self._store = object_store or LooseObjectStore(config.git_dir)

    def run(self) -> ImportResult:
        """Execute the import and return the finalized tree id."""
        read_result = self._read_source()
        tree_id = self._build_tree(read_result.entries)
        commit_id = self._commit_if_requested(tree_id)
        result = ImportResult(
            tree_id=tree_id,
            entry_count=len(read_result.entries),
            skipped_count=len(read_result.skipped),
            commit_id=commit_id,
        )
        _log_import_completion(self._options, result)
        return result

    def _read_source(self) -> SourceReadResult:
        if self._fetcher is not None:
            source = build_source(self._options.source_type, self._fetcher)
            return source.read(self._options.source)
        with HttpFetcher(timeout=self._config.http_timeout) as fetcher:
            source = build_source(self._options.source_type, fetcher)
            return source.read(self._options.source)

    def _build_tree(self, entries: tuple[ImportEntry, ...]) -> str:
        tree = ImportTree(self._store)
        for entry in entries:
            tree.write(entry.path, serialize_document(entry.document))
        return tree.finalize()

    def _commit_if_requested(self, tree_id: str) -> str | None:
        if not self._options.commit_to:
            return None
        git_dir = self._config.git_dir
        commit_ref = normalize_commit_ref(self._options.commit_to)
        parents = collect_parents(git_dir, commit_ref)
        commit_id = commit_tree(
            self._store,
            tree_id,
            parents,
            self._options.commit_message or build_default_commit_message(self._options),
            self._config.committer,
            datetime.now(timezone.utc),
        )
        update_ref(git_dir, commit_ref, commit_id)
        _LOGGER.info(
            "tree_committed",
            ref=commit_ref,
            parents=parents,
            commit_id=commit_id,
            tree_id=tree_id,
        )
        return commit_id


def import_taxonomy(
    options: ImportOptions,
    config: ImportConfig,
    fetcher: HttpFetcher | None = None,
    object_store: ObjectStore | None = None,
) -> ImportResult:
    """Import one taxonomy source into a content-addressed tree.

    Args:
        options: Import request options.
        config: Runtime configuration.
        fetcher: Optional fetch collaborator; a default httpx fetcher is
            created and closed when omitted.
        object_store: Optional object store; defaults to loose objects in
            ``config.git_dir``.

    Returns:
        Import result with tree id and counts.

    Raises:
        UnimplementedModeError: If append mode is requested.
        UnsupportedSourceTypeError: If the source type is unknown.
        SourceFetchError: If the source cannot be fetched or decoded.
        TreeStoreError: If tree assembly or commit fails.
    """
    runner = ImportPipelineRunner(options, config, fetcher=fetcher, object_store=object_store)
    return runner.run()


def build_default_commit_message(options: ImportOptions) -> str:
    """Build the commit message used when none is given."""
    message = f"imported {options.source_type}"
    if options.source:
        message += f" from {options.source}"
    return message


def _validate_options(options: ImportOptions) -> None:
    """Reject unsupported run modes before any fetch happens."""
    if options.append:
        # TODO: load the current tree from commit_to and layer entries onto it
        raise UnimplementedModeError(
            "Append imports are not implemented. Rerun without --append to build a fresh tree."
        )
    validate_source_type(options.source_type)


def _log_import_completion(options: ImportOptions, result: ImportResult) -> None:
    """Log run completion with contextual metadata."""
    _LOGGER.info(
        "import_completed",
        source_type=options.source_type,
        source=options.source,
        entry_count=result.entry_count,
        skipped_count=result.skipped_count,
        tree_id=result.tree_id,
        commit_id=result.commit_id,
    )
