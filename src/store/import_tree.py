"""Hierarchical import tree assembly.

This module accumulates path-addressed documents for one import run
and finalizes them into a single content-addressed tree id. The id
depends only on the final set of (path, bytes) pairs, never on the
order in which they were written.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.constants import GIT_BLOB_MODE, GIT_TREE_MODE
from core.errors import TreeStoreError
from core.logging_config import get_logger
from store.git_objects import ObjectStore, encode_tree

_LOGGER = get_logger(__name__)


@dataclass
class _TreeNode:
    """Mutable directory node keyed by entry name."""

    blobs: dict[str, str] = field(default_factory=dict)
    children: dict[str, "_TreeNode"] = field(default_factory=dict)


class ImportTree:
    """Write-once tree assembler for a single import run."""

    def __init__(self, object_store: ObjectStore) -> None:
        self._store = object_store
        self._root = _TreeNode()
        self._entry_count = 0
        self._tree_id: str | None = None

    @property
    def entry_count(self) -> int:
        """Number of distinct document paths currently in the tree."""
        return self._entry_count

    def write(self, path: str, data: bytes) -> str:
        """Store a document blob at a tree path.

        A second write to the same path replaces the earlier blob.

        Args:
            path: Slash-separated relative path.
            data: Serialized document bytes.

        Returns:
            Blob object id.

        Raises:
            TreeStoreError: If the tree is finalized, the path is invalid,
                or the path conflicts with an existing directory or file.
        """
        if self._tree_id is not None:
            raise TreeStoreError(f"Cannot write {path}: tree was already finalized.")
        *directories, name = _split_path(path)
        node = self._root
        for directory in directories:
            if directory in node.blobs:
                raise TreeStoreError(f"Cannot write {path}: '{directory}' is already a file.")
            node = node.children.setdefault(directory, _TreeNode())
        if name in node.children:
            raise TreeStoreError(f"Cannot write {path}: '{name}' is already a directory.")
        blob_id = self._store.write_object("blob", data)
        if name in node.blobs:
            _LOGGER.warning("tree_path_overwritten", path=path, blob_id=blob_id)
        else:
            self._entry_count += 1
        node.blobs[name] = blob_id
        return blob_id

    def finalize(self) -> str:
        """Write all tree objects and return the root tree id.

        Raises:
            TreeStoreError: If the tree was already finalized.
        """
        if self._tree_id is not None:
            raise TreeStoreError(f"Tree was already finalized as {self._tree_id}.")
        self._tree_id = self._write_node(self._root)
        _LOGGER.info("tree_finalized", tree_id=self._tree_id, entry_count=self._entry_count)
        return self._tree_id

    def _write_node(self, node: _TreeNode) -> str:
        entries = [(GIT_BLOB_MODE, name, blob_id) for name, blob_id in node.blobs.items()]
        for name, child in node.children.items():
            entries.append((GIT_TREE_MODE, name, self._write_node(child)))
        return self._store.write_object("tree", encode_tree(entries))


def _split_path(path: str) -> list[str]:
    """Split and validate a relative tree path.

    Raises:
        TreeStoreError: If any segment is empty, ``.``, or ``..``.
    """
    segments = path.split("/")
    for segment in segments:
        if segment in ("", ".", "..") or "\0" in segment:
            raise TreeStoreError(
                f"Invalid tree path '{path}': segments must be non-empty names "
                "without '.', '..', or NUL."
            )
    return segments
