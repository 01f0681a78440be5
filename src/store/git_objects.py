"""Git object encoding and storage.

This module hashes blobs, trees, and commits in the git object format
and persists them either as loose objects or in memory.
"""

from __future__ import annotations

import hashlib
import os
import tempfile
import zlib
from pathlib import Path
from typing import Iterable, Protocol

from core.constants import GIT_HASH_ALGORITHM, GIT_TREE_MODE
from core.errors import TreeStoreError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)
OBJECTS_DIR_NAME = "objects"


class ObjectStore(Protocol):
    """Content-addressed object sink used by the tree assembler."""

    def write_object(self, kind: str, payload: bytes) -> str:
        """Persist one object and return its hex id."""
        ...


def encode_object(kind: str, payload: bytes) -> tuple[str, bytes]:
    """Encode a git object and compute its id.

    Args:
        kind: Object type, one of ``blob``, ``tree``, ``commit``.
        payload: Object body.

    Returns:
        Pair of hex object id and the raw header-prefixed object bytes.
    """
    raw = f"{kind} {len(payload)}".encode("ascii") + b"\0" + payload
    hasher = hashlib.new(GIT_HASH_ALGORITHM)
    hasher.update(raw)
    return hasher.hexdigest(), raw


def encode_tree(entries: Iterable[tuple[str, str, str]]) -> bytes:
    """Encode tree entries in git's canonical order.

    Args:
        entries: ``(mode, name, hex object id)`` triples.

    Returns:
        Tree object body.
    """
    ordered = sorted(entries, key=_tree_sort_key)
    return b"".join(
        f"{mode} {name}".encode("utf-8") + b"\0" + bytes.fromhex(object_id)
        for mode, name, object_id in ordered
    )


def _tree_sort_key(entry: tuple[str, str, str]) -> bytes:
    """Sort subtrees as if their names ended with a slash."""
    mode, name, _ = entry
    suffix = "/" if mode == GIT_TREE_MODE else ""
    return f"{name}{suffix}".encode("utf-8")


class MemoryObjectStore:
    """In-memory object store for dry runs and tests."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}

    def write_object(self, kind: str, payload: bytes) -> str:
        object_id, raw = encode_object(kind, payload)
        self.objects.setdefault(object_id, raw)
        return object_id

    def read_object(self, object_id: str) -> tuple[str, bytes]:
        """Return ``(kind, payload)`` for a stored object.

        Raises:
            TreeStoreError: If the object is unknown.
        """
        if object_id not in self.objects:
            raise TreeStoreError(f"Object {object_id} not found in memory store.")
        return split_raw_object(self.objects[object_id])


class LooseObjectStore:
    """Writes zlib-compressed loose objects into a git directory."""

    def __init__(self, git_dir: Path) -> None:
        """Bind the store to an existing git directory.

        Args:
            git_dir: Path to a ``.git`` directory or bare repository.

        Raises:
            TreeStoreError: If the directory has no ``objects`` folder.
        """
        self.git_dir = git_dir
        self._objects_dir = git_dir / OBJECTS_DIR_NAME
        if not self._objects_dir.is_dir():
            raise TreeStoreError(
                f"No git object directory found at {self._objects_dir}. "
                "Run inside a git repository or set TAXONOMY_GIT_DIR."
            )

    def write_object(self, kind: str, payload: bytes) -> str:
        """Persist an object unless it already exists.

        Raises:
            TreeStoreError: If the object file cannot be written.
        """
        object_id, raw = encode_object(kind, payload)
        object_path = self._object_path(object_id)
        if object_path.exists():
            return object_id
        try:
            object_path.parent.mkdir(parents=True, exist_ok=True)
            _write_atomically(object_path, zlib.compress(raw))
        except OSError as error:
            raise TreeStoreError(
                f"Failed to write object {object_id} to {object_path}: {error}."
            ) from error
        _LOGGER.debug("object_written", object_id=object_id, kind=kind)
        return object_id

    def read_object(self, object_id: str) -> tuple[str, bytes]:
        """Return ``(kind, payload)`` for a stored loose object.

        Raises:
            TreeStoreError: If the object is missing or corrupt.
        """
        object_path = self._object_path(object_id)
        if not object_path.exists():
            raise TreeStoreError(f"Object {object_id} not found at {object_path}.")
        try:
            raw = zlib.decompress(object_path.read_bytes())
        except zlib.error as error:
            raise TreeStoreError(
                f"Corrupt object {object_id} at {object_path}: {error}."
            ) from error
        return split_raw_object(raw)

    def _object_path(self, object_id: str) -> Path:
        return self._objects_dir / object_id[:2] / object_id[2:]


def split_raw_object(raw: bytes) -> tuple[str, bytes]:
    """Split raw object bytes into kind and payload."""
    header, _, payload = raw.partition(b"\0")
    kind, _, _ = header.decode("ascii").partition(" ")
    return kind, payload


def _write_atomically(target: Path, data: bytes) -> None:
    """Write bytes through a temp file so readers never see partial objects."""
    handle, temp_name = tempfile.mkstemp(dir=target.parent, prefix="tmp_obj_")
    try:
        with os.fdopen(handle, "wb") as temp_file:
            temp_file.write(data)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        os.replace(temp_name, target)
    except OSError:
        Path(temp_name).unlink(missing_ok=True)
        raise
