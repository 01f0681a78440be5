"""Unit tests for git object encoding and storage."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import TreeStoreError
from store.git_objects import LooseObjectStore, MemoryObjectStore, encode_object, encode_tree


def _git_dir(tmp_path: Path) -> Path:
    git_dir = tmp_path / ".git"
    (git_dir / "objects").mkdir(parents=True)
    return git_dir


def test_encode_object_matches_git_blob_ids() -> None:
    """Blob ids should match what git hash-object reports."""
    assert encode_object("blob", b"")[0] == "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391"
    assert encode_object("blob", b"hello\n")[0] == "ce013625030ba8dba906f756967f9e9ca394464a"


def test_encode_object_matches_git_empty_tree_id() -> None:
    """The empty tree should hash to git's well-known id."""
    assert encode_object("tree", encode_tree([]))[0] == "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


def test_encode_tree_orders_directories_with_trailing_slash() -> None:
    """A directory named ``a`` sorts after a file named ``a.toml``."""
    blob_id = encode_object("blob", b"")[0]
    payload = encode_tree([("40000", "a", blob_id), ("100644", "a.toml", blob_id)])

    assert payload.index(b"a.toml") < payload.index(b"40000 a\0")


def test_loose_object_store_round_trips_objects(tmp_path: Path) -> None:
    """Written loose objects should be readable back."""
    store = LooseObjectStore(_git_dir(tmp_path))

    object_id = store.write_object("blob", b"title = \"Cloud\"\n")

    assert store.read_object(object_id) == ("blob", b"title = \"Cloud\"\n")


def test_loose_object_store_requires_objects_directory(tmp_path: Path) -> None:
    """Binding to a non-repository should fail."""
    with pytest.raises(TreeStoreError):
        LooseObjectStore(tmp_path)

    assert not (tmp_path / "objects").exists()


def test_memory_object_store_raises_for_unknown_object() -> None:
    """Reading an unknown id should fail."""
    with pytest.raises(TreeStoreError):
        MemoryObjectStore().read_object("0" * 40)
