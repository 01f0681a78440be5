"""Commit creation and ref updates for imported trees.

This module commits a finalized tree on top of a target ref and
moves that ref, using plain files inside the git directory.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Sequence

from core.errors import TreeStoreError
from core.logging_config import get_logger
from core.types import CommitIdentity
from store.git_objects import ObjectStore

_LOGGER = get_logger(__name__)
_SYMBOLIC_REF_PREFIX = "ref: "
_MAX_SYMBOLIC_DEPTH = 5


def normalize_commit_ref(name: str) -> str:
    """Expand a branch name into a full ref.

    ``HEAD`` and names starting with ``refs/`` are returned unchanged;
    anything else is treated as a branch under ``refs/heads/``.
    """
    if name == "HEAD" or name.startswith("refs/"):
        return name
    return f"refs/heads/{name}"


def resolve_ref(git_dir: Path, ref: str = "HEAD") -> str | None:
    """Resolve a ref to a commit id.

    Args:
        git_dir: Git directory.
        ref: Full ref name or ``HEAD``.

    Returns:
        Hex commit id, or ``None`` when the ref does not exist yet.

    Raises:
        TreeStoreError: If symbolic refs loop.
    """
    current = ref
    for _ in range(_MAX_SYMBOLIC_DEPTH):
        ref_path = git_dir / current
        if ref_path.is_file():
            value = ref_path.read_text(encoding="utf-8").strip()
            if not value.startswith(_SYMBOLIC_REF_PREFIX):
                return value or None
            current = value.removeprefix(_SYMBOLIC_REF_PREFIX).strip()
            continue
        return _read_packed_ref(git_dir, current)
    raise TreeStoreError(f"Symbolic ref chain for {ref} is too deep in {git_dir}.")


def commit_tree(
    store: ObjectStore,
    tree_id: str,
    parents: Sequence[str],
    message: str,
    identity: CommitIdentity,
    timestamp: datetime,
) -> str:
    """Write a commit object for a tree.

    Args:
        store: Object store receiving the commit.
        tree_id: Root tree id.
        parents: Parent commit ids in order.
        message: Commit message.
        identity: Author and committer identity.
        timestamp: Timezone-aware commit time.

    Returns:
        Commit object id.
    """
    signature = f"{identity.name} <{identity.email}> {_format_git_time(timestamp)}"
    lines = [f"tree {tree_id}"]
    lines.extend(f"parent {parent}" for parent in parents)
    lines.append(f"author {signature}")
    lines.append(f"committer {signature}")
    body = "\n".join(lines) + "\n\n" + message.rstrip("\n") + "\n"
    return store.write_object("commit", body.encode("utf-8"))


def update_ref(git_dir: Path, ref: str, commit_id: str) -> None:
    """Point a ref at a commit, following ``HEAD`` when it is symbolic.

    Raises:
        TreeStoreError: If the ref file cannot be written.
    """
    target = _symbolic_target(git_dir, ref) or ref
    ref_path = git_dir / target
    try:
        ref_path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = ref_path.with_name(ref_path.name + ".lock")
        temp_path.write_text(commit_id + "\n", encoding="utf-8")
        temp_path.replace(ref_path)
    except OSError as error:
        raise TreeStoreError(f"Failed to update {target} in {git_dir}: {error}.") from error
    _LOGGER.info("ref_updated", ref=target, commit_id=commit_id)


def collect_parents(git_dir: Path, commit_ref: str) -> list[str]:
    """Return the target ref tip and current HEAD as unique parents."""
    parents: list[str] = []
    for ref in (commit_ref, "HEAD"):
        commit_id = resolve_ref(git_dir, ref)
        if commit_id and commit_id not in parents:
            parents.append(commit_id)
    return parents


def _symbolic_target(git_dir: Path, ref: str) -> str | None:
    ref_path = git_dir / ref
    if not ref_path.is_file():
        return None
    value = ref_path.read_text(encoding="utf-8").strip()
    if value.startswith(_SYMBOLIC_REF_PREFIX):
        return value.removeprefix(_SYMBOLIC_REF_PREFIX).strip()
    return None


def _read_packed_ref(git_dir: Path, ref: str) -> str | None:
    packed_path = git_dir / "packed-refs"
    if not packed_path.is_file():
        return None
    for line in packed_path.read_text(encoding="utf-8").splitlines():
        if not line or line.startswith(("#", "^")):
            continue
        object_id, _, name = line.partition(" ")
        if name == ref:
            return object_id
    return None


def _format_git_time(timestamp: datetime) -> str:
    """Format a datetime as ``<epoch seconds> <+hhmm>``."""
    offset = timestamp.utcoffset()
    offset_minutes = int(offset.total_seconds() // 60) if offset else 0
    sign = "-" if offset_minutes < 0 else "+"
    hours, minutes = divmod(abs(offset_minutes), 60)
    return f"{int(timestamp.timestamp())} {sign}{hours:02d}{minutes:02d}"
