"""Tree path derivation helpers for source adapters.

This module owns the string rules that turn classification fields
into tree paths and raw column headers into canonical field names.
"""

from __future__ import annotations

import re

from core.constants import DOCUMENT_EXTENSION

_ANNOTATION_PATTERN = re.compile(r"\s*\(.*$")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_PLURAL_SUFFIX = "(s)"


def split_handle(handle: str) -> tuple[str, str] | None:
    """Split a prefixed handle on its first dot.

    Args:
        handle: Raw handle such as ``tech.cloud``.

    Returns:
        ``(prefix, tag)`` pair, or ``None`` when the handle is unprefixed.
    """
    prefix, separator, tag = handle.partition(".")
    if not separator or not tag:
        return None
    return prefix, tag


def normalize_field_name(header: str) -> str:
    """Normalize a CSV column header into a canonical field name.

    Examples:
        ``"Priority (1-5)"`` becomes ``priority`` and
        ``"Canonical Name"`` becomes ``canonical_name``.
    """
    stripped = _ANNOTATION_PATTERN.sub("", header).strip()
    return _WHITESPACE_PATTERN.sub("_", stripped).lower()


def normalize_category(category: str) -> str:
    """Normalize a category label into a tree directory name.

    Examples:
        ``"Health Care(s)"`` becomes ``health-cares``.
    """
    hyphenated = _WHITESPACE_PATTERN.sub("-", category.strip())
    return hyphenated.replace(_PLURAL_SUFFIX, "s").lower()


def build_tree_path(name: str, directory: str | None = None) -> str:
    """Build a document path, optionally nested under one directory."""
    filename = f"{name}{DOCUMENT_EXTENSION}"
    if directory:
        return f"{directory}/{filename}"
    return filename


def is_path_segment(name: str) -> bool:
    """Return whether ``name`` is usable as exactly one tree path segment."""
    return bool(name) and "/" not in name and name not in (".", "..")
