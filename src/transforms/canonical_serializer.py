"""Canonical TOML serialization for tag documents.

This module turns normalized documents into deterministic bytes.
Keys are sorted at every level and absent fields are dropped.
"""

from __future__ import annotations

from typing import Any, Mapping

import tomli_w


def serialize_document(document: Mapping[str, Any]) -> bytes:
    """Serialize a normalized document into canonical TOML bytes.

    Args:
        document: Field mapping where ``None`` marks an absent field.

    Returns:
        UTF-8 encoded TOML text. Documents with the same field/value
        set produce identical bytes regardless of insertion order.

    Raises:
        TypeError: If a value has no TOML representation.
    """
    canonical = canonicalize_value(document)
    return tomli_w.dumps(canonical).encode("utf-8")


def canonicalize_value(value: Any) -> Any:
    """Return a copy of ``value`` with sorted keys and no ``None`` entries.

    Args:
        value: Mapping, list, or scalar value.

    Returns:
        Canonical copy safe for deterministic serialization.
    """
    if isinstance(value, Mapping):
        return {
            str(key): canonicalize_value(value[key])
            for key in sorted(value, key=str)
            if value[key] is not None
        }
    if isinstance(value, (list, tuple)):
        # TOML arrays cannot hold null
        return [canonicalize_value(item) for item in value if item is not None]
    return value
