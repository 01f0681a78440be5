"""Unit tests for canonical document serialization."""

from __future__ import annotations

import tomllib

from transforms.canonical_serializer import canonicalize_value, serialize_document


def test_serialize_document_ignores_insertion_order() -> None:
    """Documents with equal field sets should serialize identically."""
    first = {"title": "Cloud", "meta": {"b": "2", "a": "1"}, "description": "x"}
    second = {"description": "x", "meta": {"a": "1", "b": "2"}, "title": "Cloud"}

    assert serialize_document(first) == serialize_document(second)


def test_serialize_document_drops_absent_fields() -> None:
    """Fields set to None should never reach the output."""
    output = serialize_document({"title": "Cloud", "handle": None})

    assert output == b'title = "Cloud"\n'


def test_serialize_document_drops_nested_absent_fields() -> None:
    """Absent fields inside nested tables should be dropped too."""
    output = serialize_document({"meta": {"keep": "yes", "drop": None}})

    assert tomllib.loads(output.decode("utf-8")) == {"meta": {"keep": "yes"}}


def test_serialize_document_keeps_empty_strings() -> None:
    """Empty strings are values, not absence markers."""
    output = serialize_document({"caption": ""})

    assert output == b'caption = ""\n'


def test_canonicalize_value_sorts_tables_inside_lists() -> None:
    """Mappings nested in arrays should also have sorted keys."""
    canonical = canonicalize_value({"items": [{"z": 1, "a": None, "m": 2}, None]})

    assert list(canonical["items"][0]) == ["m", "z"] and len(canonical["items"]) == 1
