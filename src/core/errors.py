"""Taxonomy import exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each stage of an import run raises a specific error type.
"""

from __future__ import annotations


class TaxonomyImportError(Exception):
    """Base exception for all taxonomy import failures."""


class ImportConfigError(TaxonomyImportError):
    """Raised for invalid runtime configuration."""


class UnsupportedSourceTypeError(TaxonomyImportError):
    """Raised when a run names a source type with no adapter."""


class SourceFetchError(TaxonomyImportError):
    """Raised when fetching or decoding a source payload fails."""


class UnimplementedModeError(TaxonomyImportError):
    """Raised for run modes that are deliberately not supported."""


class TreeStoreError(TaxonomyImportError):
    """Raised for tree assembly, object storage, and ref failures."""
