"""Taxonomy source ingestion.

This package fetches external tag sources and normalizes their
records into path-addressed canonical documents.
"""
