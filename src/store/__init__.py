"""Content-addressed tree storage.

This package assembles imported documents into git trees and
optionally commits them onto a ref.
"""
