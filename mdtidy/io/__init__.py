"""Filesystem access for Markdown documents."""

from .storage import DocumentStore

__all__ = ["DocumentStore"]
