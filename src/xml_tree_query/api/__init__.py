"""Configured query API."""

from .query import TreeQuery

__all__ = ["TreeQuery"]
