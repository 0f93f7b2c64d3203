"""
Test fixtures for deterministic testing.

This module provides:
- Pinned in-memory catalogs (categories, tags, users, importance levels, boards)
- FakeCatalogSource / FakeWriter stand-ins for Hack'n'Plan
"""

from .catalogs import (
    BOARDS,
    CATEGORIES,
    IMPORTANCE_LEVELS,
    TAGS,
    USERS,
    FakeCatalogSource,
    FakeWriter,
)

__all__ = [
    "BOARDS",
    "CATEGORIES",
    "IMPORTANCE_LEVELS",
    "TAGS",
    "USERS",
    "FakeCatalogSource",
    "FakeWriter",
]
