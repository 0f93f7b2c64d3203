"""
Catalog snapshots - project reference data fetched from Hack'n'Plan.

Snapshots are immutable. A refresh produces a new snapshot; the old one
is never mutated, so the reconciliation pass and the build pass can never
see a mix of the two.
"""

import logging
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Protocol

logger = logging.getLogger(__name__)


class CatalogKind(StrEnum):
    """Remote catalogs the importer reads. Values are API path segments."""

    CATEGORIES = "categories"
    TAGS = "tags"
    USERS = "users"
    IMPORTANCE_LEVELS = "importancelevels"
    BOARDS = "boards"


# =============================================================================
# ENTRIES
# =============================================================================


@dataclass(frozen=True)
class CategoryEntry:
    id: int
    name: str


@dataclass(frozen=True)
class TagEntry:
    id: int
    name: str


@dataclass(frozen=True)
class UserEntry:
    id: int
    display_name: str
    handle: str


@dataclass(frozen=True)
class ImportanceLevelEntry:
    id: int
    name: str
    is_default: bool


@dataclass(frozen=True)
class BoardEntry:
    id: int
    name: str


# =============================================================================
# SOURCE PROTOCOL
# =============================================================================


class CatalogSource(Protocol):
    """Anything that can list a catalog. Must be side-effect free."""

    def fetch_all(self, kind: CatalogKind) -> list: ...


# =============================================================================
# SNAPSHOT
# =============================================================================


@dataclass(frozen=True)
class CatalogSnapshot:
    """All catalogs needed to build tickets, as fetched at one point in time."""

    categories: tuple[CategoryEntry, ...] = ()
    tags: tuple[TagEntry, ...] = ()
    users: tuple[UserEntry, ...] = ()
    importance_levels: tuple[ImportanceLevelEntry, ...] = ()

    @classmethod
    def fetch(cls, source: CatalogSource) -> "CatalogSnapshot":
        snapshot = cls(
            categories=tuple(source.fetch_all(CatalogKind.CATEGORIES)),
            tags=tuple(source.fetch_all(CatalogKind.TAGS)),
            users=tuple(source.fetch_all(CatalogKind.USERS)),
            importance_levels=tuple(source.fetch_all(CatalogKind.IMPORTANCE_LEVELS)),
        )
        logger.info(
            "Fetched catalogs",
            extra={
                "categories": len(snapshot.categories),
                "tags": len(snapshot.tags),
                "users": len(snapshot.users),
                "importance_levels": len(snapshot.importance_levels),
            },
        )
        return snapshot

    def refresh_labels(self, source: CatalogSource) -> "CatalogSnapshot":
        """New snapshot with categories and tags re-fetched; users and levels kept."""
        refreshed = replace(
            self,
            categories=tuple(source.fetch_all(CatalogKind.CATEGORIES)),
            tags=tuple(source.fetch_all(CatalogKind.TAGS)),
        )
        logger.info(
            "Refreshed categories and tags",
            extra={"categories": len(refreshed.categories), "tags": len(refreshed.tags)},
        )
        return refreshed
