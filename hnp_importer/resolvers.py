"""
Resolvers Module - Map annotation tokens onto catalog entries.

Rules:
- Hash-tags: exact case-insensitive name; categories win over tags;
  anything else is an UnresolvedTag (never an error).
- Mentions: first user whose display name contains the token
  (case-insensitive, catalog order). No match RAISES.
- Urgency: same containment rule against importance levels. No marker
  falls back to the default-flagged level; no default RAISES.

This is the ONLY place where annotation resolution happens.
"""

import logging
from dataclasses import dataclass

from .catalogs import (
    BoardEntry,
    CatalogSnapshot,
    CategoryEntry,
    ImportanceLevelEntry,
    TagEntry,
    UserEntry,
)
from .errors import (
    ConfigurationError,
    MissingDefaultImportanceError,
    UnresolvedImportanceError,
    UnresolvedMentionError,
)
from .grammar import Annotation, AnnotationKind

logger = logging.getLogger(__name__)


# =============================================================================
# RESOLUTION RESULTS
# =============================================================================


@dataclass(frozen=True)
class CategoryRef:
    id: int
    name: str


@dataclass(frozen=True)
class TagRef:
    id: int
    name: str


@dataclass(frozen=True)
class UnresolvedTag:
    raw_name: str


@dataclass(frozen=True)
class MentionRef:
    id: int
    display_name: str
    handle: str


@dataclass(frozen=True)
class ImportanceRef:
    id: int


HashTagMatch = CategoryRef | TagRef | UnresolvedTag


def _expect_kind(annotation: Annotation, kind: AnnotationKind) -> None:
    if annotation.kind != kind:
        raise ValueError(f"Expected a {kind} annotation, got {annotation.kind}: {annotation.raw!r}")


# =============================================================================
# RESOLVERS
# =============================================================================


class HashTagResolver:
    """Resolve #tokens against categories, then tags."""

    def __init__(self, categories: tuple[CategoryEntry, ...], tags: tuple[TagEntry, ...]):
        # First entry wins when two share a lower-cased name
        self._categories: dict[str, CategoryEntry] = {}
        for entry in categories:
            self._categories.setdefault(entry.name.lower(), entry)
        self._tags: dict[str, TagEntry] = {}
        for entry in tags:
            self._tags.setdefault(entry.name.lower(), entry)

    def resolve(self, annotation: Annotation) -> HashTagMatch:
        _expect_kind(annotation, AnnotationKind.HASH_TAG)
        name = annotation.name

        category = self._categories.get(name)
        if category is not None:
            return CategoryRef(category.id, category.name)

        tag = self._tags.get(name)
        if tag is not None:
            return TagRef(tag.id, tag.name)

        logger.debug(f"Hash-tag #{name} matches no category or tag")
        return UnresolvedTag(name)


class MentionResolver:
    """Resolve @tokens against project users by display-name containment."""

    def __init__(self, users: tuple[UserEntry, ...]):
        self._users = users

    def resolve(self, annotation: Annotation) -> MentionRef:
        _expect_kind(annotation, AnnotationKind.MENTION)
        for user in self._users:
            if annotation.name in user.display_name.lower():
                return MentionRef(user.id, user.display_name, user.handle)
        raise UnresolvedMentionError(annotation.name)


class ImportanceResolver:
    """Resolve a !marker (or its absence) to an importance level."""

    def __init__(self, levels: tuple[ImportanceLevelEntry, ...]):
        self._levels = levels

    def resolve(self, annotation: Annotation | None) -> ImportanceRef:
        if annotation is None:
            return self.default()

        _expect_kind(annotation, AnnotationKind.URGENCY)
        for level in self._levels:
            if annotation.name in level.name.lower():
                return ImportanceRef(level.id)
        raise UnresolvedImportanceError(annotation.name)

    def default(self) -> ImportanceRef:
        for level in self._levels:
            if level.is_default:
                return ImportanceRef(level.id)
        raise MissingDefaultImportanceError()


class Resolvers:
    """The three resolvers bound to one catalog snapshot."""

    def __init__(self, snapshot: CatalogSnapshot):
        self.snapshot = snapshot
        self.hash_tags = HashTagResolver(snapshot.categories, snapshot.tags)
        self.mentions = MentionResolver(snapshot.users)
        self.importance = ImportanceResolver(snapshot.importance_levels)


def resolve_board(boards: list[BoardEntry], name: str) -> int:
    """Board id by case-insensitive exact name."""
    wanted = name.strip().lower()
    for board in boards:
        if board.name.lower() == wanted:
            return board.id
    available = ", ".join(b.name for b in boards) or "none"
    raise ConfigurationError(f"Board {name!r} not found (available: {available})")
