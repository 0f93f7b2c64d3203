"""
Unmatched-tag reconciliation.

Before any ticket is built, every title is scanned for hash-tags that match
neither a category nor a tag. The operator gets one yes/no question to
create all of them; declining aborts the run before anything is written.
"""

import logging
from typing import Callable, Protocol

from .catalogs import CatalogSnapshot
from .errors import BulkTagCreationDeclined, RemoteServiceError
from .grammar import AnnotationGrammar
from .resolvers import HashTagResolver, UnresolvedTag
from .splitter import TicketBlock

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


class TagCreator(Protocol):
    def create_tag(self, name: str): ...


def collect_unmatched_tags(
    blocks: list[TicketBlock],
    grammar: AnnotationGrammar,
    snapshot: CatalogSnapshot,
) -> list[str]:
    """Sorted, de-duplicated lower-case names of unresolved title hash-tags."""
    resolver = HashTagResolver(snapshot.categories, snapshot.tags)
    unmatched: set[str] = set()
    for block in blocks:
        for annotation in grammar.hash_tags(block.title):
            match = resolver.resolve(annotation)
            if isinstance(match, UnresolvedTag):
                unmatched.add(match.raw_name)
    return sorted(unmatched)


def confirmation_message(tags: list[str]) -> str:
    listing = "\n".join(f"  - {tag}" for tag in tags)
    return (
        "Could not find these tags on Hack'n'Plan, "
        f"would you like to add them in bulk?\n{listing}"
    )


def reconcile_tags(
    tags: list[str],
    creator: TagCreator,
    confirm: Confirm,
    dry_run: bool = False,
) -> list[str]:
    """
    Ask once, then create every tag.

    Dry-run skips the question; the creator is expected to be a no-op then.

    Returns:
        The tag names handed to the creator.

    Raises:
        BulkTagCreationDeclined if the operator says no.
        RemoteServiceError on the first failed creation.
    """
    if not tags:
        return []

    logger.info(f"Found {len(tags)} unmatched tag(s): {', '.join(tags)}")

    if not dry_run and not confirm(confirmation_message(tags)):
        raise BulkTagCreationDeclined(tags)

    created = []
    for tag in tags:
        result = creator.create_tag(tag)
        if not result.success:
            raise RemoteServiceError(f"tag creation for {tag!r}", result.error, result.http_status)
        created.append(tag)

    logger.info(f"Created {len(created)} tag(s)")
    return created
