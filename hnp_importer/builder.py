"""
Ticket Builder - Turn ticket blocks into TicketDrafts.

For each block:
1. Append the default category hash-tag (if configured)
2. Resolve hash-tags, urgency and mentions in the title
3. Compute the estimate
4. Strip annotations from the title
5. Rewrite description mentions to @handle, pull out "[]" sub-task lines
"""

import logging

from .catalogs import CatalogSnapshot
from .errors import MissingCategoryError
from .grammar import Annotation, AnnotationGrammar
from .models import TicketDraft
from .observability import ticket_scope
from .resolvers import CategoryRef, Resolvers, TagRef
from .splitter import TicketBlock

logger = logging.getLogger(__name__)


def _unique(ids: list[int]) -> tuple[int, ...]:
    return tuple(dict.fromkeys(ids))


class TicketBuilder:
    """Builds drafts against one (already refreshed) catalog snapshot."""

    def __init__(
        self,
        grammar: AnnotationGrammar,
        snapshot: CatalogSnapshot,
        default_category: str | None = None,
        board_id: int | None = None,
    ):
        self.grammar = grammar
        self.resolvers = Resolvers(snapshot)
        self.default_category = default_category
        self.board_id = board_id

    def with_default_category(self, title: str) -> str:
        # Always appended, even if the title already names a category
        if self.default_category:
            return f"{title} #{self.default_category}"
        return title

    def rewrite_description(self, description: str) -> str:
        """Replace every @mention with the resolved user's @handle."""

        def canonical(mention: Annotation) -> str:
            return f"@{self.resolvers.mentions.resolve(mention).handle}"

        return self.grammar.rewrite_mentions(description, canonical)

    def build(self, block: TicketBlock) -> TicketDraft:
        with ticket_scope(block.index, block.title):
            return self._build(block)

    def _build(self, block: TicketBlock) -> TicketDraft:
        title = self.with_default_category(block.title)

        matches = [self.resolvers.hash_tags.resolve(tag) for tag in self.grammar.hash_tags(title)]
        categories = [m for m in matches if isinstance(m, CategoryRef)]
        tag_ids = [m.id for m in matches if isinstance(m, TagRef)]

        importance = self.resolvers.importance.resolve(self.grammar.urgency(title))
        assignees = [self.resolvers.mentions.resolve(m) for m in self.grammar.mentions(title)]
        estimate = self.grammar.estimate_hours(title)

        clean_title = self.grammar.strip_title(title)

        if not categories:
            raise MissingCategoryError(clean_title)
        if len(categories) > 1:
            logger.warning(
                f"Ticket {clean_title!r} names {len(categories)} categories, "
                f"using #{categories[0].name}"
            )

        description = self.rewrite_description(block.description)
        sub_tasks = tuple(task.name for task in self.grammar.subtasks(description))
        description = self.grammar.strip_subtasks(description)

        draft = TicketDraft(
            title=clean_title,
            description=description,
            category_id=categories[0].id,
            estimated_cost=estimate,
            importance_level_id=importance.id,
            board_id=self.board_id,
            assigned_user_ids=_unique([user.id for user in assignees]),
            tag_ids=_unique(tag_ids),
            sub_tasks=sub_tasks,
        )
        logger.debug(
            f"Built ticket {draft.title!r}",
            extra={"category_id": draft.category_id},
        )
        return draft

    def build_all(self, blocks: list[TicketBlock]) -> list[TicketDraft]:
        """Build every block in order; the first failure aborts."""
        drafts = [self.build(block) for block in blocks]
        logger.info(f"Built {len(drafts)} ticket(s)")
        return drafts
