"""
Ticket payload model.

TicketDraft is what gets POSTed to Hack'n'Plan as a work item. Field names
are snake_case in Python and camelCase on the wire.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TicketDraft(BaseModel):
    """One ticket ready for submission. Immutable once built."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    title: str = Field(description="Title with annotations stripped")
    description: str = Field(default="", description="Mentions rewritten, sub-task lines removed")
    parent_id: int | None = Field(default=None)
    is_story: bool = Field(default=False)
    category_id: int = Field(description="Exactly one category per ticket")
    estimated_cost: float = Field(default=0.0, description="Hours")
    importance_level_id: int
    board_id: int | None = Field(default=None)
    start_date: str = Field(default="")
    due_date: str = Field(default="")
    assigned_user_ids: tuple[int, ...] = Field(default=())
    tag_ids: tuple[int, ...] = Field(default=())
    sub_tasks: tuple[str, ...] = Field(default=())
    dependency_ids: tuple[int, ...] = Field(default=())

    def to_payload(self) -> dict[str, Any]:
        """Wire payload with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
