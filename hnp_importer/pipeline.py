"""
Import pipeline.

Strictly sequential:
    read + split -> fetch catalogs -> reconcile tags -> refresh categories/tags
    -> build every ticket -> submit tickets in document order

Any ImporterError aborts the run where it happens. Tickets submitted before
a failed submission stay submitted.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Protocol

from .builder import TicketBuilder
from .catalogs import CatalogKind, CatalogSnapshot, CatalogSource
from .config import ImporterConfig
from .errors import RemoteServiceError
from .grammar import AnnotationGrammar
from .models import TicketDraft
from .observability import RunContext, ticket_scope
from .reconcile import Confirm, collect_unmatched_tags, reconcile_tags
from .resolvers import resolve_board
from .splitter import TicketBlock, read_document, split_document

logger = logging.getLogger(__name__)


class Writer(Protocol):
    def create_tag(self, name: str): ...

    def submit_ticket(self, draft: TicketDraft): ...


@dataclass
class ImportReport:
    """What a run did."""

    run_id: str
    dry_run: bool
    unmatched_tags: list[str] = field(default_factory=list)
    created_tags: list[str] = field(default_factory=list)
    drafts: list[TicketDraft] = field(default_factory=list)
    submitted: int = 0


class ImportPipeline:
    def __init__(
        self,
        config: ImporterConfig,
        catalogs: CatalogSource,
        writer: Writer,
        confirm: Confirm,
        grammar: AnnotationGrammar | None = None,
        render: Callable[[str], None] = print,
    ):
        self.config = config
        self.catalogs = catalogs
        self.writer = writer
        self.confirm = confirm
        self.grammar = grammar or AnnotationGrammar()
        self.render = render

    @property
    def dry_run(self) -> bool:
        return self.config.dry_run

    def run(self, path: str | Path) -> ImportReport:
        """Import every ticket in a document file."""
        return self.run_document(read_document(path))

    def run_document(self, document: str) -> ImportReport:
        with RunContext() as run:
            report = ImportReport(run_id=run.run_id, dry_run=self.dry_run)

            blocks = split_document(document)
            if not blocks:
                logger.warning("Document contains no tickets")
                return report
            logger.info(f"Parsed {len(blocks)} ticket block(s)")

            snapshot = CatalogSnapshot.fetch(self.catalogs)
            # Before reconciliation: a bad board must fail before any tag is created
            board_id = self.resolve_board_id()

            report.unmatched_tags = collect_unmatched_tags(blocks, self.grammar, snapshot)
            report.created_tags = reconcile_tags(
                report.unmatched_tags, self, self.confirm, dry_run=self.dry_run
            )

            refreshed = snapshot.refresh_labels(self.catalogs)
            report.drafts = self.build(blocks, refreshed, board_id)

            for block, draft in zip(blocks, report.drafts):
                with ticket_scope(block.index, draft.title):
                    self.submit_ticket(draft)
                report.submitted += 1

            logger.info(
                f"Submitted {report.submitted} ticket(s)",
                extra={"dry_run": self.dry_run, "elapsed_s": round(run.elapsed(), 3)},
            )
            return report

    def resolve_board_id(self) -> int | None:
        if not self.config.board:
            return None
        return resolve_board(self.catalogs.fetch_all(CatalogKind.BOARDS), self.config.board)

    def build(
        self,
        blocks: list[TicketBlock],
        snapshot: CatalogSnapshot,
        board_id: int | None = None,
    ) -> list[TicketDraft]:
        builder = TicketBuilder(
            self.grammar,
            snapshot,
            default_category=self.config.default_category,
            board_id=board_id,
        )
        return builder.build_all(blocks)

    # ------------------------------------------------------------------
    # Writes (routed to a renderer in dry-run mode)
    # ------------------------------------------------------------------

    def _render_payload(self, heading: str, payload: dict) -> None:
        self.render(f"{heading}\n{json.dumps(payload, indent=2, ensure_ascii=False)}")

    def create_tag(self, name: str):
        result = self.writer.create_tag(name)
        if self.dry_run:
            payload = (result.data or {}).get("payload", {"name": name})
            self._render_payload("Pretend creating tag:", payload)
        return result

    def submit_ticket(self, draft: TicketDraft) -> None:
        if self.dry_run:
            self._render_payload("Pretend uploading ticket:", draft.to_payload())
        else:
            logger.info(f"Uploading ticket {draft.title!r}", extra={"payload": draft.to_payload()})

        result = self.writer.submit_ticket(draft)
        if not result.success:
            raise RemoteServiceError(
                f"submission of ticket {draft.title!r}", result.error, result.http_status
            )
