"""
Run and ticket scopes.

A run scope covers one document import. A ticket scope covers building or
submitting one block. Formatters read both, so log calls made inside them
are tagged without passing extra= everywhere.
"""

import contextvars
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass(frozen=True)
class TicketScope:
    block: int
    title: str


_run_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "hnp_run_id", default=None
)
_ticket: contextvars.ContextVar[Optional[TicketScope]] = contextvars.ContextVar(
    "hnp_ticket", default=None
)


def current_run_id() -> Optional[str]:
    return _run_id.get()


def current_ticket() -> Optional[TicketScope]:
    return _ticket.get()


def new_run_id() -> str:
    return f"run-{uuid.uuid4().hex[:12]}"


class RunContext:
    """
    Scope of one import run.

    Entering sets the run id and clears any ticket scope left by an outer
    run; leaving restores both.

        with RunContext() as run:
            logger.info("Parsed 3 ticket block(s)")  # tagged with run.run_id
    """

    def __init__(self, run_id: Optional[str] = None):
        self.run_id = run_id or new_run_id()
        self._started: Optional[float] = None
        self._tokens: list[contextvars.Token] = []

    def __enter__(self) -> "RunContext":
        self._started = time.monotonic()
        self._tokens = [_run_id.set(self.run_id), _ticket.set(None)]
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        run_token, ticket_token = self._tokens
        _ticket.reset(ticket_token)
        _run_id.reset(run_token)
        self._tokens = []

    def elapsed(self) -> float:
        """Seconds since the run was entered (0.0 before that)."""
        if self._started is None:
            return 0.0
        return time.monotonic() - self._started


@contextmanager
def ticket_scope(block: int, title: str) -> Iterator[TicketScope]:
    """Tag log lines with the ticket being built or submitted."""
    scope = TicketScope(block, title)
    token = _ticket.set(scope)
    try:
        yield scope
    finally:
        _ticket.reset(token)
