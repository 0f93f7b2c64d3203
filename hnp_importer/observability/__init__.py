"""
Observability: log formatting with run and ticket tags.

Usage:
    from hnp_importer.observability import RunContext, configure_logging, ticket_scope

    configure_logging("INFO")
    with RunContext():
        with ticket_scope(block.index, block.title):
            logger.info("Built ticket")
"""

from .context import RunContext, TicketScope, current_run_id, current_ticket, ticket_scope
from .logging import HumanFormatter, JSONFormatter, configure_logging, parse_level

__all__ = [
    # Logging
    "configure_logging",
    "parse_level",
    "JSONFormatter",
    "HumanFormatter",
    # Scopes
    "RunContext",
    "TicketScope",
    "ticket_scope",
    "current_run_id",
    "current_ticket",
]
