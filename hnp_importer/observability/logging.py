"""
Log formatting for import runs.

Both formatters tag lines with the run id and, while a ticket is being
built or submitted, with its block index and title. The ticket comes from
the active ticket_scope, or from `block` / `ticket` extras when a caller
logs outside one.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from .context import current_run_id, current_ticket

# Attributes every LogRecord has; anything else was passed via extra=
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

# Extras that describe the ticket rather than free-form data
_TICKET_ATTRS = ("block", "ticket")

# Libraries that log every HTTP request at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore", "urllib3")


def ticket_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Block index and title for a record, empty when not about a ticket."""
    scope = current_ticket()
    if scope is not None:
        return {"block": scope.block, "ticket": scope.title}
    return {key: getattr(record, key) for key in _TICKET_ATTRS if hasattr(record, key)}


def extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _STANDARD_ATTRS and key not in _TICKET_ATTRS
    }


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line:

    {"ts": "2026-10-19T10:30:00.000+00:00", "level": "INFO",
     "logger": "hnp_importer.builder", "msg": "Built ticket 'Fix bug'",
     "run_id": "run-abc123", "block": 0, "ticket": "Fix bug #bugs",
     "data": {"category_id": 1}}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        run_id = current_run_id()
        if run_id:
            entry["run_id"] = run_id
        entry.update(ticket_fields(record))

        data = extra_fields(record)
        if data:
            entry["data"] = data
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


class HumanFormatter(logging.Formatter):
    """
    Terminal lines: `10:30:00 INFO    [run-abc123] block 0 'Fix bug': message`.
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = [self.formatTime(record, "%H:%M:%S"), f"{record.levelname:<7}"]

        run_id = current_run_id()
        if run_id:
            parts.append(f"[{run_id}]")

        fields = ticket_fields(record)
        message = record.getMessage()
        if "block" in fields:
            where = f"block {fields['block']}"
            if fields.get("ticket"):
                where += f" {fields['ticket']!r}"
            message = f"{where}: {message}"
        parts.append(message)

        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def parse_level(level: str) -> int:
    """Map a level name to its number; ValueError for unknown names."""
    number = logging.getLevelNamesMapping().get(level.upper())
    if number is None:
        raise ValueError(f"Unknown log level {level!r}")
    return number


def configure_logging(level: str = "INFO", json_format: bool | None = None) -> None:
    """
    Install one stderr handler on the root logger.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Use JSON lines. If None, JSON when stderr is not a TTY.

    HTTP client loggers stay at WARNING unless level is DEBUG.
    """
    number = parse_level(level)
    if json_format is None:
        json_format = not sys.stderr.isatty()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_format else HumanFormatter())

    root = logging.getLogger()
    root.setLevel(number)
    root.handlers[:] = [handler]

    http_level = logging.NOTSET if number <= logging.DEBUG else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
