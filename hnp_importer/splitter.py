"""
Ticket Block Splitter.

Document format:

    Title line #category @user ~2h !high
    ===
    Description text
    [] sub-task
    ---
    Next ticket title
    ===
    ...

`---` separates tickets, the first `===` in a block separates title from
description. A second `===` in one block is rejected: it usually means a
`---` was forgotten between two tickets.
"""

from dataclasses import dataclass
from pathlib import Path

from .errors import MalformedDocumentError

BLOCK_DELIMITER = "---"
TITLE_DELIMITER = "==="


@dataclass(frozen=True)
class TicketBlock:
    index: int
    title: str
    description: str


def split_block(text: str, index: int = 0) -> TicketBlock:
    count = text.count(TITLE_DELIMITER)
    if count > 1:
        raise MalformedDocumentError(
            f"found {count} '{TITLE_DELIMITER}' delimiters, expected at most one "
            f"(missing '{BLOCK_DELIMITER}' between tickets?)",
            block_index=index,
        )
    title, _, description = text.partition(TITLE_DELIMITER)
    return TicketBlock(index=index, title=title.strip(), description=description.strip())


def split_document(document: str) -> list[TicketBlock]:
    """Split a whole document into ticket blocks, dropping empty ones."""
    chunks = [chunk for chunk in document.split(BLOCK_DELIMITER) if chunk.strip()]
    return [split_block(chunk, index) for index, chunk in enumerate(chunks)]


def read_document(path: str | Path) -> str:
    """Read the input file as UTF-8."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedDocumentError(f"Cannot read {path}: {e}") from e
