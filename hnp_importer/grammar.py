"""
Annotation Grammar - Inline shorthand recognised in ticket text.

Handles tokens like:
- "#backend"          hash-tag (category or tag)
- "@bob"              mention (assignee)
- "[] write tests"    sub-task line (description only)
- "~1d2h30m"          estimate (1 day = 8 hours)
- "!high"             urgency (importance level)

The grammar is compiled once per run and shared by the reconciliation
pass and the builder.
"""

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Callable

HOURS_PER_DAY = 8.0


class AnnotationKind(StrEnum):
    """
    ALL known annotation kinds.

    Resolution code matches on this enum; raw text shape is never inspected
    outside this module.
    """

    HASH_TAG = "hash_tag"
    MENTION = "mention"
    SUBTASK = "subtask"
    ESTIMATE = "estimate"
    URGENCY = "urgency"


@dataclass(frozen=True)
class Annotation:
    """One matched token."""

    kind: AnnotationKind
    raw: str  # exact matched text, sigil included
    name: str  # normalized payload (lower-cased name, sub-task text)
    start: int
    end: int
    hours: float = 0.0  # only meaningful for ESTIMATE


_PATTERNS: dict[AnnotationKind, re.Pattern] = {
    AnnotationKind.HASH_TAG: re.compile(r"#\w+"),
    AnnotationKind.MENTION: re.compile(r"@\w+"),
    AnnotationKind.SUBTASK: re.compile(r"^\[\].*$", re.MULTILINE),
    AnnotationKind.ESTIMATE: re.compile(
        # At least one component; a bare "~" (as in "~/.bashrc") is text
        r"~(?=\d+[dhms])"
        r"(?:(?P<days>\d+)d)?(?:(?P<hours>\d+)h)?(?:(?P<minutes>\d+)m)?(?:(?P<seconds>\d+)s)?"
    ),
    AnnotationKind.URGENCY: re.compile(r"!\w+"),
}

# Stripped from titles, in this order
TITLE_ANNOTATIONS = (
    AnnotationKind.HASH_TAG,
    AnnotationKind.MENTION,
    AnnotationKind.ESTIMATE,
    AnnotationKind.URGENCY,
)


def _estimate_hours(match: re.Match) -> float:
    hours = 0.0
    if match.group("days"):
        hours += int(match.group("days")) * HOURS_PER_DAY
    if match.group("hours"):
        hours += int(match.group("hours"))
    if match.group("minutes"):
        hours += int(match.group("minutes")) / 60.0
    if match.group("seconds"):
        hours += int(match.group("seconds")) / 3600.0
    return hours


def _to_annotation(kind: AnnotationKind, match: re.Match) -> Annotation:
    raw = match.group(0)
    if kind == AnnotationKind.SUBTASK:
        name = raw[2:].strip()
    elif kind == AnnotationKind.ESTIMATE:
        name = raw
    else:
        name = raw[1:].strip().lower()

    return Annotation(
        kind=kind,
        raw=raw,
        name=name,
        start=match.start(),
        end=match.end(),
        hours=_estimate_hours(match) if kind == AnnotationKind.ESTIMATE else 0.0,
    )


class AnnotationGrammar:
    """The five annotation matchers, compiled once."""

    def __init__(self, patterns: dict[AnnotationKind, re.Pattern] | None = None):
        self.patterns = dict(patterns or _PATTERNS)
        missing = set(AnnotationKind) - set(self.patterns)
        if missing:
            raise ValueError(f"Grammar is missing patterns for: {sorted(missing)}")

    def find_all(self, kind: AnnotationKind, text: str) -> list[Annotation]:
        """Every match of one annotation kind, in text order."""
        return [_to_annotation(kind, m) for m in self.patterns[kind].finditer(text)]

    def find_first(self, kind: AnnotationKind, text: str) -> Annotation | None:
        match = self.patterns[kind].search(text)
        return _to_annotation(kind, match) if match else None

    def hash_tags(self, text: str) -> list[Annotation]:
        return self.find_all(AnnotationKind.HASH_TAG, text)

    def mentions(self, text: str) -> list[Annotation]:
        return self.find_all(AnnotationKind.MENTION, text)

    def subtasks(self, text: str) -> list[Annotation]:
        return self.find_all(AnnotationKind.SUBTASK, text)

    def urgency(self, text: str) -> Annotation | None:
        """First !urgency marker, if any."""
        return self.find_first(AnnotationKind.URGENCY, text)

    def estimate_hours(self, text: str) -> float:
        """Hours from the first ~estimate token; 0.0 when there is none."""
        found = self.find_first(AnnotationKind.ESTIMATE, text)
        return found.hours if found else 0.0

    def strip_title(self, title: str) -> str:
        """
        Remove hash-tags, mentions, estimates and urgency markers, then
        collapse whitespace. Applying it twice changes nothing.
        """
        # Removing one token can splice a new one together ("#~2hfoo"),
        # so repeat until nothing matches. A spliced token ("#foo") only
        # exists after stripping: it is removed here but was never resolved
        # or offered for creation, so its label is silently dropped.
        while True:
            stripped = title
            for kind in TITLE_ANNOTATIONS:
                stripped = self.patterns[kind].sub("", stripped)
            if stripped == title:
                break
            title = stripped
        return " ".join(title.split())

    def strip_subtasks(self, description: str) -> str:
        return self.patterns[AnnotationKind.SUBTASK].sub("", description).strip()

    def rewrite_mentions(self, text: str, replace: Callable[[Annotation], str]) -> str:
        """Replace every @mention with replace(annotation)."""
        return self.patterns[AnnotationKind.MENTION].sub(
            lambda m: replace(_to_annotation(AnnotationKind.MENTION, m)), text
        )
