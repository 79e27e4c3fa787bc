# File: backend/app/core/sequence/indices.py
# Version: v0.1.1
"""
Index (barcode) sheet validation for multiplexed sequencing.

Each slot (index1, index2) is checked on its own:
- duplicate sequence                      -> error
- one is the reverse complement of other  -> error
- one is the plain reverse of the other   -> warning
- Hamming distance 1..2 at equal length   -> warning ("similar")

Issues are ordered errors first, then by the first affected row.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Union

from rapidfuzz.distance import Hamming

from .primitives import clean_sequence, reverse, reverse_complement

log = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 200
SIMILAR_MAX_DISTANCE = 2
INDEX_ALPHABET = "ACGTN"

_SPLIT = re.compile(r"[\t,\s]+")


class IssueKind(str, Enum):
    DUPLICATE = "duplicate"
    REVERSE_COMPLEMENT = "reverse-complement"
    REVERSE = "reverse"
    SIMILAR = "similar"
    TOO_MANY_ENTRIES = "too-many-entries"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class IndexEntry:
    row: int
    name: str
    index1: str
    index2: Optional[str] = None


@dataclass(frozen=True)
class IndexIssue:
    kind: IssueKind
    severity: Severity
    slot: Optional[str]          # "index1" / "index2"; None for sheet-level issues
    rows: List[int]
    sequences: List[str]
    distance: Optional[int] = None
    message: str = ""


@dataclass(frozen=True)
class IndexReport:
    entries: List[IndexEntry]
    issues: List[IndexIssue]
    is_valid: bool
    total_checked: int

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity is Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity is Severity.WARNING)


def hamming_distance(a: str, b: str) -> Union[int, float]:
    """Mismatch count for equal-length strings; math.inf when lengths differ."""
    if len(a) != len(b):
        return math.inf
    return int(Hamming.distance(a, b))


def parse_index_sheet(text: str) -> List[IndexEntry]:
    """
    'name index1 [index2]' per line, separated by tabs, commas or spaces.

    Rows are 1-based positions among the non-blank lines. Lines with fewer
    than two fields, or whose index1 has no A/C/G/T/N left after cleaning, are skipped.
    """
    entries: List[IndexEntry] = []
    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
    for lineno, line in enumerate(lines, start=1):
        parts = [p for p in _SPLIT.split(line) if p]
        if len(parts) < 2:
            continue
        index1 = clean_sequence(parts[1], INDEX_ALPHABET)
        index2 = clean_sequence(parts[2], INDEX_ALPHABET) if len(parts) >= 3 else ""
        if not index1:
            continue
        entries.append(IndexEntry(row=lineno, name=parts[0], index1=index1, index2=index2 or None))
    return entries


def _slot_issues(entries: Sequence[IndexEntry], slot: str) -> List[IndexIssue]:
    issues: List[IndexIssue] = []
    values = [(e.row, getattr(e, slot)) for e in entries if getattr(e, slot)]

    groups: Dict[str, List[int]] = {}
    for row, seq in values:
        groups.setdefault(seq, []).append(row)
    for seq, rows in groups.items():
        if len(rows) > 1:
            issues.append(IndexIssue(
                IssueKind.DUPLICATE, Severity.ERROR, slot, rows, [seq],
                message=f"{slot} {seq} used {len(rows)} times",
            ))

    for i, (row_a, a) in enumerate(values):
        for row_b, b in values[i + 1:]:
            if a == reverse_complement(b):
                issues.append(IndexIssue(
                    IssueKind.REVERSE_COMPLEMENT, Severity.ERROR, slot, [row_a, row_b], [a, b],
                    message=f"{slot}: rows {row_a} and {row_b} are reverse complements",
                ))
            elif a == reverse(b):
                issues.append(IndexIssue(
                    IssueKind.REVERSE, Severity.WARNING, slot, [row_a, row_b], [a, b],
                    message=f"{slot}: rows {row_a} and {row_b} are reverses of each other",
                ))

    for i, (row_a, a) in enumerate(values):
        for row_b, b in values[i + 1:]:
            d = hamming_distance(a, b)
            if 0 < d <= SIMILAR_MAX_DISTANCE:
                issues.append(IndexIssue(
                    IssueKind.SIMILAR, Severity.WARNING, slot, [row_a, row_b], [a, b], distance=int(d),
                    message=f"{slot}: rows {row_a} and {row_b} differ at {int(d)} position(s)",
                ))
    return issues


def check_indices(entries: Sequence[IndexEntry], max_entries: int = DEFAULT_MAX_ENTRIES) -> IndexReport:
    """
    Validate an index sheet.

    An empty sheet is reported invalid with no issues. A sheet over
    `max_entries` is not checked pairwise: it gets a single too-many-entries
    error and only the first `max_entries` entries are returned.
    """
    entries = list(entries)
    if not entries:
        return IndexReport(entries=[], issues=[], is_valid=False, total_checked=0)

    if len(entries) > max_entries:
        log.info("check_indices: %d entries exceeds limit %d", len(entries), max_entries)
        issue = IndexIssue(
            IssueKind.TOO_MANY_ENTRIES, Severity.ERROR, None, [], [],
            message=f"Too many entries; at most {max_entries} are checked",
        )
        return IndexReport(
            entries=entries[:max_entries], issues=[issue], is_valid=False, total_checked=len(entries)
        )

    issues = _slot_issues(entries, "index1")
    if any(e.index2 for e in entries):
        issues.extend(_slot_issues(entries, "index2"))
    issues.sort(key=lambda i: (i.severity is not Severity.ERROR, i.rows[0] if i.rows else 0))

    return IndexReport(
        entries=entries,
        issues=issues,
        is_valid=not any(i.severity is Severity.ERROR for i in issues),
        total_checked=len(entries),
    )
