# File: backend/app/services/primer_service.py
# Version: v0.1.0
"""
Primer panel and index sheet screening.

Both tools compare every pair of inputs, so both are capped: the primer panel
by Settings.MAX_PRIMERS (rejected), the index sheet by Settings.MAX_INDEX_ENTRIES
(reported as a single too-many-entries issue).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from backend.app.core.config import settings
from backend.app.core.sequence.dimer import (
    DimerResult,
    DimerRisk,
    PrimerSummary,
    analyze_primers,
    parse_primers,
    summarize_primer,
)
from backend.app.core.sequence.indices import IndexReport, check_indices, parse_index_sheet
from backend.app.services.sequence_service import InputTooLargeError, ensure_length

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DimerScreen:
    primers: List[PrimerSummary]
    results: List[DimerResult]

    @property
    def high_risk_count(self) -> int:
        return sum(1 for r in self.results if r.risk is DimerRisk.HIGH)


def screen_primers(text: str) -> DimerScreen:
    ensure_length(text)
    primers = parse_primers(text)
    if len(primers) > settings.MAX_PRIMERS:
        raise InputTooLargeError(f"{len(primers)} primers exceeds the limit of {settings.MAX_PRIMERS}")
    results = analyze_primers(primers)
    screen = DimerScreen(primers=[summarize_primer(p) for p in primers], results=results)
    log.info("dimer screen: %d primer(s), %d dimer(s), %d high risk",
             len(primers), len(results), screen.high_risk_count)
    return screen


def check_index_sheet(text: str) -> IndexReport:
    ensure_length(text)
    report = check_indices(parse_index_sheet(text), max_entries=settings.MAX_INDEX_ENTRIES)
    log.info("index check: %d entries, %d issue(s), valid=%s",
             report.total_checked, len(report.issues), report.is_valid)
    return report
