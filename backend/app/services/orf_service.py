# File: backend/app/services/orf_service.py
# Version: v0.1.0
"""
ORF search over pasted multi-record FASTA text.

Each record is searched independently; records are returned in input order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from backend.app.core.config import settings
from backend.app.core.sequence.fasta import parse_fasta_text
from backend.app.core.sequence.genetic_code import GeneticCode, StopMode
from backend.app.core.sequence.orf import OpenReadingFrame, find_orfs, parse_start_codons
from backend.app.services.sequence_service import ensure_length

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrfRecordResult:
    name: str
    length: int
    orfs: List[OpenReadingFrame]

    @property
    def total(self) -> int:
        return len(self.orfs)


def search_orfs(
    text: str,
    min_length: Optional[int] = None,
    start_codons: str = "ATG",
    code: GeneticCode = GeneticCode.STANDARD,
    stop_mode: StopMode = StopMode.ASTERISK,
) -> List[OrfRecordResult]:
    ensure_length(text)
    min_len = settings.ORF_MIN_LENGTH_DEFAULT if min_length is None else min_length
    starts = parse_start_codons(start_codons)

    results: List[OrfRecordResult] = []
    for record in parse_fasta_text(text):
        orfs = find_orfs(record.sequence, min_len, starts, code, stop_mode)
        results.append(OrfRecordResult(name=record.name, length=len(record.sequence), orfs=orfs))

    log.info(
        "orf search: %d record(s), %d ORF(s), min_length=%d",
        len(results), sum(r.total for r in results), min_len,
    )
    return results
