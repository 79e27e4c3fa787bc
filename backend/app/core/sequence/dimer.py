# File: backend/app/core/sequence/dimer.py
# Version: v0.1.0
"""
Primer-dimer screening.

Implements:
- Ungapped complementarity alignment (exhaustive over all start pairs)
- Nearest-neighbour ΔG estimate for the aligned duplex
- Risk classification and the all-pairs primer panel screen
- Nearest-neighbour Tm per primer (BioPython)

Notes:
- The partner strand is always presented antiparallel (reversed), so a
  position "matches" when the top base pairs with the base facing it.
  Aligning p against reverse(p) is the same as comparing p with its own
  reverse complement base by base.
- ΔG only counts stacks of two consecutive paired bases; an isolated pair
  contributes nothing. This is a screening heuristic, not a folding model.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Tuple

from Bio.SeqUtils import MeltingTemp as mt

from .fasta import SequenceInput
from .primitives import complement, gc_percent, reverse

log = logging.getLogger(__name__)

# Nearest-neighbour stacks keyed by top-strand dinucleotide: (ΔH kcal/mol, ΔS cal/mol·K)
NEAREST_NEIGHBOR: Dict[str, Tuple[float, float]] = {
    "AA": (-7.9, -22.2), "AT": (-7.2, -20.4), "AC": (-8.4, -22.4), "AG": (-7.8, -21.0),
    "TA": (-7.2, -21.3), "TT": (-7.9, -22.2), "TC": (-8.2, -22.2), "TG": (-8.5, -22.7),
    "CA": (-8.5, -22.7), "CT": (-7.8, -21.0), "CC": (-8.0, -19.9), "CG": (-10.6, -27.2),
    "GA": (-8.2, -22.2), "GT": (-8.4, -22.4), "GC": (-9.8, -24.4), "GG": (-8.0, -19.9),
}
TERMINAL_PENALTY: Tuple[float, float] = (0.1, -2.8)
TEMPERATURE_K = 298.0
MIN_ENERGY_LENGTH = 3

PAIRED = "|"
UNPAIRED = " "


class DimerRisk(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]


_RISK_RANK = {DimerRisk.LOW: 1, DimerRisk.MEDIUM: 2, DimerRisk.HIGH: 3}


class DimerKind(str, Enum):
    SELF = "self"
    HETERO = "hetero"


@dataclass(frozen=True)
class AlignmentResult:
    aligned_a: str
    match_string: str
    aligned_b: str
    offset_a: int
    offset_b: int
    score: int
    length: int

    @property
    def matches(self) -> int:
        return self.score // 2

    @property
    def structure(self) -> str:
        return "\n".join((self.aligned_a, self.match_string, self.aligned_b))


EMPTY_ALIGNMENT = AlignmentResult("", "", "", 0, 0, 0, 0)


@dataclass(frozen=True)
class DimerResult:
    kind: DimerKind
    name_a: str
    name_b: str
    sequence_a: str
    sequence_b: str
    alignment: AlignmentResult
    complementarity: int   # percent, rounded
    free_energy: float     # kcal/mol
    risk: DimerRisk


@dataclass(frozen=True)
class PrimerSummary:
    name: str
    sequence: str
    length: int
    gc_percent: float
    tm: float


def pairs_with(a: str, b: str) -> bool:
    """Watson-Crick pairing test, case-insensitive."""
    return a.upper() == complement(b.upper()) and a.upper() in "ACGT"


def _align_at(seq_a: str, seq_b: str, i: int, j: int) -> AlignmentResult:
    n = min(len(seq_a) - i, len(seq_b) - j)
    top = seq_a[i : i + n]
    bottom = seq_b[j : j + n]
    marks = "".join(PAIRED if pairs_with(x, y) else UNPAIRED for x, y in zip(top, bottom))
    return AlignmentResult(top, marks, bottom, i, j, 2 * marks.count(PAIRED), n)


def align_ungapped(seq_a: str, seq_b: str) -> AlignmentResult:
    """
    Best ungapped complementarity alignment of two sequences.

    Every (i, j) start pair is tried in row-major order; the window runs to the
    end of the shorter remainder. Score = 2 x paired positions. The first
    strictly best window wins; no pairing at all gives EMPTY_ALIGNMENT.
    """
    best = EMPTY_ALIGNMENT
    for i in range(len(seq_a)):
        for j in range(len(seq_b)):
            cand = _align_at(seq_a, seq_b, i, j)
            if cand.score > best.score:
                best = cand
    return best


def estimate_free_energy(alignment: AlignmentResult, temperature: float = TEMPERATURE_K) -> float:
    """ΔG = ΔH - T·ΔS/1000 over consecutive paired stacks plus the terminal penalty."""
    if alignment.length < MIN_ENERGY_LENGTH:
        return 0.0
    dh, ds = TERMINAL_PENALTY
    marks = alignment.match_string
    for k in range(alignment.length - 1):
        if marks[k] == PAIRED and marks[k + 1] == PAIRED:
            stack = NEAREST_NEIGHBOR.get(alignment.aligned_a[k : k + 2].upper())
            if stack:
                dh += stack[0]
                ds += stack[1]
    return round(dh - temperature * ds / 1000.0, 2)


def classify_risk(complementarity: float, free_energy: float, length: int) -> DimerRisk:
    if free_energy < -8 or (complementarity > 70 and length >= 6):
        return DimerRisk.HIGH
    if free_energy < -5 or (complementarity > 50 and length >= 4):
        return DimerRisk.MEDIUM
    return DimerRisk.LOW


def _percent(matches: int, denominator: int) -> int:
    if denominator <= 0:
        return 0
    return int(round(100.0 * matches / denominator))


def self_dimer(name: str, sequence: str) -> Optional[DimerResult]:
    """Primer against itself (antiparallel). None when no base can pair."""
    seq = sequence.upper()
    aln = align_ungapped(seq, reverse(seq))
    if aln.score == 0:
        return None
    comp = _percent(aln.matches, len(seq))
    dg = estimate_free_energy(aln)
    return DimerResult(
        kind=DimerKind.SELF,
        name_a=name,
        name_b=name,
        sequence_a=seq,
        sequence_b=seq,
        alignment=aln,
        complementarity=comp,
        free_energy=dg,
        risk=classify_risk(comp, dg, aln.length),
    )


def hetero_dimer(a: SequenceInput, b: SequenceInput) -> Optional[DimerResult]:
    """
    Two primers in both antiparallel registrations (a over reversed b, reversed
    a over b); the higher score wins, ties keep the first. None when nothing pairs.
    """
    seq_a, seq_b = a.sequence.upper(), b.sequence.upper()
    first = align_ungapped(seq_a, reverse(seq_b))
    second = align_ungapped(reverse(seq_a), seq_b)
    aln = second if second.score > first.score else first
    if aln.score == 0:
        return None
    comp = _percent(aln.matches, min(len(seq_a), len(seq_b)))
    dg = estimate_free_energy(aln)
    return DimerResult(
        kind=DimerKind.HETERO,
        name_a=a.name,
        name_b=b.name,
        sequence_a=seq_a,
        sequence_b=seq_b,
        alignment=aln,
        complementarity=comp,
        free_energy=dg,
        risk=classify_risk(comp, dg, aln.length),
    )


def analyze_primers(primers: Sequence[SequenceInput]) -> List[DimerResult]:
    """
    Self-dimer for every primer and hetero-dimer for every unordered pair.
    Sorted by risk (high first), then by ΔG ascending (most stable first).
    """
    results: List[DimerResult] = []
    for p in primers:
        r = self_dimer(p.name, p.sequence)
        if r is not None:
            results.append(r)
    for a, b in combinations(primers, 2):
        r = hetero_dimer(a, b)
        if r is not None:
            results.append(r)
    results.sort(key=lambda r: (-r.risk.rank, r.free_energy))
    log.debug("analyze_primers: %d primers -> %d dimers", len(primers), len(results))
    return results


def melting_temperature(seq: str, na_mm: float = 50.0, primer_nm: float = 250.0) -> float:
    """Nearest-neighbour Tm (°C, SantaLucia via BioPython); 0.0 below two bases."""
    if len(seq) < 2:
        return 0.0
    # Tm_NN takes salt in mM and strand concentrations in nM
    return round(float(mt.Tm_NN(seq, Na=na_mm, dnac1=primer_nm, dnac2=primer_nm)), 2)


def summarize_primer(primer: SequenceInput) -> PrimerSummary:
    seq = primer.sequence.upper()
    return PrimerSummary(
        name=primer.name,
        sequence=seq,
        length=len(seq),
        gc_percent=round(gc_percent(seq), 2),
        tm=melting_temperature(seq),
    )


def parse_primers(text: str) -> List[SequenceInput]:
    """
    One primer per non-header line. A '>' line names the primer on the next
    line; otherwise primers are called 'Primer <n>'. Only A/C/G/T are kept.
    """
    primers: List[SequenceInput] = []
    pending: Optional[str] = None
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        if line.startswith(">"):
            pending = line[1:].strip() or None
            continue
        seq = "".join(c for c in line.upper() if c in "ACGT")
        name = pending or f"Primer {len(primers) + 1}"
        pending = None
        if seq:
            primers.append(SequenceInput(name=name, sequence=seq))
    return primers
