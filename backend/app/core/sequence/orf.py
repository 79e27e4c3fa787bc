# File: backend/app/core/sequence/orf.py
# Version: v0.1.0
"""
Six-frame open reading frame search.

Policy (per frame, first-start / first-stop):
  * while no ORF is open, the first codon found in `start_codons` opens one
  * the first stop residue after that closes it (the stop codon is included)
  * an ORF still open at the end of the frame is discarded
  * the closed ORF is kept when its nucleotide length >= min_length

Coordinates are 1-based inclusive on the forward strand for both strands.
Reverse-strand hits are searched on the reverse complement and mapped back
with start' = L - end + 1, end' = L - start + 1.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, List, Sequence, Tuple

from .genetic_code import (
    GeneticCode,
    STOP_SYMBOL,
    StopMode,
    protein_molecular_weight,
    render_protein,
)
from .primitives import DNA_ALPHABET, clean_sequence, reverse_complement, translate_residues

log = logging.getLogger(__name__)

DEFAULT_START_CODONS: Tuple[str, ...] = ("ATG",)
DEFAULT_MIN_LENGTH = 30


@dataclass(frozen=True)
class OpenReadingFrame:
    frame: int          # +1..+3 / -1..-3
    strand: str         # "+" or "-"
    start: int          # 1-based, inclusive, forward-strand coordinates
    end: int
    length: int         # nucleotides, stop codon included
    dna_sequence: str   # coding strand, 5'->3'
    protein: str        # rendered with the requested stop mode
    start_codon: str
    stop_codon: str
    molecular_weight: float


def parse_start_codons(text: str) -> Tuple[str, ...]:
    """'ATG, gtg' -> ('ATG', 'GTG'). RNA input is accepted; blank input gives ('ATG',)."""
    codons = []
    for part in text.split(","):
        codon = clean_sequence(part, "ACGTU").replace("U", "T")
        if codon and codon not in codons:
            codons.append(codon)
    return tuple(codons) or DEFAULT_START_CODONS


def _scan_frame(
    seq: str,
    offset: int,
    min_length: int,
    start_codons: Sequence[str],
    code: GeneticCode,
    stop_mode: StopMode,
) -> List[OpenReadingFrame]:
    residues = translate_residues(seq, offset + 1, code)
    found: List[OpenReadingFrame] = []
    open_at = -1
    start_codon = ""

    for i, aa in enumerate(residues):
        codon = seq[offset + 3 * i : offset + 3 * i + 3]
        if open_at < 0 and codon in start_codons:
            open_at = i
            start_codon = codon
        if open_at >= 0 and aa == STOP_SYMBOL:
            length = (i - open_at + 1) * 3
            if length >= min_length:
                nt_start = offset + 3 * open_at
                nt_end = offset + 3 * i + 3
                peptide = residues[open_at : i + 1]
                found.append(OpenReadingFrame(
                    frame=offset + 1,
                    strand="+",
                    start=nt_start + 1,
                    end=nt_end,
                    length=length,
                    dna_sequence=seq[nt_start:nt_end],
                    protein=render_protein(peptide, stop_mode),
                    start_codon=start_codon,
                    stop_codon=codon,
                    molecular_weight=protein_molecular_weight(peptide),
                ))
            open_at = -1
            start_codon = ""
    return found


def find_orfs(
    sequence: str,
    min_length: int = DEFAULT_MIN_LENGTH,
    start_codons: Iterable[str] = DEFAULT_START_CODONS,
    code: GeneticCode = GeneticCode.STANDARD,
    stop_mode: StopMode = StopMode.ASTERISK,
) -> List[OpenReadingFrame]:
    """
    Find ORFs in all six frames of `sequence` (cleaned to ACGT first).

    Result is sorted by descending length; equal lengths keep the scan order
    (+1, +2, +3, -1, -2, -3, then position within the frame).
    """
    seq = clean_sequence(sequence, DNA_ALPHABET)
    starts = tuple(c.upper() for c in start_codons) or DEFAULT_START_CODONS
    n = len(seq)
    rc = reverse_complement(seq)

    orfs: List[OpenReadingFrame] = []
    for offset in range(3):
        orfs.extend(_scan_frame(seq, offset, min_length, starts, code, stop_mode))
    for offset in range(3):
        for orf in _scan_frame(rc, offset, min_length, starts, code, stop_mode):
            orfs.append(replace(
                orf,
                frame=-(offset + 1),
                strand="-",
                start=n - orf.end + 1,
                end=n - orf.start + 1,
            ))

    orfs.sort(key=lambda o: o.length, reverse=True)
    log.debug("find_orfs: len=%d min=%d starts=%s -> %d ORFs", n, min_length, ",".join(starts), len(orfs))
    return orfs
