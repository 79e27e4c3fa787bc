# File: backend/app/core/sequence/primitives.py
# Version: v0.1.0
"""
Sequence primitives shared by every tool.

- clean_sequence: uppercase + strip characters outside an alphabet
- complement / reverse_complement: A<->T, C<->G, N<->N; anything else maps to itself
- transcribe: literal T->U
- translate_residues / translate: codon-by-codon translation in frame 1..3
- six_frame_translation: +1..+3 on the given strand, -1..-3 on its reverse complement

All functions are total over str input: nothing here raises on odd characters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .genetic_code import (
    GeneticCode,
    StopMode,
    UNKNOWN_SYMBOL,
    codon_table,
    render_protein,
)

DNA_ALPHABET = "ACGT"
DNA_ALPHABET_N = "ACGTN"

_COMPLEMENT = str.maketrans("ACGTNacgtn", "TGCANtgcan")


def clean_sequence(text: str, alphabet: str = DNA_ALPHABET_N) -> str:
    """Uppercase `text` and drop every character not in `alphabet`."""
    allowed = set(alphabet.upper())
    return "".join(c for c in text.upper() if c in allowed)


def complement(seq: str) -> str:
    return seq.translate(_COMPLEMENT)


def reverse(seq: str) -> str:
    return seq[::-1]


def reverse_complement(seq: str) -> str:
    """Reverse-complement; case is kept and unrecognized characters pass through."""
    return seq.translate(_COMPLEMENT)[::-1]


def transcribe(seq: str) -> str:
    """DNA -> RNA as a literal T->U (t->u) substitution."""
    return seq.replace("T", "U").replace("t", "u")


def gc_percent(seq: str) -> float:
    s = seq.upper()
    if not s:
        return 0.0
    return 100.0 * (s.count("G") + s.count("C")) / len(s)


def translate_residues(seq: str, frame: int = 1, code: GeneticCode = GeneticCode.STANDARD) -> List[str]:
    """
    Translate `seq` (DNA or RNA) into one residue per complete codon.

    Frame 1/2/3 starts reading at offset 0/1/2. A trailing partial codon is dropped.
    Codons absent from the table (e.g. containing N) become UNKNOWN_SYMBOL.
    """
    table = codon_table(code)
    s = clean_sequence(seq, "ACGTUN").replace("U", "T")
    offset = (frame - 1) % 3
    return [table.get(s[i : i + 3], UNKNOWN_SYMBOL) for i in range(offset, len(s) - 2, 3)]


def translate(
    seq: str,
    frame: int = 1,
    code: GeneticCode = GeneticCode.STANDARD,
    stop_mode: StopMode = StopMode.ASTERISK,
) -> str:
    return render_protein(translate_residues(seq, frame, code), stop_mode)


@dataclass(frozen=True)
class FrameTranslation:
    frame: int  # +1..+3 forward, -1..-3 reverse complement
    protein: str


def six_frame_translation(
    seq: str,
    code: GeneticCode = GeneticCode.STANDARD,
    stop_mode: StopMode = StopMode.ASTERISK,
) -> List[FrameTranslation]:
    s = clean_sequence(seq, DNA_ALPHABET_N)
    rc = reverse_complement(s)
    out = [FrameTranslation(frame=f, protein=translate(s, f, code, stop_mode)) for f in (1, 2, 3)]
    out.extend(FrameTranslation(frame=-f, protein=translate(rc, f, code, stop_mode)) for f in (1, 2, 3))
    return out
