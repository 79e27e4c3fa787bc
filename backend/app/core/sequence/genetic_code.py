# File: backend/app/core/sequence/genetic_code.py
# Version: v0.1.0
"""
Genetic code tables and residue masses.

Codon tables are built once from Biopython's NCBI translation tables and handed
out as read-only mappings keyed by DNA codon (T, not U). Stop codons map to
STOP_SYMBOL so callers never have to consult a second list.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Mapping

from Bio.Data import CodonTable

STOP_SYMBOL = "*"
UNKNOWN_SYMBOL = "X"
STOP_LABEL = "Stop"

# Average residue masses (Da) of the free amino acids
AMINO_ACID_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "A": 89.09, "R": 174.20, "N": 132.12, "D": 133.10, "C": 121.15,
    "E": 147.13, "Q": 146.15, "G": 75.07, "H": 155.16, "I": 131.17,
    "L": 131.17, "K": 146.19, "M": 149.21, "F": 165.19, "P": 115.13,
    "S": 105.09, "T": 119.12, "W": 204.23, "Y": 181.19, "V": 117.15,
})
WATER_MASS = 18.015


class GeneticCode(str, Enum):
    """Supported translation tables."""

    STANDARD = "standard"
    VERTEBRATE_MITOCHONDRIAL = "vertebrate_mito"
    YEAST_MITOCHONDRIAL = "yeast_mito"
    BACTERIAL = "bacterial"

    @property
    def ncbi_id(self) -> int:
        return _NCBI_TABLE_IDS[self]

    @property
    def display_name(self) -> str:
        return CodonTable.unambiguous_dna_by_id[self.ncbi_id].names[0]


_NCBI_TABLE_IDS = {
    GeneticCode.STANDARD: 1,
    GeneticCode.VERTEBRATE_MITOCHONDRIAL: 2,
    GeneticCode.YEAST_MITOCHONDRIAL: 3,
    GeneticCode.BACTERIAL: 11,
}


class StopMode(str, Enum):
    """How stop codons are rendered in a translated product."""

    ASTERISK = "asterisk"
    LABEL = "stop"
    TRUNCATE = "truncate"


@lru_cache(maxsize=None)
def codon_table(code: GeneticCode = GeneticCode.STANDARD) -> Mapping[str, str]:
    """Return the 64-codon lookup for `code` (stops included as STOP_SYMBOL)."""
    ncbi = CodonTable.unambiguous_dna_by_id[_NCBI_TABLE_IDS[GeneticCode(code)]]
    table = dict(ncbi.forward_table)
    for codon in ncbi.stop_codons:
        table[codon] = STOP_SYMBOL
    return MappingProxyType(table)


def render_protein(residues: Iterable[str], stop_mode: StopMode = StopMode.ASTERISK) -> str:
    """Join residues into a protein string, applying the stop handling mode."""
    out = []
    for aa in residues:
        if aa == STOP_SYMBOL:
            if stop_mode is StopMode.TRUNCATE:
                break
            out.append(STOP_LABEL if stop_mode is StopMode.LABEL else STOP_SYMBOL)
        else:
            out.append(aa)
    return "".join(out)


def protein_molecular_weight(residues: Iterable[str]) -> float:
    """
    Average mass of a peptide: residue masses (stop and unknown residues skipped)
    plus one water for the terminal hydrolysis. Rounded to 0.01 Da.
    """
    weight = WATER_MASS
    for aa in residues:
        if aa != STOP_SYMBOL:
            weight += AMINO_ACID_WEIGHTS.get(aa, 0.0)
    return round(weight, 2)
