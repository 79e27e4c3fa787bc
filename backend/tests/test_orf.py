# File: backend/tests/test_orf.py
# Version: v0.1.0
"""
Unit tests for the six-frame ORF finder.
"""

from __future__ import annotations

import pytest

from backend.app.core.sequence.genetic_code import StopMode
from backend.app.core.sequence.orf import find_orfs, parse_start_codons


def test_single_forward_orf():
    orfs = find_orfs("ATGAAATAG", min_length=9)
    assert len(orfs) == 1
    orf = orfs[0]
    assert (orf.frame, orf.strand, orf.start, orf.end, orf.length) == (1, "+", 1, 9, 9)
    assert orf.protein == "MK*"
    assert orf.dna_sequence == "ATGAAATAG"
    assert (orf.start_codon, orf.stop_codon) == ("ATG", "TAG")
    assert orf.molecular_weight == pytest.approx(313.415, abs=0.01)


def test_stop_modes_on_orf_protein():
    assert find_orfs("ATGAAATAG", 9, stop_mode=StopMode.TRUNCATE)[0].protein == "MK"
    assert find_orfs("ATGAAATAG", 9, stop_mode=StopMode.LABEL)[0].protein == "MKStop"


def test_min_length_filters():
    assert find_orfs("ATGAAATAG", min_length=12) == []


def test_reverse_strand_coordinates():
    # reverse complement is ATGAAATAGCC
    orfs = find_orfs("GGCTATTTCAT", min_length=9)
    assert len(orfs) == 1
    orf = orfs[0]
    assert (orf.frame, orf.strand) == (-1, "-")
    assert (orf.start, orf.end) == (3, 11)
    assert orf.dna_sequence == "ATGAAATAG"


def test_first_start_first_stop():
    orfs = find_orfs("ATGATGAAATAG", min_length=9)
    assert len(orfs) == 1
    assert (orfs[0].start, orfs[0].end) == (1, 12)
    assert orfs[0].protein == "MMK*"


def test_unterminated_orf_is_dropped():
    assert find_orfs("ATGAAAAAA", min_length=3) == []


def test_sorted_by_length_descending():
    orfs = find_orfs("ATGTAAATGAAAAAATAA", min_length=6)
    assert [o.length for o in orfs] == [12, 6]
    assert [o.start for o in orfs] == [7, 1]


def test_alternative_start_codons():
    assert find_orfs("GTGAAATAG", min_length=9) == []
    orfs = find_orfs("GTGAAATAG", min_length=9, start_codons=("GTG",))
    assert orfs[0].protein == "VK*"
    assert orfs[0].start_codon == "GTG"


def test_input_is_cleaned():
    orfs = find_orfs("atg aaa\ntag", min_length=9)
    assert len(orfs) == 1
    assert orfs[0].end == 9


def test_parse_start_codons():
    assert parse_start_codons("atg, GUG,,") == ("ATG", "GTG")
    assert parse_start_codons("") == ("ATG",)
    assert parse_start_codons("ATG,ATG") == ("ATG",)
