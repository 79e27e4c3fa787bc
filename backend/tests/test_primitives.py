# File: backend/tests/test_primitives.py
# Version: v0.1.0
"""
Unit tests for the sequence primitives and genetic code tables:
- cleaning, complement / reverse complement, transcription
- translation in three frames with the three stop modes
- alternative genetic codes and six-frame translation
"""

from __future__ import annotations

import math

import pytest

from backend.app.core.sequence.genetic_code import (
    GeneticCode,
    StopMode,
    codon_table,
    protein_molecular_weight,
)
from backend.app.core.sequence.primitives import (
    clean_sequence,
    complement,
    gc_percent,
    reverse,
    reverse_complement,
    six_frame_translation,
    transcribe,
    translate,
)


def test_clean_sequence_strips_and_uppercases():
    assert clean_sequence("ac gt-nx\n12") == "ACGTN"
    assert clean_sequence("acgtn", "ACGT") == "ACGT"
    assert clean_sequence("") == ""


def test_reverse_complement_basic_and_identity_fallback():
    assert reverse_complement("ATGCN") == "NGCAT"
    # unknown characters map to themselves, case is kept
    assert reverse_complement("aTgX") == "XcAt"
    assert complement("ACGT") == "TGCA"
    assert reverse("ATGC") == "CGTA"


@pytest.mark.parametrize("seq", ["", "A", "ACGTNacgtn", "GATTACA-XYZ"])
def test_reverse_complement_is_involution(seq):
    assert reverse_complement(reverse_complement(seq)) == seq


def test_transcribe_is_literal_and_idempotent():
    assert transcribe("ATGt") == "AUGu"
    once = transcribe("TTACGT")
    assert transcribe(once) == once


def test_translate_stop_modes():
    assert translate("ATGAAATAG") == "MK*"
    assert translate("ATGAAATAG", stop_mode=StopMode.LABEL) == "MKStop"
    assert translate("ATGAAATAG", stop_mode=StopMode.TRUNCATE) == "MK"
    # translation continues past a stop unless truncating
    assert translate("ATGTAAATG") == "M*M"
    assert translate("ATGTAAATG", stop_mode=StopMode.TRUNCATE) == "M"


def test_translate_frames_tail_and_unknown():
    assert translate("AATGAAATAG", frame=2) == "MK*"
    assert translate("CCATGAAATAG", frame=3) == "MK*"
    assert translate("ATGAA") == "M"          # partial tail codon dropped
    assert translate("ATGNNNTAA") == "MX*"    # N-containing codon -> X
    assert translate("AUGAAAUAG") == "MK*"    # RNA input
    assert translate("") == ""


def test_alternative_genetic_codes():
    assert translate("TGA") == "*"
    assert translate("TGA", code=GeneticCode.VERTEBRATE_MITOCHONDRIAL) == "W"
    assert translate("AGA", code=GeneticCode.VERTEBRATE_MITOCHONDRIAL) == "*"
    assert translate("ATGTAA", code=GeneticCode.BACTERIAL) == "M*"
    assert GeneticCode.BACTERIAL.ncbi_id == 11
    assert GeneticCode.STANDARD.display_name == "Standard"


def test_codon_table_is_complete_and_read_only():
    table = codon_table(GeneticCode.STANDARD)
    assert len(table) == 64
    assert table["ATG"] == "M"
    with pytest.raises(TypeError):
        table["ATG"] = "X"  # type: ignore[index]


def test_six_frame_translation():
    frames = six_frame_translation("ATGAAATAG")
    assert [f.frame for f in frames] == [1, 2, 3, -1, -2, -3]
    assert frames[0].protein == "MK*"
    # reverse complement is CTATTTCAT
    assert frames[3].protein == "LFH"


def test_gc_percent():
    assert math.isclose(gc_percent("GGCC"), 100.0)
    assert math.isclose(gc_percent("ATGC"), 50.0)
    assert gc_percent("") == 0.0


def test_protein_molecular_weight_skips_stop():
    assert protein_molecular_weight(["M", "K", "*"]) == pytest.approx(313.415, abs=0.01)
    assert protein_molecular_weight([]) == pytest.approx(18.015, abs=0.01)
