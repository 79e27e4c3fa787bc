# File: backend/tests/test_restriction.py
# Version: v0.1.0
"""
Unit tests for restriction site search, fragments and the ligation check.
"""

from __future__ import annotations

from backend.app.core.sequence.restriction import (
    BUILTIN_ENZYMES,
    Fragment,
    LigationStatus,
    Overhang,
    RestrictionEnzyme,
    check_ligation,
    compile_site,
    compute_fragments,
    digest,
    digest_end,
    find_cut_sites,
)

ECORI = BUILTIN_ENZYMES["EcoRI"]


def test_catalog_overhangs_follow_cut_offsets():
    assert ECORI.overhang is Overhang.FIVE_PRIME
    assert BUILTIN_ENZYMES["PstI"].overhang is Overhang.THREE_PRIME
    assert BUILTIN_ENZYMES["SmaI"].overhang is Overhang.BLUNT


def test_palindromic_site_reported_once():
    sites = find_cut_sites("GGAATTCC", [ECORI])
    assert len(sites) == 1
    site = sites[0]
    assert site.strand == "+"
    assert site.start == 1
    assert site.position == 2
    assert (site.top_cut, site.bottom_cut) == (2, 6)
    assert site.overhang is Overhang.FIVE_PRIME


def test_iupac_site_matching():
    pattern = compile_site("GTYRAC")
    assert pattern.search("GTCGAC")
    assert pattern.search("GTTAAC")
    assert not pattern.search("GTAAAC")
    sites = find_cut_sites("AAGTTAACAA", [BUILTIN_ENZYMES["HincII"]])
    assert [(s.start, s.top_cut) for s in sites] == [(2, 5)]


def test_overlapping_matches():
    enzyme = RestrictionEnzyme("TestI", "AAA", 1, 2)
    sites = find_cut_sites("AAAA", [enzyme])
    assert [s.start for s in sites] == [0, 1]
    assert all(s.strand == "+" for s in sites)


def test_reverse_strand_hit_mapped_to_forward_coordinates():
    enzyme = RestrictionEnzyme("AsymI", "GGATG", 2, 3)
    sites = find_cut_sites("CATCC", [enzyme])
    assert len(sites) == 1
    site = sites[0]
    assert site.strand == "-"
    assert (site.start, site.end) == (0, 5)
    assert (site.top_cut, site.bottom_cut) == (2, 3)


def test_site_spanning_origin_only_found_when_circular():
    seq = "ATTCTTTTTTGA"  # GA|ATTC across the origin
    assert find_cut_sites(seq, [ECORI], circular=False) == []
    sites = find_cut_sites(seq, [ECORI], circular=True)
    assert len(sites) == 1
    assert (sites[0].start, sites[0].top_cut, sites[0].bottom_cut) == (10, 11, 3)


def test_sites_sorted_by_cut_position_across_enzymes():
    seq = "GGATCCAAAAGAATTC"
    sites = find_cut_sites(seq, [ECORI, BUILTIN_ENZYMES["BamHI"]])
    assert [s.enzyme for s in sites] == ["BamHI", "EcoRI"]
    assert [s.top_cut for s in sites] == [1, 11]


def test_linear_fragments():
    frags = compute_fragments([7, 3], 10)
    assert frags == [Fragment(3, 7, 4), Fragment(0, 3, 3), Fragment(7, 10, 3)]
    assert sum(f.length for f in frags) == 10


def test_circular_fragments():
    frags = compute_fragments([3, 7], 10, circular=True)
    assert frags == [Fragment(7, 3, 6), Fragment(3, 7, 4)]
    assert compute_fragments([5], 10, circular=True) == [Fragment(5, 5, 10)]


def test_fragment_edge_cases():
    assert compute_fragments([], 10) == [Fragment(0, 10, 10)]
    assert compute_fragments([], 10, circular=True) == [Fragment(0, 10, 10)]
    assert compute_fragments([1], 0) == []
    assert len(compute_fragments([3, 3], 10)) == 2


def test_digest_lists_unknown_enzymes_case_insensitively():
    result = digest("GGAATTCC", ["ecori", "FooI"])
    assert result.unknown_enzymes == ["FooI"]
    assert result.length == 8
    assert len(result.sites) == 1
    assert [f.length for f in result.fragments] == [6, 2]


def test_digest_end_overhangs():
    five = digest_end("GGAATTCC", ECORI)
    assert (five.overhang, five.seq5, five.seq3) == (Overhang.FIVE_PRIME, "AATT", "AATT")
    three = digest_end("AACTGCAGTT", BUILTIN_ENZYMES["PstI"])
    assert (three.overhang, three.seq3, three.seq5) == (Overhang.THREE_PRIME, "TGCA", "TGCA")
    blunt = digest_end("AACCCGGGAA", BUILTIN_ENZYMES["SmaI"])
    assert (blunt.overhang, blunt.seq5) == (Overhang.BLUNT, "")
    assert digest_end("AAAA", ECORI) is None


def test_ligation_statuses():
    sticky = check_ligation("GGAATTCC", "EcoRI", "TTGAATTCAA", "EcoRI")
    assert sticky.status is LigationStatus.COMPATIBLE_STICKY
    assert sticky.ok

    # BamHI and BglII leave the same GATC overhang
    assert check_ligation("GGGATCCC", "BamHI", "AAGATCTT", "BglII").ok

    blunt = check_ligation("CCCGGG", "SmaI", "GATATC", "EcoRV")
    assert blunt.status is LigationStatus.COMPATIBLE_BLUNT

    assert check_ligation("GAATTC", "EcoRI", "CTGCAG", "PstI").status is LigationStatus.TYPE_MISMATCH
    mismatch = check_ligation("GAATTC", "EcoRI", "AAGCTT", "HindIII")
    assert mismatch.status is LigationStatus.SEQUENCE_MISMATCH
    assert not mismatch.ok

    assert check_ligation("AAAA", "EcoRI", "GAATTC", "EcoRI").status is LigationStatus.SITE_NOT_FOUND
    assert check_ligation("GAATTC", "NopeI", "GAATTC", "EcoRI").status is LigationStatus.SITE_NOT_FOUND
    assert check_ligation("", "EcoRI", "GAATTC", "EcoRI").status is LigationStatus.MISSING_SEQUENCE
