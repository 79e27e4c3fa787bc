# File: backend/app/core/sequence/restriction.py
# Version: v0.1.0
"""
Restriction site search, digest fragments and a sticky-end ligation check.

Coordinates
-----------
All positions are 0-based offsets on the forward strand. Cut positions are
inter-base boundaries: a cut at k falls between base k-1 and base k, so a top
cut offset of 1 in GAATTC means G^AATTC.

A hit found on the reverse complement at rc[s:s+n] covers seq[L-s-n:L-s].
Mirroring its cut boundaries gives top' = start + n - bottom_cut and
bottom' = start + n - top_cut. For a palindromic site the mirrored hit equals
the forward hit and is reported once.

On circular molecules the search also covers sites spanning the origin. Their
`start` and cut positions are reduced modulo L; `end` is start + site length
and can therefore exceed L.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from Bio.Data import IUPACData

from .primitives import DNA_ALPHABET, clean_sequence, reverse_complement

log = logging.getLogger(__name__)

IUPAC_DNA_CODES = "ACGTRYSWKMBDHVN"


class Overhang(str, Enum):
    FIVE_PRIME = "5'"
    THREE_PRIME = "3'"
    BLUNT = "blunt"


@dataclass(frozen=True)
class RestrictionEnzyme:
    name: str
    site: str        # IUPAC recognition sequence, 5'->3' top strand
    top_cut: int     # cut boundary on the top strand, relative to site start
    bottom_cut: int  # cut boundary on the bottom strand, in top-strand coordinates

    @property
    def overhang(self) -> Overhang:
        if self.top_cut < self.bottom_cut:
            return Overhang.FIVE_PRIME
        if self.top_cut > self.bottom_cut:
            return Overhang.THREE_PRIME
        return Overhang.BLUNT

    @property
    def length(self) -> int:
        return len(self.site)


def _enzyme_table(enzymes: Iterable[RestrictionEnzyme]) -> Mapping[str, RestrictionEnzyme]:
    return MappingProxyType({e.name: e for e in enzymes})


BUILTIN_ENZYMES: Mapping[str, RestrictionEnzyme] = _enzyme_table([
    RestrictionEnzyme("EcoRI", "GAATTC", 1, 5),
    RestrictionEnzyme("BamHI", "GGATCC", 1, 5),
    RestrictionEnzyme("XhoI", "CTCGAG", 1, 5),
    RestrictionEnzyme("HindIII", "AAGCTT", 1, 5),
    RestrictionEnzyme("PstI", "CTGCAG", 5, 1),
    RestrictionEnzyme("SmaI", "CCCGGG", 3, 3),
    RestrictionEnzyme("KpnI", "GGTACC", 5, 1),
    RestrictionEnzyme("SacI", "GAGCTC", 5, 1),
    RestrictionEnzyme("SalI", "GTCGAC", 1, 5),
    RestrictionEnzyme("XbaI", "TCTAGA", 1, 5),
    RestrictionEnzyme("NcoI", "CCATGG", 1, 5),
    RestrictionEnzyme("NdeI", "CATATG", 2, 4),
    RestrictionEnzyme("NotI", "GCGGCCGC", 2, 6),
    RestrictionEnzyme("EcoRV", "GATATC", 3, 3),
    RestrictionEnzyme("HincII", "GTYRAC", 3, 3),
    RestrictionEnzyme("NheI", "GCTAGC", 1, 5),
    RestrictionEnzyme("SphI", "GCATGC", 5, 1),
    RestrictionEnzyme("ApaI", "GGGCCC", 5, 1),
    RestrictionEnzyme("BglII", "AGATCT", 1, 5),
    RestrictionEnzyme("AccI", "GTMKAC", 2, 4),
    RestrictionEnzyme("StyI", "CCWWGG", 1, 5),
])


@dataclass(frozen=True)
class CutSite:
    enzyme: str
    start: int
    end: int
    top_cut: int
    bottom_cut: int
    strand: str
    overhang: Overhang

    @property
    def position(self) -> int:
        """1-based position of the first base of the recognition site."""
        return self.start + 1


@dataclass(frozen=True)
class Fragment:
    start: int
    end: int
    length: int


@dataclass(frozen=True)
class DigestResult:
    length: int
    circular: bool
    sites: List[CutSite]
    fragments: List[Fragment]
    unknown_enzymes: List[str]


@lru_cache(maxsize=256)
def compile_site(site: str) -> re.Pattern:
    """
    IUPAC site -> regex of character classes, wrapped in a lookahead so that
    finditer() reports overlapping occurrences.
    """
    parts = []
    for code in site.upper():
        bases = "".join(sorted(IUPACData.ambiguous_dna_values.get(code, code)))
        parts.append(bases if len(bases) == 1 else f"[{bases}]")
    return re.compile("(?=(" + "".join(parts) + "))")


def _match_starts(pattern: re.Pattern, seq: str, circular: bool, site_len: int) -> List[int]:
    n = len(seq)
    if circular and n:
        text = seq + seq[: site_len - 1]
    else:
        text = seq
    return [m.start() for m in pattern.finditer(text) if m.start() < n]


def _sites_for_enzyme(seq: str, rc: str, enzyme: RestrictionEnzyme, circular: bool) -> List[CutSite]:
    n = len(seq)
    k = enzyme.length
    pattern = compile_site(enzyme.site)
    wrap = (lambda x: x % n) if circular else (lambda x: x)
    out: List[CutSite] = []
    seen = set()

    def add(start: int, top: int, bottom: int, strand: str) -> None:
        key = (wrap(start), wrap(top), wrap(bottom))
        if key in seen:
            return
        seen.add(key)
        out.append(CutSite(
            enzyme=enzyme.name,
            start=key[0],
            end=key[0] + k,
            top_cut=key[1],
            bottom_cut=key[2],
            strand=strand,
            overhang=enzyme.overhang,
        ))

    for s in _match_starts(pattern, seq, circular, k):
        add(s, s + enzyme.top_cut, s + enzyme.bottom_cut, "+")
    for rs in _match_starts(pattern, rc, circular, k):
        start = n - rs - k
        add(start, start + k - enzyme.bottom_cut, start + k - enzyme.top_cut, "-")
    return out


def find_cut_sites(
    sequence: str,
    enzymes: Iterable[RestrictionEnzyme],
    circular: bool = False,
) -> List[CutSite]:
    """All sites of `enzymes` on both strands of `sequence`, sorted by top-strand cut."""
    seq = clean_sequence(sequence, DNA_ALPHABET)
    if not seq:
        return []
    rc = reverse_complement(seq)
    sites: List[CutSite] = []
    for enzyme in enzymes:
        sites.extend(_sites_for_enzyme(seq, rc, enzyme, circular))
    sites.sort(key=lambda s: s.top_cut)
    return sites


def compute_fragments(cuts: Iterable[int], length: int, circular: bool = False) -> List[Fragment]:
    """
    Fragments left by cutting a molecule of `length` at the given top-strand
    boundaries. Duplicate cuts count once. Sorted by descending length.
    """
    if length <= 0:
        return []
    points = sorted(set(cuts))
    if not points:
        return [Fragment(0, length, length)]

    frags: List[Fragment] = []
    if circular:
        if len(points) == 1:
            frags.append(Fragment(points[0], points[0], length))
        else:
            for i, a in enumerate(points):
                b = points[(i + 1) % len(points)]
                frags.append(Fragment(a, b, (b - a) % length))
    else:
        bounds = [0] + points + [length]
        for a, b in zip(bounds, bounds[1:]):
            frags.append(Fragment(a, b, b - a))

    frags.sort(key=lambda f: f.length, reverse=True)
    return frags


def lookup_enzymes(
    names: Iterable[str],
    catalog: Mapping[str, RestrictionEnzyme] = BUILTIN_ENZYMES,
) -> Tuple[List[RestrictionEnzyme], List[str]]:
    """Case-insensitive catalog lookup -> (found enzymes, unknown names). Order and first occurrence kept."""
    by_lower: Dict[str, RestrictionEnzyme] = {k.lower(): v for k, v in catalog.items()}
    found: List[RestrictionEnzyme] = []
    unknown: List[str] = []
    for name in names:
        enzyme = by_lower.get(name.strip().lower())
        if enzyme is None:
            if name not in unknown:
                unknown.append(name)
        elif enzyme not in found:
            found.append(enzyme)
    return found, unknown


def digest(
    sequence: str,
    enzyme_names: Sequence[str],
    circular: bool = False,
    catalog: Mapping[str, RestrictionEnzyme] = BUILTIN_ENZYMES,
) -> DigestResult:
    seq = clean_sequence(sequence, DNA_ALPHABET)
    enzymes, unknown = lookup_enzymes(enzyme_names, catalog)
    if unknown:
        log.info("digest: unknown enzymes ignored: %s", ", ".join(unknown))
    sites = find_cut_sites(seq, enzymes, circular)
    fragments = compute_fragments((s.top_cut for s in sites), len(seq), circular)
    return DigestResult(
        length=len(seq),
        circular=circular,
        sites=sites,
        fragments=fragments,
        unknown_enzymes=unknown,
    )


# ---------------- ligation compatibility ----------------

class LigationStatus(str, Enum):
    COMPATIBLE_BLUNT = "compatible_blunt"
    COMPATIBLE_STICKY = "compatible_sticky"
    TYPE_MISMATCH = "type_mismatch"
    SEQUENCE_MISMATCH = "sequence_mismatch"
    SITE_NOT_FOUND = "site_not_found"
    MISSING_SEQUENCE = "missing_sequence"


@dataclass(frozen=True)
class DigestEnd:
    enzyme: str
    overhang: Overhang
    seq5: str  # 5' overhang as read on its own strand ("" when blunt)
    seq3: str


@dataclass(frozen=True)
class LigationCheck:
    status: LigationStatus
    reason: str
    vector_end: Optional[DigestEnd] = None
    insert_end: Optional[DigestEnd] = None

    @property
    def ok(self) -> bool:
        return self.status in (LigationStatus.COMPATIBLE_BLUNT, LigationStatus.COMPATIBLE_STICKY)


def digest_end(sequence: str, enzyme: RestrictionEnzyme) -> Optional[DigestEnd]:
    """End left by the first forward-strand match of `enzyme`, or None when it does not cut."""
    seq = clean_sequence(sequence, DNA_ALPHABET)
    m = compile_site(enzyme.site).search(seq)
    if m is None:
        return None
    top = m.start() + enzyme.top_cut
    bottom = m.start() + enzyme.bottom_cut
    kind = enzyme.overhang
    if kind is Overhang.BLUNT:
        return DigestEnd(enzyme.name, kind, "", "")
    if kind is Overhang.FIVE_PRIME:
        over = seq[top:bottom]
        return DigestEnd(enzyme.name, kind, over, reverse_complement(over))
    over = seq[bottom:top]
    return DigestEnd(enzyme.name, kind, reverse_complement(over), over)


def check_ligation(
    vector: str,
    vector_enzyme: str,
    insert: str,
    insert_enzyme: str,
    catalog: Mapping[str, RestrictionEnzyme] = BUILTIN_ENZYMES,
) -> LigationCheck:
    """
    Can the vector end and the insert end be joined?

    Blunt joins blunt. Sticky ends need the same overhang type and overhangs
    that are reverse complements of each other.
    """
    v = clean_sequence(vector, DNA_ALPHABET)
    i = clean_sequence(insert, DNA_ALPHABET)
    if not v or not i:
        return LigationCheck(LigationStatus.MISSING_SEQUENCE, "Provide both vector and insert sequences")

    enzymes = []
    for name in (vector_enzyme, insert_enzyme):
        found, _ = lookup_enzymes([name], catalog)
        if not found:
            return LigationCheck(LigationStatus.SITE_NOT_FOUND, f"Unknown enzyme: {name}")
        enzymes.append(found[0])
    v_enz, i_enz = enzymes

    v_end = digest_end(v, v_enz)
    i_end = digest_end(i, i_enz)
    if v_end is None or i_end is None:
        missing = v_enz.name if v_end is None else i_enz.name
        return LigationCheck(
            LigationStatus.SITE_NOT_FOUND, f"{missing} site not found in sequence", v_end, i_end
        )
    if v_end.overhang is Overhang.BLUNT and i_end.overhang is Overhang.BLUNT:
        return LigationCheck(
            LigationStatus.COMPATIBLE_BLUNT, "Blunt ends ligate, lower efficiency", v_end, i_end
        )
    if v_end.overhang is not i_end.overhang:
        return LigationCheck(LigationStatus.TYPE_MISMATCH, "Overhang type mismatch", v_end, i_end)
    if v_end.seq5 and v_end.seq5 == reverse_complement(i_end.seq5):
        return LigationCheck(LigationStatus.COMPATIBLE_STICKY, "Sticky ends are compatible", v_end, i_end)
    return LigationCheck(
        LigationStatus.SEQUENCE_MISMATCH, "Overhang sequences are not compatible", v_end, i_end
    )
