# File: backend/app/core/sequence/formats.py
# Version: v0.2.0
"""
FASTA / GenBank / EMBL reading and writing for the format converter.

Reading and writing go through Bio.SeqIO; this module only detects the input
format and applies the rename / length filter / dedupe steps. Identifiers,
descriptions and sequences are carried; features and references are not.

v0.2.0
- Parse and write via SeqIO instead of hand-built flat-file layouts.
- Identifiers are made safe for every format (whitespace and ';' -> '_').
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, List, Optional

from Bio import SeqIO
from Bio.Seq import Seq, UndefinedSequenceError
from Bio.SeqRecord import SeqRecord

log = logging.getLogger(__name__)

FALLBACK_ID = "sequence_1"
LOCUS_NAME_MAX = 16

_NON_LETTERS = re.compile(r"[^A-Za-z]")
_UNSAFE_ID_CHARS = re.compile(r"[\s;]+")


class SequenceFormat(str, Enum):
    FASTA = "fasta"
    GENBANK = "genbank"
    EMBL = "embl"


@dataclass(frozen=True)
class SequenceRecord:
    id: str
    sequence: str
    description: Optional[str] = None

    @property
    def length(self) -> int:
        return len(self.sequence)


@dataclass(frozen=True)
class ConversionResult:
    records: List[SequenceRecord]
    text: str
    input_count: int
    output_format: SequenceFormat


def _letters(text: str) -> str:
    return _NON_LETTERS.sub("", text).upper()


def safe_id(raw: str) -> str:
    """'sample 1' -> 'sample_1'. Flat-file headers cannot carry spaces or ';' in an id."""
    return _UNSAFE_ID_CHARS.sub("_", raw.strip())


# ---------------- detection ----------------

def detect_format(text: str) -> Optional[SequenceFormat]:
    """Guess the format from the first non-blank line, then by marker lines."""
    first = next((ln for ln in text.splitlines() if ln.strip()), "")
    if first.startswith(">"):
        return SequenceFormat.FASTA
    if first.startswith("LOCUS"):
        return SequenceFormat.GENBANK
    if first.startswith("ID   "):
        return SequenceFormat.EMBL
    if "LOCUS" in text and "ORIGIN" in text:
        return SequenceFormat.GENBANK
    if "ID   " in text and "SQ   " in text:
        return SequenceFormat.EMBL
    if ">" in text:
        return SequenceFormat.FASTA
    return None


# ---------------- readers ----------------

def _from_seqrecord(rec: SeqRecord, fmt: SequenceFormat, n: int) -> SequenceRecord:
    try:
        seq = _letters(str(rec.seq))
    except UndefinedSequenceError:
        seq = ""

    desc = (rec.description or "").strip()
    if fmt is SequenceFormat.FASTA:
        # SeqIO keeps the whole title line; the id is its first word
        desc = desc[len(rec.id):].strip() if desc.startswith(rec.id) else desc
    if desc in ("", ".", "<unknown description>"):
        desc = None
    return SequenceRecord(rec.id or f"sequence_{n}", seq, desc)


def _fasta_body(text: str) -> str:
    lines = [ln.strip() for ln in text.splitlines()]
    start = next((i for i, ln in enumerate(lines) if ln.startswith(">")), len(lines))
    return "\n".join(lines[start:]) + "\n"


def parse_records(text: str) -> List[SequenceRecord]:
    """
    Parse `text` in whatever supported format it appears to be in.

    Unrecognized text is taken as one raw sequence (letters only) named
    FALLBACK_ID; empty text yields no records. Malformed GenBank or EMBL
    input raises ValueError from SeqIO.
    """
    fmt = detect_format(text)
    if fmt is None:
        seq = _letters(text)
        return [SequenceRecord(FALLBACK_ID, seq)] if seq else []

    body = _fasta_body(text) if fmt is SequenceFormat.FASTA else text.lstrip()
    return [
        _from_seqrecord(rec, fmt, n)
        for n, rec in enumerate(SeqIO.parse(io.StringIO(body), fmt.value), start=1)
    ]


# ---------------- writers ----------------

def _to_seqrecord(rec: SequenceRecord, fmt: SequenceFormat) -> SeqRecord:
    rid = safe_id(rec.id) or FALLBACK_ID
    desc = rec.description or ""
    if fmt is SequenceFormat.GENBANK:
        # the GenBank writer appends the closing '.' of DEFINITION itself
        desc = desc[:-1] if desc.endswith(".") else desc
    elif fmt is SequenceFormat.EMBL and not desc:
        desc = "."

    out = SeqRecord(Seq(rec.sequence), id=rid, name=rid[:LOCUS_NAME_MAX], description=desc)
    # required by the GenBank / EMBL writers
    out.annotations["molecule_type"] = "DNA"
    out.annotations["topology"] = "linear"
    out.annotations.setdefault("data_file_division", "UNC")
    return out


def format_records(records: Iterable[SequenceRecord], fmt: SequenceFormat) -> str:
    fmt = SequenceFormat(fmt)
    handle = io.StringIO()
    SeqIO.write([_to_seqrecord(r, fmt) for r in records], handle, fmt.value)
    return handle.getvalue()


# ---------------- conversion ----------------

def convert_records(
    text: str,
    fmt: SequenceFormat,
    rename_pattern: Optional[str] = None,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    remove_duplicates: bool = False,
) -> ConversionResult:
    """
    Parse `text`, then rename, filter and dedupe before writing it as `fmt`.

    `rename_pattern` may use {n} (1-based position in the input) and {id}
    (original identifier); the result goes through safe_id, so "sample {n}"
    gives "sample_1". Length bounds are inclusive. Duplicate removal keeps
    the first record carrying a given sequence.
    """
    parsed = parse_records(text)
    out: List[SequenceRecord] = []
    seen = set()
    for n, rec in enumerate(parsed, start=1):
        new_id = rec.id
        if rename_pattern:
            new_id = rename_pattern.replace("{n}", str(n)).replace("{id}", rec.id)
        rec = replace(rec, id=safe_id(new_id) or f"sequence_{n}")
        if min_length is not None and rec.length < min_length:
            continue
        if max_length is not None and rec.length > max_length:
            continue
        if remove_duplicates:
            if rec.sequence in seen:
                continue
            seen.add(rec.sequence)
        out.append(rec)

    log.debug("convert: %d parsed, %d kept, format=%s", len(parsed), len(out), fmt)
    return ConversionResult(
        records=out,
        text=format_records(out, fmt),
        input_count=len(parsed),
        output_format=SequenceFormat(fmt),
    )
