# File: backend/app/core/sequence/fasta.py
# Version: v0.1.0
"""
Lenient FASTA parsing for pasted form text.

Unlike the strict readers used for files, this accepts anything a user may paste:
headerless sequences, blank lines, digits and whitespace inside sequences, and
headers without a name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .primitives import DNA_ALPHABET, clean_sequence

DEFAULT_RECORD_NAME = "Input Sequence"


@dataclass(frozen=True)
class SequenceInput:
    name: str
    sequence: str


def parse_fasta_text(
    text: str,
    alphabet: str = DNA_ALPHABET,
    default_name: str = DEFAULT_RECORD_NAME,
) -> List[SequenceInput]:
    """
    Split `text` into named records.

    - '>' opens a record; its name is the rest of the header line (trimmed),
      or 'Sequence <n>' when that is empty
    - sequence lines are cleaned to `alphabet` and concatenated
    - text with no header at all becomes one record called `default_name`
    - records whose cleaned sequence is empty are dropped
    """
    records: List[SequenceInput] = []
    name: Optional[str] = None
    chunks: List[str] = []
    seen_header = False

    def flush() -> None:
        seq = "".join(chunks)
        if name is not None and seq:
            records.append(SequenceInput(name=name, sequence=seq))

    for raw in text.splitlines():
        line = raw.strip()
        if line.startswith(">"):
            flush()
            seen_header = True
            chunks = []
            name = line[1:].strip() or f"Sequence {len(records) + 1}"
        elif line:
            chunks.append(clean_sequence(line, alphabet))

    if not seen_header:
        seq = clean_sequence(text, alphabet)
        return [SequenceInput(name=default_name, sequence=seq)] if seq else []

    flush()
    return records
