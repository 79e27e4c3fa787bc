# File: backend/app/cli/seqtools_cli.py
# Version: v0.1.0
"""
Command line front-end for the sequence tools.

Every command reads its input from --input FILE (or --fasta FILE for `orfs`)
and falls back to stdin. Results are printed as JSON, except `convert` which
prints the converted text.

Usage:
    python -m backend.app.cli.seqtools_cli orfs --fasta region.fasta --min-length 90
    python -m backend.app.cli.seqtools_cli digest --input plasmid.txt --enzymes EcoRI,BamHI --circular
    python -m backend.app.cli.seqtools_cli dimers --input primers.txt
    python -m backend.app.cli.seqtools_cli indices --input samplesheet.tsv
    python -m backend.app.cli.seqtools_cli convert --input seqs.gb --to fasta --rename "seq_{n}"
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from Bio import SeqIO

from backend.app.core.sequence.fasta import SequenceInput, parse_fasta_text
from backend.app.core.sequence.formats import SequenceFormat
from backend.app.core.sequence.genetic_code import GeneticCode, StopMode
from backend.app.core.sequence.orf import find_orfs, parse_start_codons
from backend.app.core.sequence.primitives import DNA_ALPHABET, clean_sequence
from backend.app.schemas.orf import OrfOut
from backend.app.schemas.primers import DimerScreenResponse, IndexReportResponse
from backend.app.schemas.restriction import DigestResponse
from backend.app.services.primer_service import check_index_sheet, screen_primers
from backend.app.services.restriction_service import run_digest
from backend.app.services.sequence_service import convert_text

log = logging.getLogger("seqtools_cli")


# ---------- IO helpers ----------

def read_text(path: Optional[Path]) -> str:
    if path is None:
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def read_fasta_records(path: Path) -> List[SequenceInput]:
    """All records of a FASTA file, cleaned to ACGT. Empty records are skipped."""
    records: List[SequenceInput] = []
    with path.open("r", encoding="utf-8") as fh:
        for rec in SeqIO.parse(fh, "fasta"):
            seq = clean_sequence(str(rec.seq), DNA_ALPHABET)
            if seq:
                records.append(SequenceInput(name=rec.description or rec.id, sequence=seq))
    if not records:
        raise ValueError(f"No FASTA records found in {path}.")
    return records


def emit_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


# ---------- Commands ----------

def cmd_orfs(args: argparse.Namespace) -> None:
    if args.fasta is not None:
        records = read_fasta_records(args.fasta)
    else:
        records = parse_fasta_text(read_text(None))
    starts = parse_start_codons(args.start_codons)
    code = GeneticCode(args.code)
    stop_mode = StopMode(args.stop_mode)

    out = []
    for rec in records:
        orfs = find_orfs(rec.sequence, args.min_length, starts, code, stop_mode)
        log.info("%s: %d bp, %d ORF(s)", rec.name, len(rec.sequence), len(orfs))
        out.append({
            "name": rec.name,
            "length": len(rec.sequence),
            "total": len(orfs),
            "orfs": [OrfOut.model_validate(o).model_dump(mode="json") for o in orfs],
        })
    emit_json(out)


def cmd_digest(args: argparse.Namespace) -> None:
    text = read_text(args.input)
    records = parse_fasta_text(text)
    sequence = records[0].sequence if records else ""
    enzymes = [e.strip() for e in args.enzymes.split(",") if e.strip()]
    if not enzymes:
        raise ValueError("At least one enzyme is required (--enzymes EcoRI,BamHI).")
    result = run_digest(sequence, enzymes, circular=args.circular)
    for name in result.unknown_enzymes:
        log.warning("Unknown enzyme ignored: %s", name)
    emit_json(DigestResponse.model_validate(result).model_dump(mode="json"))


def cmd_dimers(args: argparse.Namespace) -> None:
    screen = screen_primers(read_text(args.input))
    emit_json(DimerScreenResponse.model_validate(screen).model_dump(mode="json"))


def cmd_indices(args: argparse.Namespace) -> None:
    report = check_index_sheet(read_text(args.input))
    emit_json(IndexReportResponse.model_validate(report).model_dump(mode="json"))


def cmd_convert(args: argparse.Namespace) -> None:
    result = convert_text(
        read_text(args.input),
        SequenceFormat(args.to),
        rename_pattern=args.rename,
        min_length=args.min_length,
        max_length=args.max_length,
        remove_duplicates=args.dedupe,
    )
    if args.out is not None:
        args.out.write_text(result.text, encoding="utf-8")
        print(f"[OK] Wrote {len(result.records)} record(s) to {args.out}")
    else:
        sys.stdout.write(result.text)


# ---------- Main ----------

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Sequence analysis tools")
    p.add_argument("--log-level", dest="log_level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="command", required=True)

    orfs = sub.add_parser("orfs", help="Six-frame ORF search")
    orfs.add_argument("--fasta", type=Path, help="FASTA file (default: stdin)")
    orfs.add_argument("--min-length", type=int, default=30, help="Minimum ORF length in nt")
    orfs.add_argument("--start-codons", default="ATG", help="Comma-separated start codons")
    orfs.add_argument("--code", default=GeneticCode.STANDARD.value, choices=[c.value for c in GeneticCode])
    orfs.add_argument("--stop-mode", default=StopMode.ASTERISK.value, choices=[m.value for m in StopMode])
    orfs.set_defaults(func=cmd_orfs)

    dig = sub.add_parser("digest", help="Restriction digest")
    dig.add_argument("--input", type=Path)
    dig.add_argument("--enzymes", required=True, help="Comma-separated enzyme names")
    dig.add_argument("--circular", action="store_true")
    dig.set_defaults(func=cmd_digest)

    dim = sub.add_parser("dimers", help="Primer-dimer screen")
    dim.add_argument("--input", type=Path)
    dim.set_defaults(func=cmd_dimers)

    idx = sub.add_parser("indices", help="Index sheet check")
    idx.add_argument("--input", type=Path)
    idx.set_defaults(func=cmd_indices)

    conv = sub.add_parser("convert", help="FASTA / GenBank / EMBL conversion")
    conv.add_argument("--input", type=Path)
    conv.add_argument("--to", default=SequenceFormat.FASTA.value, choices=[f.value for f in SequenceFormat])
    conv.add_argument("--rename", help="Rename pattern using {n} and {id}")
    conv.add_argument("--min-length", type=int)
    conv.add_argument("--max-length", type=int)
    conv.add_argument("--dedupe", action="store_true", help="Drop records with a sequence seen before")
    conv.add_argument("--out", type=Path)
    conv.set_defaults(func=cmd_convert)
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))
    log.debug("command=%s", args.command)

    try:
        args.func(args)
    except (OSError, ValueError) as ex:
        print(f"[ERROR] {ex}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
