# File: backend/app/schemas/orf.py
# Version: v0.1.1
"""
Pydantic schemas for the ORF finder.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, constr

from backend.app.core.sequence.genetic_code import GeneticCode, StopMode


class OrfSearchRequest(BaseModel):
    """Request payload for a six-frame ORF search over one or more FASTA records."""
    text: constr(strip_whitespace=True, min_length=1) = Field(
        ...,
        description="Raw sequence or multi-record FASTA text.",
        examples=[">seq1\nATGAAATAG"],
    )
    min_length: Optional[int] = Field(
        None, ge=1, description="Minimum ORF length in nucleotides (stop codon included)."
    )
    start_codons: str = Field("ATG", description="Comma-separated start codons, e.g. 'ATG,GTG'.")
    code: GeneticCode = GeneticCode.STANDARD
    stop_mode: StopMode = StopMode.ASTERISK


class OrfOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    frame: int = Field(..., description="+1..+3 forward, -1..-3 reverse.")
    strand: Literal["+", "-"]
    start: int = Field(..., ge=1, description="1-based inclusive, forward-strand coordinates.")
    end: int = Field(..., ge=1)
    length: int = Field(..., ge=3)
    dna_sequence: str
    protein: str
    start_codon: str
    stop_codon: str
    molecular_weight: float = Field(..., description="Average mass in Da, stop excluded.")


class OrfRecordOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    length: int
    total: int
    orfs: List[OrfOut] = Field(default_factory=list)


class OrfSearchResponse(BaseModel):
    records: List[OrfRecordOut] = Field(default_factory=list)
    total: int = Field(..., ge=0, description="ORFs over all records.")
