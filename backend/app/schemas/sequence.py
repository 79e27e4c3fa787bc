# File: backend/app/schemas/sequence.py
# Version: v0.1.0
"""
Pydantic schemas for the sequence primitives and the format converter.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, constr

from backend.app.core.sequence.formats import SequenceFormat
from backend.app.core.sequence.genetic_code import GeneticCode, StopMode


class SequenceRequest(BaseModel):
    """A single sequence; characters outside the tool's alphabet are passed through or ignored."""
    sequence: constr(strip_whitespace=True, min_length=1) = Field(
        ..., description="DNA or RNA sequence (case-insensitive).", examples=["ATGAAATAG"]
    )


class SequenceResponse(BaseModel):
    length: int = Field(..., ge=0, description="Length of the returned sequence.")
    sequence: str


class TranslateRequest(SequenceRequest):
    frame: int = Field(1, ge=1, le=3, description="Reading frame: 1, 2 or 3 (offset 0, 1, 2).")
    code: GeneticCode = Field(GeneticCode.STANDARD, description="Translation table.")
    stop_mode: StopMode = Field(StopMode.ASTERISK, description="How stop codons are rendered.")


class TranslateResponse(BaseModel):
    frame: int
    code: GeneticCode
    protein: str
    length: int = Field(..., ge=0, description="Length of the protein string.")


class SixFrameRequest(SequenceRequest):
    code: GeneticCode = GeneticCode.STANDARD
    stop_mode: StopMode = StopMode.ASTERISK


class FrameTranslationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    frame: int = Field(..., description="+1..+3 forward, -1..-3 reverse complement.")
    protein: str


class SixFrameResponse(BaseModel):
    code: GeneticCode
    frames: List[FrameTranslationOut]


class FormatConvertRequest(BaseModel):
    text: constr(min_length=1) = Field(..., description="FASTA, GenBank, EMBL or raw sequence text.")
    output_format: SequenceFormat = SequenceFormat.FASTA
    rename_pattern: Optional[str] = Field(
        None, description="New identifiers; {n} = 1-based position, {id} = original id.", examples=["seq_{n}"]
    )
    min_length: Optional[int] = Field(None, ge=0)
    max_length: Optional[int] = Field(None, ge=0)
    remove_duplicates: bool = False


class RecordSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    length: int
    description: Optional[str] = None


class FormatConvertResponse(BaseModel):
    output_format: SequenceFormat
    input_count: int = Field(..., ge=0)
    output_count: int = Field(..., ge=0)
    records: List[RecordSummary] = Field(default_factory=list)
    text: str
