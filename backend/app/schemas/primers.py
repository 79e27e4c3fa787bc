# File: backend/app/schemas/primers.py
# Version: v0.1.0
"""
Pydantic schemas for the primer-dimer screen and the index sheet check.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, constr

from backend.app.core.sequence.dimer import DimerKind, DimerRisk
from backend.app.core.sequence.indices import IssueKind, Severity


class PrimerTextRequest(BaseModel):
    text: constr(strip_whitespace=True, min_length=1) = Field(
        ...,
        description="One primer per line, optionally preceded by a '>name' header line.",
        examples=[">fwd\nATCGCGAT\n>rev\nGGCCTTAA"],
    )


class AlignmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    aligned_a: str
    match_string: str
    aligned_b: str
    offset_a: int
    offset_b: int
    score: int
    length: int
    matches: int


class DimerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    kind: DimerKind
    name_a: str
    name_b: str
    sequence_a: str
    sequence_b: str
    alignment: AlignmentOut
    complementarity: int = Field(..., ge=0, le=100, description="Paired bases as % of the shorter primer.")
    free_energy: float = Field(..., description="Estimated ΔG in kcal/mol.")
    risk: DimerRisk


class PrimerSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    sequence: str
    length: int
    gc_percent: float
    tm: float = Field(..., description="Nearest-neighbour Tm (°C).")


class DimerScreenResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    primers: List[PrimerSummaryOut] = Field(default_factory=list)
    results: List[DimerOut] = Field(default_factory=list)
    high_risk_count: int = 0


class IndexCheckRequest(BaseModel):
    text: constr(strip_whitespace=True, min_length=1) = Field(
        ...,
        description="One 'name index1 [index2]' per line; tab, comma or space separated.",
        examples=["S1\tACGTACGT\nS2\tACGTACCA"],
    )


class IndexEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    row: int
    name: str
    index1: str
    index2: Optional[str] = None


class IndexIssueOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    kind: IssueKind
    severity: Severity
    slot: Optional[str] = None
    rows: List[int] = Field(default_factory=list)
    sequences: List[str] = Field(default_factory=list)
    distance: Optional[int] = None
    message: str = ""


class IndexReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    entries: List[IndexEntryOut] = Field(default_factory=list)
    issues: List[IndexIssueOut] = Field(default_factory=list)
    is_valid: bool
    total_checked: int
    error_count: int
    warning_count: int
