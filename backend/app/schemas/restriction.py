# File: backend/app/schemas/restriction.py
# Version: v0.1.1
"""
Pydantic schemas for restriction digests, the enzyme catalog and the
ligation compatibility check.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, constr, field_validator, model_validator

from backend.app.core.sequence.restriction import IUPAC_DNA_CODES, LigationStatus, Overhang


class EnzymeDefinition(BaseModel):
    """One catalog entry, as stored in the optional enzyme JSON file."""
    model_config = ConfigDict(from_attributes=True)

    name: constr(strip_whitespace=True, min_length=1)
    site: constr(strip_whitespace=True, min_length=1, pattern=f"^[{IUPAC_DNA_CODES}]+$") = Field(
        ..., description="IUPAC recognition sequence, 5'->3'.", examples=["GAATTC"]
    )
    top_cut: int = Field(..., ge=0, description="Top-strand cut boundary relative to site start.")
    bottom_cut: int = Field(..., ge=0, description="Bottom-strand cut boundary, top-strand coordinates.")

    @field_validator("site", mode="before")
    @classmethod
    def _upper_site(cls, v):
        # uppercase before the pattern check
        return v.upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def _cuts_within_site(self) -> "EnzymeDefinition":
        n = len(self.site)
        if self.top_cut > n or self.bottom_cut > n:
            raise ValueError(f"cut offsets must lie within the {n}-base site")
        return self


class EnzymeCatalogFile(BaseModel):
    enzymes: List[EnzymeDefinition] = Field(default_factory=list)


class EnzymeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    site: str
    top_cut: int
    bottom_cut: int
    overhang: Overhang


class DigestRequest(BaseModel):
    sequence: constr(strip_whitespace=True, min_length=1) = Field(
        ..., description="DNA sequence; non-ACGT characters are ignored."
    )
    enzymes: List[str] = Field(..., min_length=1, description="Enzyme names (case-insensitive).")
    circular: bool = Field(False, description="Treat the molecule as circular (plasmid).")


class CutSiteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    enzyme: str
    start: int = Field(..., ge=0, description="0-based start of the recognition site.")
    end: int = Field(..., ge=0, description="0-based exclusive end; may exceed length for origin-spanning sites.")
    position: int = Field(..., ge=1, description="1-based start of the recognition site.")
    top_cut: int
    bottom_cut: int
    strand: str
    overhang: Overhang


class FragmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    start: int
    end: int
    length: int


class DigestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    length: int = Field(..., ge=0)
    circular: bool
    sites: List[CutSiteOut] = Field(default_factory=list)
    fragments: List[FragmentOut] = Field(default_factory=list)
    unknown_enzymes: List[str] = Field(default_factory=list)


class LigationRequest(BaseModel):
    vector: str = Field(..., description="Vector sequence.")
    vector_enzyme: constr(strip_whitespace=True, min_length=1)
    insert: str = Field(..., description="Insert sequence.")
    insert_enzyme: constr(strip_whitespace=True, min_length=1)


class DigestEndOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    enzyme: str
    overhang: Overhang
    seq5: str
    seq3: str


class LigationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ok: bool
    status: LigationStatus
    reason: str
    vector_end: Optional[DigestEndOut] = None
    insert_end: Optional[DigestEndOut] = None
