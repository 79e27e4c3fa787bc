# File: backend/app/api/v1/formats.py
# Version: v0.2.0
"""
API router for sequence format conversion.

POST /api/v1/formats/convert
  - Input format is detected (FASTA / GenBank / EMBL / raw)
  - Output is FASTA, GenBank or EMBL text written by Bio.SeqIO
  - Unreadable GenBank / EMBL input gives 400
"""

from fastapi import APIRouter, HTTPException

from ...schemas.sequence import FormatConvertRequest, FormatConvertResponse, RecordSummary
from ...services.sequence_service import convert_text

router = APIRouter(prefix="/v1/formats", tags=["formats"])


@router.post("/convert", response_model=FormatConvertResponse)
def convert_endpoint(payload: FormatConvertRequest) -> FormatConvertResponse:
    try:
        result = convert_text(
            payload.text,
            payload.output_format,
            rename_pattern=payload.rename_pattern,
            min_length=payload.min_length,
            max_length=payload.max_length,
            remove_duplicates=payload.remove_duplicates,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return FormatConvertResponse(
        output_format=result.output_format,
        input_count=result.input_count,
        output_count=len(result.records),
        records=[RecordSummary.model_validate(r) for r in result.records],
        text=result.text,
    )
