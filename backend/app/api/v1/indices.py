# File: backend/app/api/v1/indices.py
# Version: v0.1.0
"""
API router for the index (barcode) sheet check.

POST /api/v1/indices/check
  - Oversized sheets are not rejected; they come back with a single
    too-many-entries issue and is_valid=false.
"""

from fastapi import APIRouter, HTTPException

from ...schemas.primers import IndexCheckRequest, IndexReportResponse
from ...services.primer_service import check_index_sheet
from ...services.sequence_service import InputTooLargeError

router = APIRouter(prefix="/v1/indices", tags=["indices"])


@router.post("/check", response_model=IndexReportResponse)
def check_endpoint(payload: IndexCheckRequest) -> IndexReportResponse:
    try:
        report = check_index_sheet(payload.text)
    except InputTooLargeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return IndexReportResponse.model_validate(report)
