# File: backend/app/api/v1/orfs.py
# Version: v0.1.0
"""
API router for the six-frame ORF finder.

POST /api/v1/orfs
  - Body: OrfSearchRequest (raw sequence or multi-record FASTA)
  - Returns: OrfSearchResponse, one entry per record in input order
"""

from fastapi import APIRouter, HTTPException

from ...schemas.orf import OrfRecordOut, OrfSearchRequest, OrfSearchResponse
from ...services.orf_service import search_orfs
from ...services.sequence_service import InputTooLargeError

router = APIRouter(prefix="/v1", tags=["orfs"])


@router.post("/orfs", response_model=OrfSearchResponse)
def orfs_endpoint(payload: OrfSearchRequest) -> OrfSearchResponse:
    try:
        records = search_orfs(
            payload.text,
            min_length=payload.min_length,
            start_codons=payload.start_codons,
            code=payload.code,
            stop_mode=payload.stop_mode,
        )
    except InputTooLargeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return OrfSearchResponse(
        records=[OrfRecordOut.model_validate(r) for r in records],
        total=sum(r.total for r in records),
    )
