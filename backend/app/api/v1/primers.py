# File: backend/app/api/v1/primers.py
# Version: v0.1.0
"""
API router for the primer-dimer screen.

POST /api/v1/primers/dimers
  - Body: PrimerTextRequest (one primer per line, optional '>name' headers)
  - Returns: per-primer summary and every self/hetero dimer with any pairing,
    highest risk first
"""

from fastapi import APIRouter, HTTPException

from ...schemas.primers import DimerScreenResponse, PrimerTextRequest
from ...services.primer_service import screen_primers
from ...services.sequence_service import InputTooLargeError

router = APIRouter(prefix="/v1/primers", tags=["primers"])


@router.post("/dimers", response_model=DimerScreenResponse)
def dimers_endpoint(payload: PrimerTextRequest) -> DimerScreenResponse:
    try:
        screen = screen_primers(payload.text)
    except InputTooLargeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return DimerScreenResponse.model_validate(screen)
