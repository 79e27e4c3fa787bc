# File: backend/app/api/v1/restriction.py
# Version: v0.1.0
"""
API router for restriction analysis.

GET  /api/v1/restriction/enzymes   -> catalog (built-ins + configured extras)
POST /api/v1/restriction/digest    -> sites and fragments
POST /api/v1/restriction/ligation  -> sticky/blunt end compatibility

Unknown enzyme names are not an error: the digest lists them under
`unknown_enzymes` and the ligation check reports `site_not_found`.
"""

from typing import List

from fastapi import APIRouter, HTTPException

from ...schemas.restriction import (
    DigestRequest,
    DigestResponse,
    EnzymeOut,
    LigationRequest,
    LigationResponse,
)
from ...services.restriction_service import list_enzymes, run_digest, run_ligation
from ...services.sequence_service import InputTooLargeError

router = APIRouter(prefix="/v1/restriction", tags=["restriction"])


@router.get("/enzymes", response_model=List[EnzymeOut])
def enzymes_endpoint() -> List[EnzymeOut]:
    return [EnzymeOut.model_validate(e) for e in list_enzymes()]


@router.post("/digest", response_model=DigestResponse)
def digest_endpoint(payload: DigestRequest) -> DigestResponse:
    try:
        result = run_digest(payload.sequence, payload.enzymes, payload.circular)
    except InputTooLargeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return DigestResponse.model_validate(result)


@router.post("/ligation", response_model=LigationResponse)
def ligation_endpoint(payload: LigationRequest) -> LigationResponse:
    try:
        check = run_ligation(payload.vector, payload.vector_enzyme, payload.insert, payload.insert_enzyme)
    except InputTooLargeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return LigationResponse.model_validate(check)
