# File: backend/app/api/v1/sequence.py
# Version: v0.1.0
"""
API router for the sequence primitives.

POST /api/v1/sequence/reverse-complement
POST /api/v1/sequence/transcribe
POST /api/v1/sequence/translate
POST /api/v1/sequence/six-frame
"""

from fastapi import APIRouter, HTTPException

from ...core.sequence.primitives import (
    reverse_complement,
    six_frame_translation,
    transcribe,
    translate,
)
from ...schemas.sequence import (
    FrameTranslationOut,
    SequenceRequest,
    SequenceResponse,
    SixFrameRequest,
    SixFrameResponse,
    TranslateRequest,
    TranslateResponse,
)
from ...services.sequence_service import InputTooLargeError, ensure_length

router = APIRouter(prefix="/v1/sequence", tags=["sequence"])


def _guard(seq: str) -> None:
    try:
        ensure_length(seq)
    except InputTooLargeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/reverse-complement", response_model=SequenceResponse)
def reverse_complement_endpoint(payload: SequenceRequest) -> SequenceResponse:
    """Reverse complement; characters other than ACGTN are kept as-is."""
    _guard(payload.sequence)
    out = reverse_complement(payload.sequence)
    return SequenceResponse(length=len(out), sequence=out)


@router.post("/transcribe", response_model=SequenceResponse)
def transcribe_endpoint(payload: SequenceRequest) -> SequenceResponse:
    _guard(payload.sequence)
    out = transcribe(payload.sequence)
    return SequenceResponse(length=len(out), sequence=out)


@router.post("/translate", response_model=TranslateResponse)
def translate_endpoint(payload: TranslateRequest) -> TranslateResponse:
    _guard(payload.sequence)
    protein = translate(payload.sequence, payload.frame, payload.code, payload.stop_mode)
    return TranslateResponse(frame=payload.frame, code=payload.code, protein=protein, length=len(protein))


@router.post("/six-frame", response_model=SixFrameResponse)
def six_frame_endpoint(payload: SixFrameRequest) -> SixFrameResponse:
    _guard(payload.sequence)
    frames = six_frame_translation(payload.sequence, payload.code, payload.stop_mode)
    return SixFrameResponse(
        code=payload.code,
        frames=[FrameTranslationOut.model_validate(f) for f in frames],
    )
