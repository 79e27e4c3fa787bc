# File: backend/app/api/v1/api.py
# Version: v0.8.0
"""
v1 API aggregator.

Routers included under /api:
- health
- sequence (reverse complement, transcription, translation, six-frame)
- orfs
- restriction (catalog, digest, ligation)
- primers (dimer screen)
- indices (index sheet check)
- formats (FASTA / GenBank / EMBL conversion)
"""
from __future__ import annotations

from fastapi import APIRouter

from . import health as health_router
from . import sequence as sequence_router
from . import orfs as orfs_router
from . import restriction as restriction_router
from . import primers as primers_router
from . import indices as indices_router
from . import formats as formats_router

api_router = APIRouter()
api_router.include_router(health_router.router)
api_router.include_router(sequence_router.router)
api_router.include_router(orfs_router.router)
api_router.include_router(restriction_router.router)
api_router.include_router(primers_router.router)
api_router.include_router(indices_router.router)
api_router.include_router(formats_router.router)
