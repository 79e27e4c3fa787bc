# File: backend/app/services/restriction_service.py
# Version: v0.1.0
"""
Restriction digest service.

Resolves the enzyme catalog once per configured path and runs the digest and
ligation checks against it.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from backend.app.core.config import settings
from backend.app.config.config_enzymes import load_enzyme_catalog
from backend.app.core.sequence.restriction import (
    DigestResult,
    LigationCheck,
    RestrictionEnzyme,
    check_ligation,
    digest,
)
from backend.app.services.sequence_service import ensure_length

log = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def _catalog_for(path: Optional[Path]) -> Mapping[str, RestrictionEnzyme]:
    return load_enzyme_catalog(path)


def get_catalog() -> Mapping[str, RestrictionEnzyme]:
    return _catalog_for(settings.ENZYME_CATALOG_PATH)


def list_enzymes() -> List[RestrictionEnzyme]:
    return sorted(get_catalog().values(), key=lambda e: e.name.lower())


def run_digest(sequence: str, enzymes: Sequence[str], circular: bool = False) -> DigestResult:
    ensure_length(sequence)
    result = digest(sequence, enzymes, circular=circular, catalog=get_catalog())
    log.debug(
        "digest: len=%d enzymes=%s circular=%s -> %d sites",
        result.length, ",".join(enzymes), circular, len(result.sites),
    )
    return result


def run_ligation(vector: str, vector_enzyme: str, insert: str, insert_enzyme: str) -> LigationCheck:
    ensure_length(vector)
    ensure_length(insert)
    return check_ligation(vector, vector_enzyme, insert, insert_enzyme, catalog=get_catalog())
