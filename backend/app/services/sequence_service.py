# File: backend/app/services/sequence_service.py
# Version: v0.1.0
"""
Shared input guards and the format conversion pipeline.

The core algorithms accept any string. The service layer is where the
configured input caps are enforced so a single request cannot pin the
worker with a multi-megabase paste.
"""

from __future__ import annotations

import logging
from typing import Optional

from backend.app.core.config import settings
from backend.app.core.sequence.formats import ConversionResult, SequenceFormat, convert_records

log = logging.getLogger(__name__)


class InputTooLargeError(ValueError):
    """Raised when a request exceeds one of the configured input caps."""


def ensure_length(text: str, limit: Optional[int] = None) -> None:
    limit = settings.MAX_SEQUENCE_LENGTH if limit is None else limit
    if len(text) > limit:
        raise InputTooLargeError(f"input of {len(text)} characters exceeds the limit of {limit}")


def convert_text(
    text: str,
    output_format: SequenceFormat,
    rename_pattern: Optional[str] = None,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    remove_duplicates: bool = False,
) -> ConversionResult:
    ensure_length(text)
    result = convert_records(
        text,
        output_format,
        rename_pattern=rename_pattern,
        min_length=min_length,
        max_length=max_length,
        remove_duplicates=remove_duplicates,
    )
    log.info("convert: %d -> %d records as %s", result.input_count, len(result.records), output_format.value)
    return result
