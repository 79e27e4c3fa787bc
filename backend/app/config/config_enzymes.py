# File: backend/app/config/config_enzymes.py
# Version: v0.1.0
"""
Restriction enzyme catalog loader.

- Built-in enzymes come from core/sequence/restriction.py (BUILTIN_ENZYMES)
- Extra enzymes can be supplied as a JSON file (Settings.ENZYME_CATALOG_PATH)
- Entries are validated with EnzymeDefinition (Pydantic) from schemas/restriction.py
- A file entry with the same name as a built-in replaces it

Usage:
    from backend.app.config.config_enzymes import load_enzyme_catalog

File shape:

  {
    "enzymes": [
      {"name": "MyEnzI", "site": "GGNCC", "top_cut": 1, "bottom_cut": 4}
    ]
  }

A bare list of entries is accepted too.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from backend.app.core.sequence.restriction import BUILTIN_ENZYMES, RestrictionEnzyme
from backend.app.schemas.restriction import EnzymeCatalogFile

log = logging.getLogger(__name__)


def _read_json(path: Path) -> object:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_extra_enzymes(path: Path) -> List[RestrictionEnzyme]:
    """Read and validate the enzymes listed in `path`; a missing file gives []."""
    payload = _read_json(path)
    if isinstance(payload, list):
        payload = {"enzymes": payload}
    parsed = EnzymeCatalogFile.model_validate(payload or {})
    return [RestrictionEnzyme(e.name, e.site, e.top_cut, e.bottom_cut) for e in parsed.enzymes]


def load_enzyme_catalog(path: Optional[Path] = None) -> Mapping[str, RestrictionEnzyme]:
    """Built-in catalog, with the entries from `path` (if given) merged over it."""
    if path is None:
        return BUILTIN_ENZYMES
    merged: Dict[str, RestrictionEnzyme] = dict(BUILTIN_ENZYMES)
    extra = load_extra_enzymes(Path(path))
    for enzyme in extra:
        merged[enzyme.name] = enzyme
    log.info("enzyme catalog: %d built-in, %d from %s", len(BUILTIN_ENZYMES), len(extra), path)
    return MappingProxyType(merged)
