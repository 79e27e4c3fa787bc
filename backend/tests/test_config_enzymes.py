# File: backend/tests/test_config_enzymes.py
# Version: v0.1.1

"""
Enzyme catalog loader: extra enzymes from JSON are validated and merged
over the built-in catalog.
"""

import json

import pytest
from pydantic import ValidationError

from backend.app.config.config_enzymes import load_enzyme_catalog, load_extra_enzymes
from backend.app.core.config import Settings
from backend.app.core.sequence.restriction import BUILTIN_ENZYMES, Overhang
from backend.app.schemas.restriction import EnzymeDefinition


def test_no_path_gives_builtins():
    assert load_enzyme_catalog(None) is BUILTIN_ENZYMES


def test_extra_enzymes_are_merged(tmp_path):
    p = tmp_path / "enzymes.json"
    p.write_text(
        json.dumps({
            "enzymes": [
                {"name": "Sau3AI", "site": "gatc", "top_cut": 0, "bottom_cut": 4},
                {"name": "EcoRI", "site": "GAATTC", "top_cut": 3, "bottom_cut": 3},
            ]
        }),
        encoding="utf-8",
    )
    catalog = load_enzyme_catalog(p)
    assert catalog["Sau3AI"].site == "GATC"
    assert catalog["Sau3AI"].overhang is Overhang.FIVE_PRIME
    assert catalog["EcoRI"].overhang is Overhang.BLUNT  # file entry replaces the built-in
    assert "BamHI" in catalog
    assert BUILTIN_ENZYMES["EcoRI"].overhang is Overhang.FIVE_PRIME


def test_bare_list_and_missing_file(tmp_path):
    p = tmp_path / "list.json"
    p.write_text('[{"name": "HaeIII", "site": "GGCC", "top_cut": 2, "bottom_cut": 2}]', encoding="utf-8")
    assert [e.name for e in load_extra_enzymes(p)] == ["HaeIII"]
    assert load_extra_enzymes(tmp_path / "nope.json") == []


@pytest.mark.parametrize(
    "entry",
    [
        {"name": "BadI", "site": "GATC", "top_cut": 9, "bottom_cut": 1},
        {"name": "BadI", "site": "GAXC", "top_cut": 1, "bottom_cut": 3},
        {"name": "", "site": "GATC", "top_cut": 1, "bottom_cut": 3},
    ],
)
def test_invalid_entries_rejected(tmp_path, entry):
    p = tmp_path / "bad.json"
    p.write_text(json.dumps({"enzymes": [entry]}), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_extra_enzymes(p)


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("MAX_INDEX_ENTRIES", "12")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    s = Settings()
    assert s.MAX_INDEX_ENTRIES == 12
    assert s.cors_origins_list == ["http://a.test", "http://b.test"]
    assert s.ORF_MIN_LENGTH_DEFAULT == 30


def test_lowercase_site_is_uppercased():
    entry = EnzymeDefinition.model_validate({"name": "DpnII", "site": " gatc ", "top_cut": 0, "bottom_cut": 4})
    assert entry.site == "GATC"
