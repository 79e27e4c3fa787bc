# File: backend/tests/test_api_tools.py
# Version: v0.1.1
"""
API tests for the sequence tool endpoints (FastAPI TestClient).
"""

import pytest
from fastapi.testclient import TestClient

from backend.app.core.config import settings
from backend.app.main import app

client = TestClient(app)


def test_reverse_complement_and_transcribe():
    r = client.post("/api/v1/sequence/reverse-complement", json={"sequence": "ATGCn"})
    assert r.status_code == 200
    assert r.json() == {"length": 5, "sequence": "nGCAT"}

    r = client.post("/api/v1/sequence/transcribe", json={"sequence": "ATGT"})
    assert r.json()["sequence"] == "AUGU"


def test_translate_modes_and_validation():
    r = client.post(
        "/api/v1/sequence/translate",
        json={"sequence": "ATGAAATAG", "stop_mode": "truncate"},
    )
    assert r.status_code == 200
    assert r.json()["protein"] == "MK"

    r = client.post(
        "/api/v1/sequence/translate",
        json={"sequence": "TGA", "code": "vertebrate_mito"},
    )
    assert r.json()["protein"] == "W"

    assert client.post("/api/v1/sequence/translate", json={"sequence": "ATG", "frame": 4}).status_code == 422
    assert client.post("/api/v1/sequence/translate", json={"sequence": "ATG", "code": "martian"}).status_code == 422
    assert client.post("/api/v1/sequence/translate", json={"sequence": ""}).status_code == 422


def test_six_frame():
    r = client.post("/api/v1/sequence/six-frame", json={"sequence": "ATGAAATAG"})
    assert r.status_code == 200
    frames = r.json()["frames"]
    assert [f["frame"] for f in frames] == [1, 2, 3, -1, -2, -3]
    assert frames[0]["protein"] == "MK*"


def test_orfs_multi_record():
    r = client.post(
        "/api/v1/orfs",
        json={"text": ">s1\nATGAAATAG\n>s2\nCCCC", "min_length": 9},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["total"] == 1
    assert [(rec["name"], rec["total"]) for rec in data["records"]] == [("s1", 1), ("s2", 0)]
    orf = data["records"][0]["orfs"][0]
    assert (orf["frame"], orf["start"], orf["end"], orf["protein"]) == (1, 1, 9, "MK*")


@pytest.mark.parametrize("min_length, status", [(1, 200), (2, 200), (0, 422)])
def test_orfs_accept_any_positive_min_length(min_length, status):
    r = client.post("/api/v1/orfs", json={"text": "ATGTAG", "min_length": min_length})
    assert r.status_code == status
    if status == 200:
        assert r.json()["total"] == 1


def test_restriction_catalog_digest_and_ligation():
    r = client.get("/api/v1/restriction/enzymes")
    assert r.status_code == 200
    names = [e["name"] for e in r.json()]
    assert "EcoRI" in names and "HincII" in names

    r = client.post(
        "/api/v1/restriction/digest",
        json={"sequence": "GGAATTCC", "enzymes": ["EcoRI", "FooI"]},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["unknown_enzymes"] == ["FooI"]
    assert len(data["sites"]) == 1
    assert data["sites"][0]["position"] == 2
    assert data["sites"][0]["overhang"] == "5'"
    assert [f["length"] for f in data["fragments"]] == [6, 2]

    r = client.post(
        "/api/v1/restriction/ligation",
        json={"vector": "GGAATTCC", "vector_enzyme": "EcoRI", "insert": "AAGAATTCAA", "insert_enzyme": "EcoRI"},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["ok"] is True
    assert data["status"] == "compatible_sticky"
    assert data["vector_end"]["seq5"] == "AATT"


def test_digest_requires_enzymes():
    r = client.post("/api/v1/restriction/digest", json={"sequence": "GAATTC", "enzymes": []})
    assert r.status_code == 422


def test_primer_dimers():
    r = client.post("/api/v1/primers/dimers", json={"text": "ATCGCGAT"})
    assert r.status_code == 200
    data = r.json()
    assert data["primers"][0]["name"] == "Primer 1"
    assert data["results"][0]["risk"] == "high"
    assert data["results"][0]["kind"] == "self"
    assert data["high_risk_count"] == 1


def test_index_check():
    r = client.post("/api/v1/indices/check", json={"text": "S1\tAAACCCGG\nS2\tCCGGGTTT"})
    assert r.status_code == 200
    data = r.json()
    assert data["is_valid"] is False
    assert data["issues"][0]["kind"] == "reverse-complement"
    assert data["issues"][0]["rows"] == [1, 2]
    assert data["error_count"] == 1


def test_format_convert():
    r = client.post(
        "/api/v1/formats/convert",
        json={"text": ">a desc\nACGT\n", "output_format": "genbank", "rename_pattern": "seq_{n}"},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["output_count"] == 1
    assert data["records"][0]["id"] == "seq_1"
    assert data["text"].startswith("LOCUS       seq_1")


def test_oversized_input_rejected(monkeypatch):
    monkeypatch.setattr(settings, "MAX_SEQUENCE_LENGTH", 5)
    r = client.post("/api/v1/sequence/reverse-complement", json={"sequence": "ACGTACGT"})
    assert r.status_code == 400


def test_too_many_primers_rejected(monkeypatch):
    monkeypatch.setattr(settings, "MAX_PRIMERS", 1)
    r = client.post("/api/v1/primers/dimers", json={"text": "ACGT\nGGCC"})
    assert r.status_code == 400


def test_too_many_indices_reported(monkeypatch):
    monkeypatch.setattr(settings, "MAX_INDEX_ENTRIES", 1)
    r = client.post("/api/v1/indices/check", json={"text": "S1 AAAA\nS2 CCCC"})
    assert r.status_code == 200
    data = r.json()
    assert data["total_checked"] == 2
    assert [i["kind"] for i in data["issues"]] == ["too-many-entries"]


@pytest.mark.parametrize("path", ["/api/v1/orfs", "/api/v1/primers/dimers", "/api/v1/indices/check"])
def test_blank_text_is_validation_error(path):
    assert client.post(path, json={"text": "   "}).status_code == 422
