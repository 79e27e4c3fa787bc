# File: backend/tests/conftest.py
# Version: v0.2.0
"""
Test bootstrap: ensure project root is on sys.path so 'backend.*' imports work,
and provide a shared in-process API client.
"""
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]  # repo root (../.. from this file)
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture()
def client():
    from fastapi.testclient import TestClient
    from backend.app.main import app

    with TestClient(app) as c:
        yield c
