import os
import tempfile
from pathlib import Path

# Point the app at a throwaway SQLite file before any casebook module builds its engines.
_DB_PATH = Path(tempfile.mkdtemp(prefix="casebook-tests-")) / "casebook_test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["OPENAI_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient

from casebook.main import app
from casebook.models.base import Base, SyncSessionLocal, sync_engine
from casebook.services.ai_client import AIClient, get_ai_client


@pytest.fixture
def client():
    app.dependency_overrides[get_ai_client] = lambda: AIClient(api_key="")
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    Base.metadata.drop_all(sync_engine)


@pytest.fixture
def sync_db():
    Base.metadata.create_all(sync_engine)
    db = SyncSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(sync_engine)


@pytest.fixture
def youth(client):
    response = client.post(
        "/api/v1/youths",
        json={
            "first_name": "Marcus",
            "last_name": "Reed",
            "dob": "2009-04-12",
            "admission_date": "2025-09-01",
            "legal_status": "Probation",
        },
    )
    assert response.status_code == 201
    return response.json()
