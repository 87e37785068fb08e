from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from community_store import CommunityStore  # noqa: E402
from main import create_app  # noqa: E402


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "community.db")


@pytest.fixture
def store(db_path) -> CommunityStore:
    return CommunityStore(db_path)


@pytest.fixture
def client(db_path):
    app = create_app(db_path)
    # Entering the context runs the lifespan, which opens the store
    with TestClient(app) as test_client:
        yield test_client


def rate(client, template_id, user_hash, rating, comment=None):
    payload = {"templateId": template_id, "userHash": user_hash, "rating": rating}
    if comment is not None:
        payload["comment"] = comment
    return client.post("/api/ratings", json=payload)
