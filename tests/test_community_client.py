from __future__ import annotations

import asyncio

import httpx
import pytest

from community_client import CommunityAPIError, CommunityClient, make_user_hash
from community_store import CommunityStore
from core import dependencies
from main import create_app


@pytest.fixture
def app(db_path, monkeypatch):
    # ASGITransport does not run the lifespan, so install the store directly
    monkeypatch.setattr(dependencies, "_community_store", CommunityStore(db_path))
    return create_app()


def _client(app) -> CommunityClient:
    return CommunityClient("http://testserver", transport=httpx.ASGITransport(app=app))


def test_user_hash_is_stable_and_anonymous():
    first = make_user_hash("install-42")

    assert first == make_user_hash("install-42")
    assert first != make_user_hash("install-43")
    assert len(first) == 64
    assert "install" not in first


def test_rating_and_download_round_trip(app):
    user = make_user_hash("install-1")

    async def scenario():
        async with _client(app) as client:
            submitted = await client.submit_rating("prompt 1", user, 4, "handy")
            detail = await client.get_template_ratings("prompt 1", user)
            count = await client.record_download("prompt 1")
            return submitted, detail, count, await client.get_all_ratings()

    submitted, detail, count, listing = asyncio.run(scenario())

    assert submitted["averageRating"] == 4
    assert detail["templateId"] == "prompt 1"
    assert detail["userRating"] == 4
    assert detail["userComment"] == "handy"
    assert count == 1
    assert listing == [
        {
            "templateId": "prompt 1",
            "averageRating": 4.0,
            "ratingCount": 1,
            "downloadCount": 1,
        }
    ]


def test_error_bodies_become_exceptions(app):
    async def scenario():
        async with _client(app) as client:
            await client.submit_rating("t1", "u1", 7)

    with pytest.raises(CommunityAPIError) as excinfo:
        asyncio.run(scenario())

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Rating must be between 1 and 5"


def test_submission_moderation(app):
    async def scenario():
        async with _client(app) as client:
            submission_id = await client.submit_template(
                title="  Summarizer ",
                category="Writing",
                description="Summarizes text",
                content="Summarize: {{text}}",
                author="sam",
                tags=["summary"],
            )
            pending = await client.get_pending_submissions()
            first = await client.approve_submission(submission_id)
            second = await client.approve_submission(submission_id)
            templates = await client.get_community_templates()
            health = await client.health()
            return pending, first, second, templates, health

    pending, first, second, templates, health = asyncio.run(scenario())

    assert pending[0]["title"] == "Summarizer"
    assert first is True
    assert second is False
    assert templates[0]["tags"] == ["summary"]
    assert health["status"] == "ok"


@pytest.mark.parametrize("bad_id", ["a/b", ""])
def test_unroutable_ids_are_rejected_before_sending(app, bad_id):
    async def scenario():
        async with _client(app) as client:
            await client.record_download(bad_id)

    with pytest.raises(ValueError):
        asyncio.run(scenario())

    async def listing():
        async with _client(app) as client:
            return await client.get_all_downloads()

    assert asyncio.run(listing()) == []
