from __future__ import annotations


def _submission(**overrides):
    payload = {
        "title": "Code reviewer",
        "category": "Development",
        "description": "Reviews a diff",
        "content": "Review the following diff: {{diff}}",
        "tags": ["code", "review"],
        "author": "jane",
        "licenseType": "Apache-2.0",
    }
    payload.update(overrides)
    return payload


def test_submission_goes_to_pending_queue(client):
    response = client.post("/api/submissions", json=_submission())

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert len(body["id"]) == 12
    assert "pending review" in body["message"]

    pending = client.get("/api/submissions/pending").json()
    assert [p["id"] for p in pending] == [body["id"]]
    assert pending[0]["tags"] == ["code", "review"]
    assert pending[0]["licenseType"] == "Apache-2.0"
    assert pending[0]["status"] == "pending"
    assert client.get("/api/submissions").json() == []


def test_approval_publishes_template_with_downloads(client):
    submission_id = client.post(
        "/api/submissions", json=_submission(id="tpl-1")
    ).json()["id"]
    assert submission_id == "tpl-1"

    approved = client.post("/api/submissions/tpl-1/approve")
    assert approved.json() == {"success": True, "message": "Submission approved"}

    client.post("/api/downloads/tpl-1")
    templates = client.get("/api/submissions").json()

    assert len(templates) == 1
    template = templates[0]
    assert template["id"] == "tpl-1"
    assert template["downloadCount"] == 1
    assert template["isCommunity"] is True
    assert template["isOfficial"] is False
    assert template["lastUpdated"] is not None
    assert client.get("/api/submissions/pending").json() == []


def test_moderation_only_applies_to_pending_submissions(client):
    client.post("/api/submissions", json=_submission(id="tpl-2"))

    assert client.post("/api/submissions/tpl-2/reject").status_code == 200

    for action in ("approve", "reject"):
        response = client.post(f"/api/submissions/tpl-2/{action}")
        assert response.status_code == 404
        assert response.json() == {"error": "Submission not found or already processed"}

    assert client.post("/api/submissions/missing/approve").status_code == 404
    assert client.get("/api/submissions").json() == []


def test_license_defaults_to_mit(client):
    client.post("/api/submissions", json=_submission(licenseType=None, tags=None))

    pending = client.get("/api/submissions/pending").json()[0]
    assert pending["licenseType"] == "MIT"
    assert pending["tags"] == []


def test_missing_fields_are_rejected(client):
    for field in ("title", "category", "description", "content", "author"):
        response = client.post("/api/submissions", json=_submission(**{field: ""}))
        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}

    assert client.get("/api/submissions/pending").json() == []


def test_oversized_content_is_rejected(client):
    response = client.post("/api/submissions", json=_submission(content="x" * 10001))

    assert response.status_code == 400
    assert response.json() == {
        "error": "Content exceeds maximum length (10,000 characters)"
    }


def test_duplicate_id_conflicts(client):
    assert client.post("/api/submissions", json=_submission(id="dup")).status_code == 201

    response = client.post("/api/submissions", json=_submission(id="dup", title="Other"))

    assert response.status_code == 409
    assert "dup" in response.json()["error"]
    assert len(client.get("/api/submissions/pending").json()) == 1
