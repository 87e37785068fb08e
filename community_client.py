"""
Async client for the PromptBox Community API
Wraps every endpoint in a coroutine and turns error bodies into exceptions.
"""

import hashlib
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8787"
HTTP_TIMEOUT = 30.0


class CommunityAPIError(Exception):
    """Raised when the API answers with a non-2xx status"""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def make_user_hash(identifier: str) -> str:
    """Anonymous, stable userHash derived from an installation identifier"""
    return hashlib.sha256(identifier.encode("utf-8")).hexdigest()


def _path_segment(value: str) -> str:
    """Quote an id for use as one URL path segment"""
    # The server decodes %2F before routing, so a slash can never match a route
    if not value or "/" in value:
        raise ValueError(f"Invalid id for a URL path segment: {value!r}")
    return quote(value, safe="")


class CommunityClient:
    """
    Client for ratings, downloads and submissions

    Usage:
        async with CommunityClient("https://ratings.example.com") as client:
            await client.submit_rating("t1", user_hash, 5)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = HTTP_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, transport=transport
        )

    async def __aenter__(self) -> "CommunityClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        """Send a request and return the decoded JSON body"""
        response = await self._client.request(method, endpoint, **kwargs)

        if response.is_success:
            return response.json()

        try:
            message = response.json().get("error", f"HTTP {response.status_code}")
        except ValueError:
            # Non-JSON error body, e.g. from a proxy in front of the API
            message = response.text[:200]

        logger.warning(f"{method} {endpoint} failed: {response.status_code} {message}")
        raise CommunityAPIError(response.status_code, message)

    # Ratings

    async def get_all_ratings(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/api/ratings")

    async def get_template_ratings(
        self, template_id: str, user_hash: Optional[str] = None
    ) -> Dict[str, Any]:
        params = {"userHash": user_hash} if user_hash else None
        return await self._request(
            "GET", f"/api/ratings/{_path_segment(template_id)}", params=params
        )

    async def submit_rating(
        self,
        template_id: str,
        user_hash: str,
        rating: int,
        comment: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = {"templateId": template_id, "userHash": user_hash, "rating": rating}
        if comment:
            payload["comment"] = comment
        return await self._request("POST", "/api/ratings", json=payload)

    # Downloads

    async def get_all_downloads(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/api/downloads")

    async def record_download(self, template_id: str) -> int:
        """Record one download and return the new count"""
        result = await self._request(
            "POST", f"/api/downloads/{_path_segment(template_id)}"
        )
        return result["downloadCount"]

    # Submissions

    async def submit_template(
        self,
        title: str,
        category: str,
        description: str,
        content: str,
        author: str,
        tags: Optional[List[str]] = None,
        license_type: str = "MIT",
    ) -> str:
        """Submit a template for moderation and return its id"""
        payload = {
            "title": title.strip(),
            "category": category.strip(),
            "description": description.strip(),
            "content": content.strip(),
            "tags": tags or [],
            "author": author.strip(),
            "licenseType": license_type,
        }
        result = await self._request("POST", "/api/submissions", json=payload)
        return result["id"]

    async def get_community_templates(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/api/submissions")

    async def get_pending_submissions(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/api/submissions/pending")

    async def approve_submission(self, submission_id: str) -> bool:
        """Approve a pending submission; False if it was not pending"""
        return await self._moderate(submission_id, "approve")

    async def reject_submission(self, submission_id: str) -> bool:
        """Reject a pending submission; False if it was not pending"""
        return await self._moderate(submission_id, "reject")

    async def _moderate(self, submission_id: str, action: str) -> bool:
        try:
            await self._request(
                "POST", f"/api/submissions/{_path_segment(submission_id)}/{action}"
            )
        except CommunityAPIError as e:
            if e.status_code == 404:
                return False
            raise
        return True

    async def health(self) -> Dict[str, Any]:
        return await self._request("GET", "/api/health")
