"""HTTP client for the reading-session backend."""

import logging
from typing import Optional

import httpx

from ..domain.entities.session_history import PageableResponse
from ..domain.entities.session_summary import SessionSummary

logger = logging.getLogger(__name__)

DEFAULT_SESSIONS_PATH = "/api/v1/reading-sessions"


class ReadingSessionApiClient:
    """Async client for creating and listing reading sessions."""

    def __init__(
        self,
        base_url: str,
        sessions_path: str = DEFAULT_SESSIONS_PATH,
        auth_token: Optional[str] = None,
        timeout_seconds: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the API client.

        Args:
            base_url: Backend origin, e.g. ``http://localhost:6060``.
            sessions_path: Path of the sessions collection.
            auth_token: Optional bearer token for authenticated calls.
            timeout_seconds: Request timeout when no client is supplied.
            client: Preconfigured httpx client (tests inject a mock transport).
        """
        self.base_url = base_url.rstrip("/")
        self.sessions_path = "/" + sessions_path.strip("/")
        headers = {"Authorization": f"Bearer {auth_token}"} if auth_token else {}
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds, headers=headers)

    @property
    def sessions_url(self) -> str:
        return f"{self.base_url}{self.sessions_path}"

    async def create_session(self, summary: SessionSummary) -> None:
        """Store a session summary.

        Raises:
            httpx.HTTPError: If the request fails or the backend rejects it.
        """
        response = await self._client.post(self.sessions_url, json=summary.to_payload())
        response.raise_for_status()

    async def get_sessions_by_book_id(self, book_id: int, page: int = 0, size: int = 5) -> PageableResponse:
        """List stored sessions of a book, newest first as ordered by the backend.

        Raises:
            httpx.HTTPError: If the request fails or the backend rejects it.
        """
        response = await self._client.get(
            f"{self.sessions_url}/book/{book_id}",
            params={"page": page, "size": size},
        )
        response.raise_for_status()
        return PageableResponse.model_validate(response.json())

    async def aclose(self) -> None:
        await self._client.aclose()
