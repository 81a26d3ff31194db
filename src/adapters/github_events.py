"""GitHub events API adapter.

Implements the core EventSourcePort on top of a shared httpx client.
"""

from __future__ import annotations

from typing import List, Optional

import httpx

from core.models import ActivityEvent


def auth_headers(token: Optional[str]) -> dict[str, str]:
    """Return the Authorization header for a token, or nothing for anonymous calls."""

    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}


class GitHubEventSource:
    """Reads a user's public events from the GitHub REST API."""

    def __init__(self, client: httpx.AsyncClient, token: Optional[str] = None) -> None:
        self._client = client
        self._token = token

    async def list_public_events(self, username: str, per_page: int) -> List[ActivityEvent]:
        """Return the newest public events for username, newest first."""

        response = await self._client.get(
            f"/users/{username}/events/public",
            params={"per_page": per_page},
            headers=auth_headers(self._token),
        )
        response.raise_for_status()
        return [ActivityEvent.from_api(item) for item in response.json()]
