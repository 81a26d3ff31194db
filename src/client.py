"""HTTP client factory for activitybox.

One AsyncClient is shared by the events and gist adapters for a single run.
Callers own its lifecycle and close it with ``async with`` so the connection
pool does not outlive the run.
"""

from __future__ import annotations

import logging

import httpx

USER_AGENT = "activitybox/0.1"
DEFAULT_TIMEOUT_SECONDS = 10.0


def build_client(api_url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> httpx.AsyncClient:
    """Create an httpx client bound to the GitHub REST API base URL.

    Tokens are attached per request by the adapters because reading activity
    and writing the gist may use different credentials.
    """

    logging.getLogger(__name__).info("Initializing GitHub client for %s", api_url)

    return httpx.AsyncClient(
        base_url=api_url,
        timeout=httpx.Timeout(timeout),
        headers={
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        },
    )
