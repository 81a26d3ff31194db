"""Ports (interfaces) used by the core pipeline.

Ports define the minimal contracts for the activity feed and the gist so
that the core can be reused with different backends.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from core.models import ActivityEvent


class EventSourcePort(Protocol):
    """Activity feed operations required by the core pipeline."""

    async def list_public_events(self, username: str, per_page: int) -> List[ActivityEvent]:
        ...


class SnippetStorePort(Protocol):
    """Gist operations required by the core pipeline."""

    async def get(self) -> Optional[str]:
        ...

    async def update(self, content: str) -> None:
        ...
