"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to the GitHub API response types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class ActivityEvent:
    """One entry of a user's public activity feed."""

    type: str
    created_at: str
    repo_name: str
    payload: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_api(cls, raw: Mapping[str, Any]) -> "ActivityEvent":
        """Build an event from the GitHub events API JSON.

        Only the envelope fields are required here; payload fields are
        checked by the serializer for the event's type.
        """

        return cls(
            type=raw["type"],
            created_at=raw["created_at"],
            repo_name=raw["repo"]["name"],
            payload=MappingProxyType(dict(raw.get("payload") or {})),
        )


class PublishOutcome(str, Enum):
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass(frozen=True)
class PublishResult:
    """Result of one change-gated publish attempt."""

    outcome: PublishOutcome
    content: str
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.outcome is not PublishOutcome.FAILED

    @property
    def message(self) -> str:
        if self.outcome is PublishOutcome.UPDATED:
            return "Gist updated!"
        if self.outcome is PublishOutcome.UNCHANGED:
            return "No need for updated Gist!"
        return f"Error getting or updating the Gist: {self.error}"
