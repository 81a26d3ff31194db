"""Core activity box pipeline.

This module is integration-agnostic. It only relies on ports for the
activity feed and the gist, enabling other backends without changes here.
"""

from __future__ import annotations

import logging

from core.config import SummaryConfig
from core.models import PublishOutcome, PublishResult
from core.ports import EventSourcePort, SnippetStorePort
from core.summary import build_summary

LOGGER = logging.getLogger(__name__)

# The events API caps a single page at 100 entries.
EVENTS_PER_PAGE = 100


async def fetch_summary(events: EventSourcePort, username: str, summary_config: SummaryConfig) -> str:
    """Fetch the feed and render it. Fetch failures propagate."""

    LOGGER.debug("Getting activity for %s", username)
    feed = await events.list_public_events(username, per_page=EVENTS_PER_PAGE)
    LOGGER.debug("Activity for %s, %s events found.", username, len(feed))
    return build_summary(feed, summary_config)


class ActivityBoxUpdater:
    """Orchestrates fetching, summary building, and the change-gated write."""

    def __init__(
        self,
        username: str,
        events: EventSourcePort,
        gist: SnippetStorePort,
        summary_config: SummaryConfig,
    ) -> None:
        self._username = username
        self._events = events
        self._gist = gist
        self._summary = summary_config

    async def build_content(self) -> str:
        return await fetch_summary(self._events, self._username, self._summary)

    async def publish(self, content: str) -> PublishResult:
        """Write content to the gist only when it differs from what is stored."""

        try:
            LOGGER.debug("Updating Gist")
            current = await self._gist.get()

            # A gist without a file has nothing to compare against, so it is
            # always written, even when the new content is empty.
            if current is None:
                LOGGER.info("Gist has no content yet, writing summary")
                await self._gist.update(content)
                return PublishResult(PublishOutcome.UPDATED, content)

            if current == content:
                return PublishResult(PublishOutcome.UNCHANGED, content)

            await self._gist.update(content)
            return PublishResult(PublishOutcome.UPDATED, content)
        except Exception as exc:
            LOGGER.debug("Error getting or updating the Gist:", exc_info=True)
            return PublishResult(PublishOutcome.FAILED, content, error=exc)

    async def run(self) -> PublishResult:
        content = await self.build_content()
        result = await self.publish(content)
        LOGGER.info("%s", result.message)
        return result
