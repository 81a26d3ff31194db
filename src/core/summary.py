"""Summary building helpers (core domain).

The summary is built in a fixed order: filter, limit, serialize, truncate,
join. Every step preserves the feed order (newest first).
"""

from __future__ import annotations

from typing import Iterable, List

from core.config import ELLIPSIS, SummaryConfig
from core.models import ActivityEvent
from core.serializers import is_supported, serialize_event


def filter_events(events: Iterable[ActivityEvent]) -> List[ActivityEvent]:
    """Keep only events with a registered serializer."""

    return [event for event in events if is_supported(event)]


def limit_events(events: List[ActivityEvent], max_lines: int) -> List[ActivityEvent]:
    return events[:max_lines]


def truncate_line(line: str, max_length: int) -> str:
    """Clip a formatted line to max_length characters, marking the cut."""

    if len(line) <= max_length:
        return line
    return line[: max_length - len(ELLIPSIS)] + ELLIPSIS


def join_lines(lines: Iterable[str]) -> str:
    return "\n".join(lines)


def build_summary(events: Iterable[ActivityEvent], config: SummaryConfig) -> str:
    """Return the gist content for the given feed.

    The result has at most ``config.max_lines`` lines, each at most
    ``config.max_length`` characters long.
    """

    selected = limit_events(filter_events(events), config.max_lines)
    lines = [truncate_line(serialize_event(event), config.max_length) for event in selected]
    return join_lines(lines)
