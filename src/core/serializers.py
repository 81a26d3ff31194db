"""Event serializers (core domain).

Each serializer turns one recognized event into a single summary line. The
registry is closed: events whose type is not a key here never reach a
serializer.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping

from core.models import ActivityEvent

Serializer = Callable[[ActivityEvent], str]


def capitalize(value: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""

    return value[:1].upper() + value[1:]


def _wrap_timestamp(timestamp: str) -> str:
    if not timestamp.startswith("("):
        timestamp = "(" + timestamp
    if not timestamp.endswith(")"):
        timestamp += ")"
    return timestamp


def serialize_issue_comment(event: ActivityEvent) -> str:
    number = event.payload["issue"]["number"]
    return f"🗣 ({event.created_at}) Commented on #{number} in {event.repo_name}"


def serialize_issue(event: ActivityEvent) -> str:
    action = capitalize(event.payload["action"])
    number = event.payload["issue"]["number"]
    return f"❗️ ({event.created_at}) {action} issue #{number} in {event.repo_name}"


def serialize_fork(event: ActivityEvent) -> str:
    return f"🍴 ({event.created_at}) Forked {event.repo_name}"


def serialize_wiki(event: ActivityEvent) -> str:
    return f"📜 ({event.created_at}) Updated {event.repo_name}'s Wiki"


def serialize_release(event: ActivityEvent) -> str:
    release = event.payload["release"]
    # Older payloads carried the flag next to the release instead of inside it.
    prerelease = release.get("prerelease", event.payload.get("prerelease", False))
    label = "Pre-Released" if prerelease is True else "Released"
    return f"📣 ({event.created_at}) {label} {event.repo_name} {release['tag_name']}"


def serialize_pull_request(event: ActivityEvent) -> str:
    """Classify the pull request as merged, opened, or otherwise closed.

    A merged flag wins over the action, so a merge reported with
    ``action="closed"`` still reads as ``Merged``.
    """

    pull_request = event.payload["pull_request"]
    if pull_request.get("merged"):
        emote = "🎉"
        action = "Merged"
    else:
        raw_action = event.payload["action"]
        emote = "💪" if raw_action == "opened" else "❌"
        action = capitalize(raw_action)

    return " ".join(
        [
            emote,
            _wrap_timestamp(event.created_at),
            action,
            f"PR #{pull_request['number']} in {event.repo_name}",
        ]
    )


SERIALIZERS: Mapping[str, Serializer] = MappingProxyType(
    {
        "IssueCommentEvent": serialize_issue_comment,
        "IssuesEvent": serialize_issue,
        "ForkEvent": serialize_fork,
        "GollumEvent": serialize_wiki,
        "ReleaseEvent": serialize_release,
        "PullRequestEvent": serialize_pull_request,
    }
)


def is_supported(event: ActivityEvent) -> bool:
    return event.type in SERIALIZERS


def serialize_event(event: ActivityEvent) -> str:
    """Return the summary line for a recognized event.

    Raises KeyError for an unregistered type or a missing payload field.
    """

    return SERIALIZERS[event.type](event)
