"""Application entry point for activitybox."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint

import settings
from adapters.gist_store import GistStore
from adapters.github_events import GitHubEventSource
from client import build_client
from core.models import PublishResult
from core.processor import ActivityBoxUpdater, fetch_summary
from settings import RunConfig, build_run_config

NAME = "ACTIVITYBOX"
FONT = "small"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Tokens that end up in request headers; masked unless redact.patterns says otherwise.
DEFAULT_REDACTED_ENV = ("GH_PAT", "GITHUB_TOKEN")


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _TokenRedactingFormatter(logging.Formatter):
    """Mask token values wherever they show up in a formatted record."""

    def __init__(self, tokens: list[str]) -> None:
        super().__init__(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
        # Longest first, so a token containing another is masked whole.
        self._tokens = sorted({token for token in tokens if token}, key=len, reverse=True)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for token in self._tokens:
            message = message.replace(token, "***")
        return message


def _tokens_to_redact(config: dict) -> list[str]:
    redact_cfg = config.get("redact", {})
    if not redact_cfg.get("enabled", True):
        return []
    names = redact_cfg.get("patterns") or DEFAULT_REDACTED_ENV
    return [os.environ[name] for name in names if os.environ.get(name)]


def _file_handler(file_cfg: dict) -> RotatingFileHandler:
    path = file_cfg.get("path", "logs/activitybox.log")
    if not os.path.isabs(path):
        path = os.path.join(settings.PROJECT_ROOT, path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
        backupCount=int(file_cfg.get("backup_count", 5)),
        encoding="utf-8",
    )


def _configure_logging(debug: bool = False) -> None:
    """Set up logging from the config.json logging section.

    --debug forces logging on at DEBUG level, which surfaces the fetch and
    gist progress messages of the core pipeline.
    """

    config = settings.LOGGING or {}
    if not debug and not config.get("enabled", False):
        return

    level = logging.DEBUG if debug else getattr(logging, str(config.get("level", "INFO")).upper(), logging.INFO)
    formatter = _TokenRedactingFormatter(_tokens_to_redact(config))

    handlers: list[logging.Handler] = []
    if config.get("console", True) or debug:
        handlers.append(logging.StreamHandler())
    if config.get("file", {}).get("enabled", False):
        handlers.append(_file_handler(config["file"]))
    if not handlers:
        return

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers)

    # httpx logs every request URL at INFO; keep it out of normal runs.
    if not debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)


async def _update_gist(config: RunConfig) -> PublishResult:
    async with build_client(config.api_url) as client:
        updater = ActivityBoxUpdater(
            username=config.username,
            events=GitHubEventSource(client, token=config.events_token),
            gist=GistStore(
                client,
                gist_id=config.gist_id,
                token=config.gist_token,
                filename=config.gist_filename,
            ),
            summary_config=config.summary,
        )
        return await updater.run()


async def _render_preview(config: RunConfig) -> str:
    async with build_client(config.api_url) as client:
        events = GitHubEventSource(client, token=config.events_token)
        return await fetch_summary(events, config.username, config.summary)


def _run(debug: bool) -> None:
    _print_banner()
    _configure_logging(debug)
    logger = logging.getLogger(__name__)

    config = build_run_config()
    logger.info(
        "Starting activitybox for %s (max %s lines, %s chars each)",
        config.username,
        config.summary.max_lines,
        config.summary.max_length,
    )

    # Fetch errors are not caught here: they end the run with a traceback.
    result = asyncio.run(_update_gist(config))
    if not result.ok:
        logger.error("%s", result.message)
        sys.exit(1)
    print(result.message)


def _preview(debug: bool) -> None:
    _configure_logging(debug)
    config = build_run_config(require_gist=False)
    print(asyncio.run(_render_preview(config)))


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="activitybox")
    parser.add_argument("--debug", action="store_true", help="Log pipeline progress at DEBUG level")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Update the gist with recent activity")
    subparsers.add_parser(
        "preview",
        help="Print the summary that would be written, without touching the gist.",
    )

    args = parser.parse_args(argv)
    if args.command == "preview":
        _preview(args.debug)
        return
    _run(args.debug)


if __name__ == "__main__":
    main()
