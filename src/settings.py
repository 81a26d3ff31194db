"""Static configuration for activitybox.

Secrets and identifiers (gist id, username, tokens) come from the environment
via python-dotenv. Everything else (summary bounds, gist filename, logging)
lives in an optional config.json so it can be tweaked without touching Python.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from core.config import SummaryConfig

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# Loaded before anything reads the environment, so .env can also set
# ACTIVITYBOX_CONFIG. Variables already set in the environment win.
load_dotenv()

# ACTIVITYBOX_CONFIG points at an alternate file, e.g. in a scheduled job.
CONFIG_PATH = os.getenv("ACTIVITYBOX_CONFIG", os.path.join(PROJECT_ROOT, "config.json"))


def _load_json_config(path: str = CONFIG_PATH) -> dict:
    """Load config.json; a missing file means all defaults."""

    if not os.path.exists(path):
        return {}

    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Output bounds for the gist: how many lines, and how wide each line may be.
_summary = _CONFIG.get("summary", {})
MAX_LINES = int(_summary.get("max_lines", 5))
MAX_LENGTH = int(_summary.get("max_length", 95))

# Gist file to write. When unset the gist's first file is used.
_gist = _CONFIG.get("gist", {})
GIST_FILENAME = _gist.get("filename")

_github = _CONFIG.get("github", {})
API_URL = _github.get("api_url", "https://api.github.com")

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})


@dataclass(frozen=True)
class RunConfig:
    """Everything one run needs, built once at startup."""

    gist_id: str
    username: str
    gist_token: str
    events_token: Optional[str]
    gist_filename: Optional[str]
    api_url: str
    summary: SummaryConfig


def build_run_config(require_gist: bool = True) -> RunConfig:
    """Assemble the run configuration from the environment and config.json.

    GITHUB_TOKEN is optional: public events can be read anonymously, only
    with a lower rate limit. A preview run does not touch the gist, so it can
    skip the gist credentials with require_gist=False.
    """

    load_dotenv()

    gist_id = os.getenv("GIST_ID", "")
    username = os.getenv("GH_USERNAME", "")
    gist_token = os.getenv("GH_PAT", "")

    # Fail fast on missing settings rather than failing halfway through a run.
    if not username:
        raise RuntimeError("Missing GH_USERNAME in environment")
    if require_gist and (not gist_id or not gist_token):
        raise RuntimeError("Missing GIST_ID or GH_PAT in environment")

    return RunConfig(
        gist_id=gist_id,
        username=username,
        gist_token=gist_token,
        events_token=os.getenv("GITHUB_TOKEN") or None,
        gist_filename=GIST_FILENAME,
        api_url=API_URL,
        summary=SummaryConfig(max_lines=MAX_LINES, max_length=MAX_LENGTH),
    )
