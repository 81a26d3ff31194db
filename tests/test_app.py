from __future__ import annotations

import asyncio
import logging

import httpx
import pytest

import app
from core.config import SummaryConfig
from core.models import PublishOutcome, PublishResult
from settings import RunConfig


def _config() -> RunConfig:
    return RunConfig(
        gist_id="abc",
        username="octocat",
        gist_token="pat",
        events_token=None,
        gist_filename=None,
        api_url="https://api.github.test",
        summary=SummaryConfig(),
    )


def test_formatter_masks_tokens() -> None:
    formatter = app._TokenRedactingFormatter(["s3cret", "s3cret-longer", ""])
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "token=%s other=%s", ("s3cret-longer", "s3cret"), None)

    formatted = formatter.format(record)

    assert formatted.endswith("token=*** other=***")
    assert "s3cret" not in formatted


def test_tokens_to_redact(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GH_PAT", "pat-value")
    monkeypatch.setenv("GITHUB_TOKEN", "read-value")
    monkeypatch.setenv("OTHER_SECRET", "other-value")

    assert sorted(app._tokens_to_redact({})) == ["pat-value", "read-value"]
    assert app._tokens_to_redact({"redact": {"patterns": ["OTHER_SECRET", "UNSET_VAR"]}}) == ["other-value"]
    assert app._tokens_to_redact({"redact": {"enabled": False}}) == []


def test_preview_reads_events_only(monkeypatch: pytest.MonkeyPatch) -> None:
    paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(
            200,
            json=[{"type": "ForkEvent", "created_at": "2024-01-01T00:00:00Z", "repo": {"name": "o/r"}}],
        )

    monkeypatch.setattr(
        app,
        "build_client",
        lambda api_url: httpx.AsyncClient(base_url=api_url, transport=httpx.MockTransport(handler)),
    )

    content = asyncio.run(app._render_preview(_config()))

    assert content == "🍴 (2024-01-01T00:00:00Z) Forked o/r"
    assert paths == ["/users/octocat/events/public"]



def _stub_run(monkeypatch: pytest.MonkeyPatch, result: PublishResult) -> None:
    async def fake_update(config: RunConfig) -> PublishResult:
        return result

    monkeypatch.setattr(app, "_print_banner", lambda: None)
    monkeypatch.setattr(app, "_configure_logging", lambda debug=False: None)
    monkeypatch.setattr(app, "build_run_config", lambda: _config())
    monkeypatch.setattr(app, "_update_gist", fake_update)


def test_run_reports_update(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    _stub_run(monkeypatch, PublishResult(PublishOutcome.UPDATED, "x"))

    app.main(["run"])

    assert "Gist updated!" in capsys.readouterr().out


def test_run_reports_no_change(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    _stub_run(monkeypatch, PublishResult(PublishOutcome.UNCHANGED, "x"))

    app.main([])

    assert "No need for updated Gist!" in capsys.readouterr().out


def test_run_exits_non_zero_on_publish_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    _stub_run(monkeypatch, PublishResult(PublishOutcome.FAILED, "x", error=RuntimeError("boom")))

    with pytest.raises(SystemExit) as excinfo:
        app.main(["run"])

    assert excinfo.value.code == 1


def test_preview_prints_summary(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    async def fake_render(config: RunConfig) -> str:
        return "🍴 (2024-01-01T00:00:00Z) Forked o/r"

    monkeypatch.setattr(app, "_configure_logging", lambda debug=False: None)
    monkeypatch.setattr(app, "build_run_config", lambda require_gist=True: _config())
    monkeypatch.setattr(app, "_render_preview", fake_render)

    app.main(["preview"])

    assert "Forked o/r" in capsys.readouterr().out


def test_debug_flag_reaches_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[bool] = []
    _stub_run(monkeypatch, PublishResult(PublishOutcome.UNCHANGED, "x"))
    monkeypatch.setattr(app, "_configure_logging", lambda debug=False: calls.append(debug))

    app.main(["--debug", "run"])

    assert calls == [True]
