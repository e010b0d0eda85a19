import json
from unittest.mock import AsyncMock

import pytest

import cli
from pagedeck.core.errors import PipelineStepFailedError
from pagedeck.core.models import DraftOutcome, PipelineReport


def _report() -> PipelineReport:
    return PipelineReport(
        presentation_id="pres-1",
        share_url="https://app.getalai.com/view/abc",
        outcomes=[
            DraftOutcome(index=1, slide_id="s1", title="Intro", variant_id="v1"),
            DraftOutcome(
                index=2,
                slide_id="s2",
                title="Body",
                status="failed",
                failed_step="create_variant",
                error="No variants created for slide s2",
            ),
        ],
    )


@pytest.fixture
def credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli.config, "access_token", "token-1")
    monkeypatch.setattr(cli.config, "firecrawl_api_key", "fc-key")
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)


@pytest.mark.asyncio
async def test_missing_credentials_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli.config, "access_token", "")
    monkeypatch.setattr(cli.config, "firecrawl_api_key", "")
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)
    pipeline = AsyncMock()
    monkeypatch.setattr(cli, "create_presentation_from_website", pipeline)

    assert await cli.main(["example.com"]) == cli.EXIT_CONFIG
    pipeline.assert_not_awaited()


@pytest.mark.asyncio
async def test_success_prints_share_url(
    monkeypatch: pytest.MonkeyPatch, credentials, capsys: pytest.CaptureFixture[str]
) -> None:
    pipeline = AsyncMock(return_value=_report())
    monkeypatch.setattr(cli, "create_presentation_from_website", pipeline)

    assert await cli.main(["example.com", "--slide-range", "3-6"]) == cli.EXIT_OK

    pipeline.assert_awaited_once_with("example.com", title=None, slide_range="3-6")
    out = capsys.readouterr().out
    assert "1/2 slides rendered" in out
    assert "https://app.getalai.com/view/abc" in out


@pytest.mark.asyncio
async def test_json_report(
    monkeypatch: pytest.MonkeyPatch, credentials, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(
        cli, "create_presentation_from_website", AsyncMock(return_value=_report())
    )

    assert await cli.main(["example.com", "--json"]) == cli.EXIT_OK

    data = json.loads(capsys.readouterr().out)
    assert data["share_url"] == "https://app.getalai.com/view/abc"
    assert [s["status"] for s in data["slides"]] == ["completed", "failed"]


@pytest.mark.asyncio
async def test_pipeline_failure_exit_code(
    monkeypatch: pytest.MonkeyPatch, credentials
) -> None:
    monkeypatch.setattr(
        cli,
        "create_presentation_from_website",
        AsyncMock(side_effect=PipelineStepFailedError("create_slides", "boom")),
    )

    assert await cli.main(["example.com"]) == cli.EXIT_FAILED
