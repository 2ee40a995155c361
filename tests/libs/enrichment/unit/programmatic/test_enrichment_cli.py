import io
import json
from unittest.mock import MagicMock, patch

import pytest

from enrichment.programmatic import cli
from enrichment.programmatic.events import DoneEvent, ProgressEvent
from provider_payloads import make_cm


def _session_cm():
    return make_cm(MagicMock())


@pytest.mark.asyncio
async def test_run_writes_one_json_line_per_event(settings):
    async def fake_stream(ids, *, with_stats):
        assert ids == [620, 730]
        assert with_stats is True
        yield ProgressEvent(completed=1, total=2, failed=0)
        yield ProgressEvent(completed=2, total=2, failed=0)
        yield DoneEvent(completed=2, failed=0)

    orchestrator = MagicMock()
    orchestrator.stream = MagicMock(side_effect=fake_stream)
    out = io.StringIO()

    with (
        patch.object(cli, "get_settings", return_value=settings),
        patch.object(cli, "create_http_session", return_value=_session_cm()),
        patch.object(cli, "build_orchestrator", return_value=orchestrator),
    ):
        code = await cli.run(["620", "730"], with_stats=True, out=out)

    lines = [json.loads(line) for line in out.getvalue().splitlines()]
    assert code == 0
    assert [line["type"] for line in lines] == ["progress", "progress", "done"]


@pytest.mark.asyncio
async def test_run_rejects_invalid_ids_without_network(settings):
    with (
        patch.object(cli, "get_settings", return_value=settings),
        patch.object(cli, "create_http_session") as session_factory,
    ):
        code = await cli.run(["abc"], with_stats=False, out=io.StringIO())

    assert code == 1
    session_factory.assert_not_called()


@pytest.mark.asyncio
async def test_run_fails_when_every_app_fails(settings):
    async def fake_stream(ids, *, with_stats):
        yield ProgressEvent(completed=1, total=1, failed=1)
        yield DoneEvent(completed=1, failed=1)

    orchestrator = MagicMock()
    orchestrator.stream = MagicMock(side_effect=fake_stream)

    with (
        patch.object(cli, "get_settings", return_value=settings),
        patch.object(cli, "create_http_session", return_value=_session_cm()),
        patch.object(cli, "build_orchestrator", return_value=orchestrator),
    ):
        code = await cli.run(["1"], with_stats=False, out=io.StringIO())

    assert code == 1
