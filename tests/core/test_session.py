"""
Tests for the streaming session executor.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any

import pytest

from pagedeck.core.errors import EmptySessionError, TransportError
from pagedeck.core.session import SessionSpec, StreamingSession, run_session


def _append(acc: list[Any], frame: Any) -> bool:
    acc.append(frame)
    return False


def _list_spec(deadline: float = 0.5, done_after: int | None = None) -> SessionSpec:
    def is_done(acc: list[Any]) -> bool:
        return done_after is not None and len(acc) >= done_after

    return SessionSpec(
        name="test",
        endpoint="wss://example.test/ws/stream",
        build_frame=lambda: {"hello": "world"},
        new_accumulator=list,
        fold=_append,
        is_done=is_done,
        is_empty=lambda acc: not acc,
        deadline=deadline,
        empty_message="nothing here",
    )


@pytest.mark.asyncio
async def test_sends_exactly_one_initiating_frame(fake_channel, fake_connector):
    channel = fake_channel([{"n": 1}], hang=False)
    connector = fake_connector(channel)

    await run_session(_list_spec(), connector)

    assert channel.sent == [{"hello": "world"}]
    assert connector.endpoints == ["wss://example.test/ws/stream"]


@pytest.mark.asyncio
async def test_completion_closes_proactively_before_deadline(
    fake_channel, fake_connector
):
    channel = fake_channel([{"n": 1}, {"n": 2}, {"n": 3}], hang=True)

    spec = _list_spec(deadline=5, done_after=2)
    outcome = await run_session(spec, fake_connector(channel))

    assert outcome.timed_out is False
    assert outcome.accumulator == [{"n": 1}, {"n": 2}]
    assert channel.delivered == 2
    assert channel.close_calls == 1


@pytest.mark.asyncio
async def test_fold_signal_alone_completes_session(fake_channel, fake_connector):
    channel = fake_channel([{"stop": False}, {"stop": True}, {"stop": False}])
    spec = _list_spec(deadline=5)
    spec.fold = lambda acc, frame: acc.append(frame) or frame["stop"]

    outcome = await run_session(spec, fake_connector(channel))

    assert outcome.accumulator == [{"stop": False}, {"stop": True}]
    assert outcome.timed_out is False


@pytest.mark.asyncio
async def test_remote_close_resolves_with_accumulator(fake_channel, fake_connector):
    channel = fake_channel([{"n": 1}], hang=False)

    outcome = await run_session(_list_spec(), fake_connector(channel))

    assert outcome.timed_out is False
    assert outcome.accumulator == [{"n": 1}]


@pytest.mark.asyncio
async def test_deadline_with_partial_results_is_degraded_success(
    fake_channel, fake_connector
):
    channel = fake_channel([{"n": 1}, {"n": 2}], hang=True)

    outcome = await run_session(_list_spec(deadline=0.05), fake_connector(channel))

    assert outcome.timed_out is True
    assert outcome.accumulator == [{"n": 1}, {"n": 2}]
    assert channel.close_calls == 1


@pytest.mark.asyncio
async def test_deadline_with_nothing_accumulated_fails(fake_channel, fake_connector):
    channel = fake_channel([], hang=True)

    with pytest.raises(EmptySessionError, match="nothing here") as exc_info:
        await run_session(_list_spec(deadline=0.05), fake_connector(channel))

    assert exc_info.value.timed_out is True
    assert channel.close_calls == 1


@pytest.mark.asyncio
async def test_remote_close_with_nothing_accumulated_fails(
    fake_channel, fake_connector
):
    channel = fake_channel([], hang=False)

    with pytest.raises(EmptySessionError) as exc_info:
        await run_session(_list_spec(), fake_connector(channel))

    assert exc_info.value.timed_out is False


@pytest.mark.asyncio
async def test_malformed_frames_do_not_change_result(fake_channel, fake_connector):
    clean = fake_channel([{"n": 1}, {"n": 2}], hang=False)
    noisy = fake_channel(["{not json", {"n": 1}, "", {"n": 2}, "]]"], hang=False)

    expected = await run_session(_list_spec(), fake_connector(clean))
    session = StreamingSession(_list_spec(), fake_connector(noisy))
    outcome = await session.run()

    assert outcome.accumulator == expected.accumulator
    assert outcome.frames_discarded == 3
    assert outcome.frames_folded == 2


@pytest.mark.asyncio
async def test_transport_error_fails_even_with_results(fake_channel, fake_connector):
    channel = fake_channel([{"n": 1}, TransportError("connection reset")])

    with pytest.raises(TransportError, match="connection reset"):
        await run_session(_list_spec(), fake_connector(channel))

    assert channel.closed


@pytest.mark.asyncio
async def test_each_run_gets_a_fresh_accumulator(fake_channel, fake_connector):
    spec = _list_spec()
    connector = fake_connector(
        fake_channel([{"run": 1}], hang=False), fake_channel([{"run": 2}], hang=False)
    )

    first = await run_session(spec, connector)
    second = await run_session(spec, connector)

    assert first.accumulator == [{"run": 1}]
    assert second.accumulator == [{"run": 2}]


@pytest.mark.asyncio
async def test_deadline_covers_a_stalled_handshake(fake_channel):
    channel = fake_channel([{"n": 1}], hang=False)

    @asynccontextmanager
    async def slow_connect(endpoint: str):
        await asyncio.sleep(1.0)
        yield channel

    loop = asyncio.get_running_loop()
    started = loop.time()
    with pytest.raises(EmptySessionError) as exc_info:
        await run_session(_list_spec(deadline=0.05), slow_connect)

    assert exc_info.value.timed_out is True
    assert loop.time() - started < 0.5
    assert channel.sent == []


@pytest.mark.asyncio
async def test_deadline_covers_a_stalled_send(fake_channel):
    channel = fake_channel([{"n": 1}], hang=False)

    async def stuck_send(data: str) -> None:
        await asyncio.Event().wait()

    channel.send_text = stuck_send

    @asynccontextmanager
    async def connect(endpoint: str):
        yield channel

    with pytest.raises(EmptySessionError) as exc_info:
        await run_session(_list_spec(deadline=0.05), connect)

    assert exc_info.value.timed_out is True
    assert channel.closed
    assert channel.close_calls == 1
