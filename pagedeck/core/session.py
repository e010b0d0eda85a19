"""
Streaming session executor.

Every streaming call to Alai has the same shape: open a duplex channel, send
one initiating frame, fold inbound frames into an accumulator until either a
completion predicate holds or a deadline elapses, then hand the accumulator to
the calling stage. :class:`StreamingSession` implements that shape once; the
stages in :mod:`pagedeck.pipeline.steps` only supply the payload, the folding
rule and the completion predicate.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from loguru import logger

from .channel import Channel, ChannelFactory, open_websocket
from .deadline import race_deadline
from .errors import EmptySessionError

A = TypeVar("A")


def _never_done(_acc: Any) -> bool:
    return False


@dataclass
class SessionSpec(Generic[A]):
    """Everything a stage supplies to run one streaming session."""

    name: str
    endpoint: str
    build_frame: Callable[[], dict[str, Any]]
    new_accumulator: Callable[[], A]
    fold: Callable[[A, Any], bool]
    is_empty: Callable[[A], bool]
    deadline: float
    is_done: Callable[[A], bool] = _never_done
    empty_message: str = "No result produced"


@dataclass
class SessionOutcome(Generic[A]):
    accumulator: A
    timed_out: bool = False
    frames_folded: int = 0
    frames_discarded: int = 0


class StreamingSession(Generic[A]):
    """Runs a single :class:`SessionSpec` against a freshly opened channel."""

    def __init__(self, spec: SessionSpec[A], connect: ChannelFactory | None = None):
        self.spec = spec
        self._connect = connect or open_websocket
        self._accumulator: A = spec.new_accumulator()
        self._channel: Channel | None = None
        self._folded = 0
        self._discarded = 0

    async def run(self) -> SessionOutcome[A]:
        spec = self.spec
        # The deadline also bounds the handshake and the initiating send
        race = await race_deadline(
            self._exchange(), spec.deadline, on_expire=self._expire
        )

        if spec.is_empty(self._accumulator):
            reason = "timed out" if race.timed_out else "closed"
            logger.warning(f"[{spec.name}] Session {reason} with no results")
            message = spec.empty_message
            if race.timed_out:
                message = f"{message} (timed out after {spec.deadline:g}s)"
            raise EmptySessionError(message, timed_out=race.timed_out)
        if race.timed_out:
            logger.warning(
                f"[{spec.name}] Timed out after {spec.deadline:g}s, "
                f"continuing with partial results ({self._folded} frames)"
            )
        return SessionOutcome(
            accumulator=self._accumulator,
            timed_out=race.timed_out,
            frames_folded=self._folded,
            frames_discarded=self._discarded,
        )

    async def _exchange(self) -> None:
        spec = self.spec
        async with self._connect(spec.endpoint) as channel:
            self._channel = channel
            logger.debug(f"[{spec.name}] Connected to {spec.endpoint}")
            await channel.send_text(json.dumps(spec.build_frame()))
            await self._consume(channel)

    async def _expire(self) -> None:
        if self._channel is None:
            logger.warning(f"[{self.spec.name}] Deadline hit before channel opened")
            return
        await self._channel.close()

    async def _consume(self, channel: Channel) -> None:
        spec = self.spec
        async for raw in channel.frames():
            try:
                frame = json.loads(raw)
            except ValueError as e:
                self._discarded += 1
                logger.warning(f"[{spec.name}] Discarding malformed frame: {e}")
                continue

            self._folded += 1
            satisfied = spec.fold(self._accumulator, frame)
            if satisfied or spec.is_done(self._accumulator):
                logger.debug(f"[{spec.name}] Completion reached, closing channel")
                await channel.close()
                return


async def run_session(
    spec: SessionSpec[A], connect: ChannelFactory | None = None
) -> SessionOutcome[A]:
    """Open, drive and close one streaming session described by ``spec``."""
    return await StreamingSession(spec, connect).run()
