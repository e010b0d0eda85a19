"""
Deadline race between a unit of work and a timer.

Every streaming stage is bounded by :func:`race_deadline`: the work either
finishes first (the timer is disarmed and never fires) or the timer fires
first (the work is cancelled and ``on_expire`` runs exactly once).
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class RaceResult(Generic[T]):
    completed: bool
    value: T | None = None

    @property
    def timed_out(self) -> bool:
        return not self.completed


async def race_deadline(
    work: Awaitable[T],
    seconds: float,
    on_expire: Callable[[], Awaitable[None]] | None = None,
) -> RaceResult[T]:
    """Resolve as soon as ``work`` completes or ``seconds`` elapse.

    Exceptions raised by ``work`` before the deadline propagate to the caller.
    On expiry the work is cancelled before ``on_expire`` runs, so nothing the
    work does can be observed after the deadline.
    """
    task = asyncio.ensure_future(work)
    try:
        done, _ = await asyncio.wait({task}, timeout=seconds)
    except asyncio.CancelledError:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        raise

    if task in done:
        return RaceResult(completed=True, value=task.result())

    task.cancel()
    await asyncio.wait({task})
    if not task.cancelled():
        # Finished in the same loop iteration the timer fired
        return RaceResult(completed=True, value=task.result())
    if on_expire is not None:
        await on_expire()
    return RaceResult(completed=False)
