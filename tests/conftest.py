"""
Configuration file for pytest test suite.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

import pytest

from pagedeck.configs.config import config


class FakeChannel:
    """In-memory duplex channel.

    ``script`` items are yielded in order: strings are raw inbound frames,
    dicts are JSON-encoded first, exceptions are raised as transport errors.
    Once the script is exhausted the channel either waits forever (``hang``)
    or reports a remote close. With ``stall_close`` the first close never
    completes, like a close handshake the remote side does not answer.
    """

    def __init__(
        self,
        script: list[Any] | None = None,
        hang: bool = True,
        stall_close: bool = False,
    ) -> None:
        self.script = list(script or [])
        self.hang = hang
        self.stall_close = stall_close
        self.sent: list[dict[str, Any]] = []
        self.close_calls = 0
        self.delivered = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send_text(self, data: str) -> None:
        self.sent.append(json.loads(data))

    async def frames(self) -> AsyncIterator[str]:
        for item in self.script:
            await asyncio.sleep(0)
            if self._closed:
                return
            if isinstance(item, BaseException):
                raise item
            self.delivered += 1
            yield item if isinstance(item, str) else json.dumps(item)
        if self.hang:
            await asyncio.Event().wait()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.close_calls += 1
        if self.stall_close:
            await asyncio.Event().wait()


class FakeConnector:
    """Channel factory handing out prepared channels in order."""

    def __init__(self, *channels: FakeChannel) -> None:
        self.channels = list(channels)
        self.endpoints: list[str] = []

    @asynccontextmanager
    async def __call__(self, endpoint: str) -> AsyncIterator[FakeChannel]:
        self.endpoints.append(endpoint)
        channel = self.channels.pop(0)
        try:
            yield channel
        finally:
            await channel.close()


@pytest.fixture
def fake_channel() -> type[FakeChannel]:
    return FakeChannel


@pytest.fixture
def fake_connector() -> type[FakeConnector]:
    return FakeConnector


@pytest.fixture
def short_deadlines(monkeypatch: pytest.MonkeyPatch) -> None:
    """Shrink every session deadline so timeout paths run quickly."""
    monkeypatch.setattr(config, "outline_timeout", 0.05)
    monkeypatch.setattr(config, "create_slides_timeout", 0.05)
    monkeypatch.setattr(config, "variant_timeout", 0.05)


def make_draft_payload(slide_id: str, title: str | None = None) -> dict[str, Any]:
    return {
        "id": slide_id,
        "slide_outline": {
            "slide_id": slide_id,
            "slide_title": title or f"Slide {slide_id}",
            "slide_context": f"Context for {slide_id}",
            "slide_instructions": "",
            "images_on_slide": None,
        },
        "slide_order": 0,
    }


@pytest.fixture
def draft_payload() -> Callable[..., dict[str, Any]]:
    return make_draft_payload
