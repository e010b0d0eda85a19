"""
Duplex channels used by streaming sessions.

A channel is opened, used and closed entirely inside one session; nothing
outlives the ``async with`` block returned by :func:`open_websocket`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Protocol

import aiohttp
from loguru import logger

from .errors import TransportError


class Channel(Protocol):
    """Minimal duplex channel: one outbound text frame, many inbound ones."""

    @property
    def closed(self) -> bool: ...

    async def send_text(self, data: str) -> None: ...

    def frames(self) -> AsyncIterator[str]: ...

    async def close(self) -> None: ...


ChannelFactory = Callable[[str], AbstractAsyncContextManager[Channel]]


class WebSocketChannel:
    """:class:`Channel` backed by an aiohttp client websocket."""

    def __init__(self, ws: aiohttp.ClientWebSocketResponse, endpoint: str) -> None:
        self._ws = ws
        self._endpoint = endpoint
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed or self._ws.closed

    async def send_text(self, data: str) -> None:
        try:
            await self._ws.send_str(data)
        except (aiohttp.ClientError, ConnectionError) as e:
            raise TransportError(f"Failed to send to {self._endpoint}: {e}") from e

    async def frames(self) -> AsyncIterator[str]:
        while not self.closed:
            msg = await self._ws.receive()
            if msg.type == aiohttp.WSMsgType.TEXT:
                yield msg.data
            elif msg.type == aiohttp.WSMsgType.BINARY:
                yield msg.data.decode("utf-8", errors="replace")
            elif msg.type == aiohttp.WSMsgType.ERROR:
                raise TransportError(
                    f"Websocket error on {self._endpoint}: {self._ws.exception()}"
                )
            else:
                # CLOSE / CLOSING / CLOSED: the remote side ended the session
                logger.debug(f"Remote closed {self._endpoint} ({msg.type.name})")
                return

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._ws.close()


@asynccontextmanager
async def open_websocket(endpoint: str) -> AsyncIterator[WebSocketChannel]:
    """Open a websocket channel to ``endpoint`` for the duration of one session."""
    async with aiohttp.ClientSession() as http:
        try:
            ws = await http.ws_connect(endpoint)
        except (aiohttp.ClientError, OSError) as e:
            raise TransportError(f"Failed to connect to {endpoint}: {e}") from e
        channel = WebSocketChannel(ws, endpoint)
        try:
            yield channel
        finally:
            await channel.close()
