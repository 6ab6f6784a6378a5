"""Event sinks: where a connection delivers its events.

A sink is anything with a synchronous ``emit(event)`` method. The driver
calls it once per event, in production order, and never waits on it.
Delivery is best-effort: ``deliver()`` swallows and logs whatever a sink
raises so a consumer that went away cannot stall or abort the read loop.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from typing import Protocol, runtime_checkable

from ssebridge.errors import SSEBridgeError
from ssebridge.events import SSEEvent

logger = logging.getLogger("ssebridge.sinks")


class SinkClosedError(SSEBridgeError):
    """Raised by a sink that no longer accepts events."""


@runtime_checkable
class EventSink(Protocol):
    def emit(self, event: SSEEvent) -> None: ...


def deliver(sink: EventSink, event: SSEEvent) -> bool:
    """Emit ``event`` to ``sink``. Returns False if the sink raised."""
    try:
        sink.emit(event)
    except Exception as exc:
        logger.warning("Dropped %s event: %s: %s", event.kind, type(exc).__name__, exc)
        return False
    return True


class CallbackSink:
    """Adapt a plain function to the sink interface."""

    __slots__ = ("_callback",)

    def __init__(self, callback: Callable[[SSEEvent], object]) -> None:
        self._callback = callback

    def emit(self, event: SSEEvent) -> None:
        self._callback(event)


class QueueSink:
    """Buffer events in an ``asyncio.Queue`` for async consumption.

    ``emit()`` uses ``put_nowait`` and the queue is unbounded, so the
    producer never blocks. Iterating the sink yields events until (and
    including) the first terminal one::

        sink = QueueSink()
        task = asyncio.create_task(client.connect(url, sink=sink))
        async for event in sink:
            ...

    After ``close()`` further emits raise ``SinkClosedError``.
    """

    __slots__ = ("_closed", "_queue")

    def __init__(self) -> None:
        self._queue: asyncio.Queue[SSEEvent] = asyncio.Queue()
        self._closed = False

    def emit(self, event: SSEEvent) -> None:
        if self._closed:
            msg = "sink is closed"
            raise SinkClosedError(msg)
        self._queue.put_nowait(event)

    def close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    async def get(self) -> SSEEvent:
        return await self._queue.get()

    def __aiter__(self) -> AsyncIterator[SSEEvent]:
        return self._drain()

    async def _drain(self) -> AsyncIterator[SSEEvent]:
        while True:
            event = await self._queue.get()
            yield event
            if event.is_terminal:
                return
