"""Single-connection SSE client.

``SSEClient.connect()`` opens a streaming GET, frames the body into
lines, assembles ``data:`` events, and emits typed events to a sink
until the stream ends, fails, goes idle for too long, or is cancelled.

Cancellation is cooperative. ``disconnect()`` (or a newer ``connect()``)
only retires the connection id; the read loop checks its id at the top
of every iteration and winds down on its own. Parsing is never
interrupted mid-line or mid-event.

Free-threading safety:
    - ``ConnectionRegistry`` is the only state shared between the read
      loop and ``disconnect()`` callers, and it serializes access
    - framer and assembler are created per connection and owned by one loop
    - ``httpx.AsyncClient`` is created per connection
"""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from enum import Enum

import anyio
import httpx

from ssebridge._internal.transport import build_transport, stream_timeout
from ssebridge.assembler import EventAssembler
from ssebridge.config import ClientConfig
from ssebridge.errors import HandshakeError, IdleTimeoutError, SSEBridgeError, StreamError
from ssebridge.events import (
    REASON_CLIENT,
    REASON_ENDED,
    Connected,
    Disconnected,
    Error,
    Message,
    SSEEvent,
)
from ssebridge.framing import LineFramer
from ssebridge.registry import ConnectionRegistry
from ssebridge.sinks import EventSink, QueueSink, deliver

logger = logging.getLogger("ssebridge.client")


class ConnectionState(Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    STREAMING = "streaming"
    TERMINATED = "terminated"


class _Session:
    """Bookkeeping for one ``connect()`` call."""

    __slots__ = ("conn_id", "state")

    def __init__(self, conn_id: int) -> None:
        self.conn_id = conn_id
        self.state = ConnectionState.REQUESTING


class SSEClient:
    """Stream Server-Sent Events from one URL at a time.

    Usage::

        client = SSEClient()
        sink = QueueSink()
        task = asyncio.create_task(client.connect(url, "Bearer t0k3n", sink=sink))
        async for event in sink:
            ...
        client.disconnect()

    Or, when the events are all you need::

        async for event in client.stream(url):
            ...

    Args:
        config: Timeouts and request defaults.
        registry: Connection id registry. Pass one in to share or inspect it.
        transport: httpx transport override (e.g. ``httpx.MockTransport``).
            Defaults to an ``AsyncHTTPTransport`` with TCP keepalive enabled.
            The transport is closed along with each connection's client.
    """

    __slots__ = ("_config", "_registry", "_session", "_transport")

    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        registry: ConnectionRegistry | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._registry = registry or ConnectionRegistry()
        self._transport = transport
        self._session: _Session | None = None

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def registry(self) -> ConnectionRegistry:
        return self._registry

    @property
    def state(self) -> ConnectionState:
        """Lifecycle state of the most recent connection."""
        if self._session is None:
            return ConnectionState.IDLE
        return self._session.state

    def disconnect(self) -> None:
        """Retire the active connection and return immediately.

        The read loop notices at its next liveness check, which happens
        before the next chunk read. Always succeeds.
        """
        self._registry.invalidate()

    async def connect(
        self,
        url: str,
        credential: str | None = None,
        *,
        sink: EventSink,
    ) -> None:
        """Stream events from ``url`` into ``sink`` until the connection ends.

        Supersedes any previous connection on this client. ``credential``
        is sent verbatim as the ``Authorization`` header.

        Returns normally after emitting ``Disconnected``. Raises
        ``HandshakeError`` if the request fails or the status is not 2xx,
        ``StreamError`` if a body read fails, and ``IdleTimeoutError``
        when no chunk arrives within ``config.idle_timeout``. Every raise
        is preceded by an ``Error`` event with the same message.
        """
        session = _Session(self._registry.begin_connection())
        self._session = session
        logger.debug("Connection %d requesting %s", session.conn_id, url)

        headers = {
            "Accept": self._config.accept,
            "Cache-Control": "no-cache",
            "User-Agent": self._config.user_agent,
        }
        if credential is not None:
            headers["Authorization"] = credential

        transport = self._transport or build_transport(self._config)
        try:
            async with httpx.AsyncClient(
                transport=transport,
                timeout=stream_timeout(self._config),
                follow_redirects=True,
            ) as http:
                try:
                    request = http.build_request("GET", url, headers=headers)
                    response = await http.send(request, stream=True)
                except (httpx.HTTPError, httpx.InvalidURL) as exc:
                    message = f"SSE connection failed: {exc}"
                    logger.warning("Connection %d: %s", session.conn_id, message)
                    deliver(sink, Error(message))
                    raise HandshakeError(message) from exc

                try:
                    if not response.is_success:
                        message = (
                            f"SSE server returned {response.status_code} {response.reason_phrase}"
                        ).rstrip()
                        logger.warning("Connection %d: %s", session.conn_id, message)
                        deliver(sink, Error(message))
                        raise HandshakeError(message, status=response.status_code)

                    session.state = ConnectionState.STREAMING
                    logger.info("Connection %d established: %s", session.conn_id, url)
                    deliver(sink, Connected())
                    await self._read_loop(session, response, sink)
                finally:
                    await response.aclose()
        finally:
            # Every exit, including cancellation mid-handshake, ends here
            session.state = ConnectionState.TERMINATED

    async def _read_loop(
        self,
        session: _Session,
        response: httpx.Response,
        sink: EventSink,
    ) -> None:
        framer = LineFramer()
        assembler = EventAssembler()
        idle_timeout = self._config.idle_timeout

        try:
            async with contextlib.aclosing(response.aiter_bytes()) as chunks:
                while True:
                    # The only cancellation point: before each chunk read
                    if not self._registry.is_current(session.conn_id):
                        logger.info("Connection %d closed by client", session.conn_id)
                        deliver(sink, Disconnected(REASON_CLIENT))
                        return

                    try:
                        with anyio.fail_after(idle_timeout):
                            chunk = await chunks.__anext__()
                    except StopAsyncIteration:
                        # Graceful EOF flushes an unterminated event; error paths don't
                        payload = assembler.flush()
                        if payload is not None:
                            deliver(sink, Message(payload))
                        logger.info("Connection %d stream ended", session.conn_id)
                        deliver(sink, Disconnected(REASON_ENDED))
                        return
                    except TimeoutError:
                        error = IdleTimeoutError(idle_timeout)
                        logger.warning("Connection %d: %s", session.conn_id, error.message)
                        deliver(sink, Error(error.message))
                        raise error from None
                    except httpx.HTTPError as exc:
                        message = f"SSE stream error: {exc}"
                        logger.warning("Connection %d: %s", session.conn_id, message)
                        deliver(sink, Error(message))
                        raise StreamError(message) from exc

                    for line in framer.push(chunk):
                        payload = assembler.feed(line)
                        if payload is not None:
                            deliver(sink, Message(payload))
        finally:
            framer.reset()

    async def stream(self, url: str, credential: str | None = None) -> AsyncIterator[SSEEvent]:
        """Yield this connection's events, ending with the terminal one.

        Failures arrive as a final ``Error`` event rather than an
        exception; unexpected crashes are also logged. Leaving the loop
        early cancels the background connection task.
        """
        sink = QueueSink()
        task = asyncio.create_task(self.connect(url, credential, sink=sink))

        def _report_crash(done: asyncio.Task[None]) -> None:
            # Unexpected failures never reach the sink on their own
            if done.cancelled():
                return
            exc = done.exception()
            if exc is not None and not isinstance(exc, SSEBridgeError):
                deliver(sink, Error(f"SSE client failed: {exc}"))

        task.add_done_callback(_report_crash)

        finished = False
        try:
            async for event in sink:
                yield event
            finished = True
        finally:
            sink.close()
            if finished or task.done():
                # Already reported to the consumer as an Error event
                try:
                    await task
                except SSEBridgeError:
                    pass
                except Exception:
                    logger.exception("Connection task crashed: %s", url)
            else:
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
