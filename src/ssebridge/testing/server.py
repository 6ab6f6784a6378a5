"""Scripted fake SSE server on top of ``httpx.MockTransport``.

The response body is a script: each step is delivered in order when the
client reads the next chunk.

    - ``bytes``: sent as one body chunk
    - ``Stall(seconds)``: sleep before continuing (drives idle timeouts)
    - ``Gate()``: wait until the test calls ``gate.open()``
    - ``Exception`` instance: raised from the body stream (a transport error)

When the script runs out the body ends (EOF).
"""

import asyncio
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass

import httpx


@dataclass(frozen=True, slots=True)
class Stall:
    """Pause the body for ``seconds``."""

    seconds: float


class Gate:
    """Hold the body until opened."""

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def open(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()


Step = bytes | Stall | Gate | Exception


class ScriptedServer:
    """Fake SSE endpoint. Records every request it receives.

    Args:
        script: Body steps, replayed for every request.
        status: Response status code.
        connect_error: If set, raised instead of returning a response.
    """

    def __init__(
        self,
        script: Sequence[Step] = (),
        *,
        status: int = 200,
        connect_error: Exception | None = None,
    ) -> None:
        self.script = list(script)
        self.status = status
        self.connect_error = connect_error
        self.requests: list[httpx.Request] = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.connect_error is not None:
            raise self.connect_error
        return httpx.Response(
            self.status,
            headers={"content-type": "text/event-stream"},
            content=self._body(),
        )

    async def _body(self) -> AsyncIterator[bytes]:
        for step in self.script:
            if isinstance(step, bytes):
                yield step
            elif isinstance(step, Stall):
                await asyncio.sleep(step.seconds)
            elif isinstance(step, Gate):
                await step.wait()
            else:
                raise step
