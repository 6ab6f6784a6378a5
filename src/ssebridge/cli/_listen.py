"""``ssebridge listen`` — print each event of one connection as a JSON line.

The first SIGINT/SIGTERM asks the client to disconnect and lets the read
loop wind down at its next liveness check. A second one aborts.
"""

import argparse
import logging
import signal
import sys
from collections.abc import AsyncIterator

import anyio
import httpx

from ssebridge.client import SSEClient
from ssebridge.config import ClientConfig
from ssebridge.errors import ConfigurationError, SSEBridgeError
from ssebridge.events import SSEEvent
from ssebridge.sinks import CallbackSink

logger = logging.getLogger("ssebridge.cli")


def run_listen(
    args: argparse.Namespace,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    handle_signals: bool = True,
) -> int:
    """Run one connection to completion. Returns the process exit code."""
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        config = ClientConfig(idle_timeout=args.idle_timeout)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    client = SSEClient(config=config, transport=transport)
    return anyio.run(_listen, client, args.url, args.auth, handle_signals)


async def _listen(
    client: SSEClient,
    url: str,
    credential: str | None,
    handle_signals: bool,
) -> int:
    sink = CallbackSink(_print_event)
    exit_code = 0
    async with anyio.create_task_group() as tg:
        if handle_signals:
            tg.start_soon(_watch_signals, client, tg.cancel_scope)
        try:
            await client.connect(url, credential, sink=sink)
        except SSEBridgeError as exc:
            logger.debug("listen failed: %s", exc)
            exit_code = 1
        finally:
            tg.cancel_scope.cancel()
    return exit_code


async def _watch_signals(client: SSEClient, scope: anyio.CancelScope) -> None:
    with anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM) as signals:
        await _handle_signals(signals, client, scope)


async def _handle_signals(
    signals: AsyncIterator[int],
    client: SSEClient,
    scope: anyio.CancelScope,
) -> None:
    """First signal requests a disconnect; the second cancels ``scope``."""
    requested = False
    async for signum in signals:
        if requested:
            logger.warning("Received %s again, aborting", signal.Signals(signum).name)
            scope.cancel()
            return
        requested = True
        logger.info("Received %s, disconnecting", signal.Signals(signum).name)
        client.disconnect()


def _print_event(event: SSEEvent) -> None:
    print(event.to_json(), flush=True)
