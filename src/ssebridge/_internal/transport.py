"""httpx transport and timeout construction for long-lived streams."""

import socket

import httpx

from ssebridge.config import ClientConfig


def keepalive_socket_options(interval: float) -> list[tuple[int, int, int]]:
    """Socket options enabling TCP keepalive every ``interval`` seconds.

    Only the options the platform defines are included. Linux has
    ``TCP_KEEPIDLE``; macOS spells the idle time ``TCP_KEEPALIVE``.
    """
    seconds = max(1, int(interval))
    options = [(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)]
    if hasattr(socket, "TCP_KEEPIDLE"):
        options.append((socket.IPPROTO_TCP, socket.TCP_KEEPIDLE, seconds))
    elif hasattr(socket, "TCP_KEEPALIVE"):
        options.append((socket.IPPROTO_TCP, socket.TCP_KEEPALIVE, seconds))
    if hasattr(socket, "TCP_KEEPINTVL"):
        options.append((socket.IPPROTO_TCP, socket.TCP_KEEPINTVL, seconds))
    return options


def stream_timeout(config: ClientConfig) -> httpx.Timeout:
    """Bound connection setup only.

    No read timeout at the transport layer: SSE responses are meant to
    sit idle. The driver bounds each chunk read with ``idle_timeout``.
    """
    return httpx.Timeout(None, connect=config.connect_timeout)


def build_transport(config: ClientConfig) -> httpx.AsyncHTTPTransport:
    return httpx.AsyncHTTPTransport(
        socket_options=keepalive_socket_options(config.keepalive_interval),
    )
