"""Client configuration.

ClientConfig is a frozen dataclass. The defaults are the production
timeouts; override them only where a different deployment (or a test)
needs to::

    config = ClientConfig(idle_timeout=120.0)
"""

from dataclasses import dataclass

from ssebridge.errors import ConfigurationError

DEFAULT_CONNECT_TIMEOUT = 15.0
DEFAULT_KEEPALIVE_INTERVAL = 30.0
DEFAULT_IDLE_TIMEOUT = 90.0


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Timeouts and request defaults for ``SSEClient``. Immutable after creation."""

    # Bound on TCP/TLS connection establishment only
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT

    # TCP keepalive interval on the underlying socket
    keepalive_interval: float = DEFAULT_KEEPALIVE_INTERVAL

    # Maximum gap between body chunks before the connection is declared dead.
    # Longer than typical server heartbeat intervals (30-60s).
    idle_timeout: float = DEFAULT_IDLE_TIMEOUT

    # Request headers
    accept: str = "text/event-stream"
    user_agent: str = "ssebridge"

    def __post_init__(self) -> None:
        for name in ("connect_timeout", "keepalive_interval", "idle_timeout"):
            value = getattr(self, name)
            if value <= 0:
                msg = f"{name} must be positive, got {value!r}"
                raise ConfigurationError(msg)
