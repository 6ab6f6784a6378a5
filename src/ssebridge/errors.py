"""ssebridge exception hierarchy.

Every failure the stream driver raises is also reported to the event
sink as a terminal ``Error`` event carrying the same message, so callers
can react through either channel.
"""


class SSEBridgeError(Exception):
    """Base for all ssebridge-specific errors."""


class ConfigurationError(SSEBridgeError):
    """Raised when a ``ClientConfig`` value is invalid."""


class HandshakeError(SSEBridgeError):
    """The request failed before streaming began.

    Covers DNS/TCP/TLS failures while sending the request and non-success
    HTTP status codes. ``status`` is ``None`` for transport failures.
    """

    def __init__(self, message: str, *, status: int | None = None) -> None:
        self.message = message
        self.status = status
        super().__init__(message)


class StreamError(SSEBridgeError):
    """Reading the response body failed after streaming began."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class IdleTimeoutError(StreamError):
    """No body chunk arrived within the idle-read window."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"SSE read timeout ({timeout:g}s without data)")
