"""ssebridge — a single-connection Server-Sent Events client.

Opens one long-lived streaming GET, parses ``data:`` events out of the
body, and delivers typed events to a sink. Idle connections are
detected with a per-chunk read timeout; cancellation is cooperative.

Basic usage::

    from ssebridge import SSEClient

    client = SSEClient()
    async for event in client.stream("https://api.example.com/events"):
        print(event.to_json())

Explicit sink, with disconnect from elsewhere::

    sink = QueueSink()
    task = asyncio.create_task(client.connect(url, "Bearer abc", sink=sink))
    ...
    client.disconnect()
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "CallbackSink",
    "ClientConfig",
    "Connected",
    "ConnectionRegistry",
    "ConnectionState",
    "Disconnected",
    "Error",
    "EventAssembler",
    "EventSink",
    "HandshakeError",
    "IdleTimeoutError",
    "LineFramer",
    "Message",
    "QueueSink",
    "SSEBridgeError",
    "SSEClient",
    "SSEEvent",
    "StreamError",
]


# Public name -> defining module, resolved on first attribute access
_LAZY_IMPORTS: dict[str, str] = {
    "SSEClient": "ssebridge.client",
    "ConnectionState": "ssebridge.client",
    "ClientConfig": "ssebridge.config",
    "ConnectionRegistry": "ssebridge.registry",
    "LineFramer": "ssebridge.framing",
    "EventAssembler": "ssebridge.assembler",
    "Connected": "ssebridge.events",
    "Message": "ssebridge.events",
    "Disconnected": "ssebridge.events",
    "Error": "ssebridge.events",
    "SSEEvent": "ssebridge.events",
    "EventSink": "ssebridge.sinks",
    "QueueSink": "ssebridge.sinks",
    "CallbackSink": "ssebridge.sinks",
    "SSEBridgeError": "ssebridge.errors",
    "HandshakeError": "ssebridge.errors",
    "StreamError": "ssebridge.errors",
    "IdleTimeoutError": "ssebridge.errors",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import ssebridge`` from importing httpx until a client is needed.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
