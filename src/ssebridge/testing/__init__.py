"""Test utilities for code built on ssebridge.

Provides a recording sink and a scripted fake SSE server that plugs into
``SSEClient`` through ``httpx.MockTransport``::

    from ssebridge.testing import RecordingSink, ScriptedServer, Stall

    server = ScriptedServer([b"data: hi\\n\\n", Stall(5.0)])
    client = SSEClient(transport=server.transport)
"""

from ssebridge.testing.server import Gate, ScriptedServer, Stall
from ssebridge.testing.sink import FailingSink, RecordingSink

__all__ = [
    "FailingSink",
    "Gate",
    "RecordingSink",
    "ScriptedServer",
    "Stall",
]
