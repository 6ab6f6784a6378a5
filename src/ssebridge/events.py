"""Events delivered to the consumer of an SSE connection.

Frozen dataclasses, one per variant. Within one connection the order is
always: at most one ``Connected``, then ``Message`` events in arrival
order, then at most one terminal ``Disconnected`` or ``Error``.

Each event serializes to the tagged form the host side consumes::

    {"event": "connected"}
    {"event": "message", "data": {"raw": "{\\"type\\": \\"ping\\"}"}}
    {"event": "disconnected", "data": {"reason": "Stream ended"}}
    {"event": "error", "data": {"message": "SSE server returned 502 Bad Gateway"}}
"""

import json
from dataclasses import dataclass
from typing import Any, ClassVar, TypeAlias


@dataclass(frozen=True, slots=True)
class Connected:
    """The server accepted the request and the body is streaming."""

    kind: ClassVar[str] = "connected"
    is_terminal: ClassVar[bool] = False

    def to_dict(self) -> dict[str, Any]:
        return {"event": self.kind}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass(frozen=True, slots=True)
class Message:
    """One complete SSE event payload.

    ``raw`` is the joined ``data:`` text, passed through unparsed.
    Interpreting it (usually as JSON) is the consumer's job.
    """

    raw: str

    kind: ClassVar[str] = "message"
    is_terminal: ClassVar[bool] = False

    def to_dict(self) -> dict[str, Any]:
        return {"event": self.kind, "data": {"raw": self.raw}}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass(frozen=True, slots=True)
class Disconnected:
    """The stream ended normally or was cancelled by the client."""

    reason: str

    kind: ClassVar[str] = "disconnected"
    is_terminal: ClassVar[bool] = True

    def to_dict(self) -> dict[str, Any]:
        return {"event": self.kind, "data": {"reason": self.reason}}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass(frozen=True, slots=True)
class Error:
    """The connection failed. Handshake, transport and idle-timeout
    failures all use this variant and differ only in ``message``."""

    message: str

    kind: ClassVar[str] = "error"
    is_terminal: ClassVar[bool] = True

    def to_dict(self) -> dict[str, Any]:
        return {"event": self.kind, "data": {"message": self.message}}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


SSEEvent: TypeAlias = Connected | Message | Disconnected | Error

REASON_CLIENT = "Disconnected by client"
REASON_ENDED = "Stream ended"


def event_from_dict(payload: dict[str, Any]) -> SSEEvent:
    """Rebuild an event from its ``to_dict()`` form.

    Raises ``ValueError`` for an unknown tag or a missing field.
    """
    tag = payload.get("event")
    data = payload.get("data") or {}
    try:
        if tag == Connected.kind:
            return Connected()
        if tag == Message.kind:
            return Message(raw=data["raw"])
        if tag == Disconnected.kind:
            return Disconnected(reason=data["reason"])
        if tag == Error.kind:
            return Error(message=data["message"])
    except KeyError as exc:
        msg = f"{tag!r} event is missing field {exc.args[0]!r}"
        raise ValueError(msg) from None

    msg = f"Unknown event tag: {tag!r}"
    raise ValueError(msg)
