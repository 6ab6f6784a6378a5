"""SSE event assembly from framed lines.

Only the subset of the SSE text format needed for JSON-payload streaming
APIs is honored: ``data:`` fields accumulate, a blank line dispatches.
``event:``, ``id:``, ``retry:`` and ``:`` comment lines are skipped.
"""


class EventAssembler:
    """Accumulate ``data:`` lines into complete message payloads.

    Multiple ``data:`` lines in one event are joined with ``\\n``. A
    ``data:`` line with nothing after the prefix is ignored entirely:
    it neither contributes a line nor dispatches.
    """

    __slots__ = ("_lines",)

    def __init__(self) -> None:
        self._lines: list[str] = []

    def feed(self, line: str) -> str | None:
        """Process one line. Returns a payload when ``line`` completes an event."""
        if line.startswith("data:"):
            data = line[5:].strip()
            if data:
                self._lines.append(data)
            return None

        if not line:
            # Blank lines between events are not errors
            return self.flush()

        return None

    def flush(self) -> str | None:
        """Return and clear the pending payload, if any."""
        if not self._lines:
            return None
        payload = "\n".join(self._lines)
        self._lines.clear()
        return payload

    @property
    def pending(self) -> str:
        return "\n".join(self._lines)
