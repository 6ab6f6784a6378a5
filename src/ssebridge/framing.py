"""Incremental line framing for streamed response bodies.

Bytes arrive in chunks of arbitrary size. A chunk may end mid-line or in
the middle of a multi-byte UTF-8 sequence, so both the text buffer and
the decoder carry state across ``push()`` calls.
"""

import codecs
from collections.abc import Iterator


class LineFramer:
    """Split a byte stream into text lines.

    Lines end at ``\\n``; one trailing ``\\r`` is stripped so both
    ``\\n`` and ``\\r\\n`` endings work. Undecodable bytes are replaced
    with U+FFFD instead of raising. There is no line-length bound: a
    server that never sends ``\\n`` grows the buffer without limit.
    """

    __slots__ = ("_buffer", "_decoder")

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    def push(self, chunk: bytes) -> Iterator[str]:
        """Append ``chunk`` and yield every line it completes.

        The generator is lazy; consume it fully before the next push.
        """
        self._buffer += self._decoder.decode(chunk)
        while (newline := self._buffer.find("\n")) != -1:
            line = self._buffer[:newline]
            self._buffer = self._buffer[newline + 1 :]
            yield line.removesuffix("\r")

    @property
    def pending(self) -> str:
        """Text received since the last complete line."""
        return self._buffer

    def reset(self) -> None:
        self._decoder.reset()
        self._buffer = ""
