"""Connection identity registry.

Issues strictly increasing connection ids and tracks which one is live.
A stream driver polls ``is_current()`` with the id it was given; once
the id is superseded (new connection) or invalidated (``disconnect``),
the driver winds itself down at its next poll point.

Thread safety:
    - ``_next_id`` and ``_active_id`` are only touched under ``_lock``
    - ``begin_connection()`` issues and activates an id in one critical
      section, so no observer sees a newer id issued but not yet active
"""

import threading

#: Reserved id meaning "no active connection".
NO_CONNECTION = 0


class ConnectionRegistry:
    """Per-client connection id bookkeeping.

    Usage::

        registry = ConnectionRegistry()
        conn_id = registry.begin_connection()
        ...
        if not registry.is_current(conn_id):
            return  # superseded or disconnected
    """

    __slots__ = ("_active_id", "_lock", "_next_id")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._next_id = NO_CONNECTION
        self._active_id = NO_CONNECTION

    def begin_connection(self) -> int:
        """Issue the next id and make it the active one."""
        with self._lock:
            self._next_id += 1
            self._active_id = self._next_id
            return self._next_id

    def invalidate(self) -> None:
        """Clear the active id, whichever it is. Always succeeds."""
        with self._lock:
            self._active_id = NO_CONNECTION

    def is_current(self, conn_id: int) -> bool:
        with self._lock:
            return conn_id != NO_CONNECTION and conn_id == self._active_id

    @property
    def active_id(self) -> int:
        """The live connection id, or ``NO_CONNECTION``."""
        with self._lock:
            return self._active_id

    @property
    def last_issued_id(self) -> int:
        with self._lock:
            return self._next_id
