"""Tests for ssebridge.registry — connection id issue and liveness."""

import threading

from ssebridge.registry import NO_CONNECTION, ConnectionRegistry


class TestConnectionRegistry:
    def test_starts_with_no_connection(self) -> None:
        registry = ConnectionRegistry()
        assert registry.active_id == NO_CONNECTION
        assert registry.last_issued_id == 0
        assert not registry.is_current(NO_CONNECTION)

    def test_first_id_is_one(self) -> None:
        registry = ConnectionRegistry()
        assert registry.begin_connection() == 1
        assert registry.active_id == 1

    def test_ids_strictly_increase(self) -> None:
        registry = ConnectionRegistry()
        ids = [registry.begin_connection() for _ in range(50)]
        assert ids == list(range(1, 51))

    def test_new_connection_supersedes_previous(self) -> None:
        registry = ConnectionRegistry()
        first = registry.begin_connection()
        second = registry.begin_connection()

        assert not registry.is_current(first)
        assert registry.is_current(second)

    def test_invalidate_clears_active(self) -> None:
        registry = ConnectionRegistry()
        conn_id = registry.begin_connection()
        registry.invalidate()

        assert not registry.is_current(conn_id)
        assert registry.active_id == NO_CONNECTION
        assert registry.last_issued_id == conn_id

    def test_invalidate_is_idempotent(self) -> None:
        registry = ConnectionRegistry()
        registry.invalidate()
        registry.invalidate()
        assert registry.active_id == NO_CONNECTION

    def test_ids_continue_after_invalidate(self) -> None:
        registry = ConnectionRegistry()
        registry.begin_connection()
        registry.invalidate()
        assert registry.begin_connection() == 2

    def test_concurrent_begin_issues_unique_ids(self) -> None:
        registry = ConnectionRegistry()
        issued: list[int] = []
        lock = threading.Lock()

        def worker() -> None:
            for _ in range(200):
                conn_id = registry.begin_connection()
                with lock:
                    issued.append(conn_id)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(issued) == list(range(1, 1601))
        assert registry.last_issued_id == 1600
        # Exactly one of them is live
        assert sum(registry.is_current(i) for i in issued) == 1
