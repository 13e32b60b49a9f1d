# tests/unit/core/test_unit_rwlock.py - v1
"""Tests for core/rwlock.py - ReadWriteLock."""

from __future__ import annotations

import threading
import time

from osintgraph.core.rwlock import ReadWriteLock


class TestReadWriteLock:
    def test_readers_share(self):
        lock = ReadWriteLock()
        inside = threading.Barrier(2, timeout=2)
        errors: list[Exception] = []

        def reader():
            with lock.read():
                try:
                    inside.wait()  # both readers must be inside at once
                except threading.BrokenBarrierError as exc:
                    errors.append(exc)

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)
        assert errors == []

    def test_writer_excludes_readers(self):
        lock = ReadWriteLock()
        events: list[str] = []
        writer_in = threading.Event()

        def writer():
            with lock.write():
                writer_in.set()
                time.sleep(0.05)
                events.append("write-done")

        def reader():
            writer_in.wait(timeout=2)
            with lock.read():
                events.append("read")

        tw = threading.Thread(target=writer)
        tr = threading.Thread(target=reader)
        tw.start()
        tr.start()
        tw.join(timeout=5)
        tr.join(timeout=5)
        assert events == ["write-done", "read"]

    def test_writers_serialized(self):
        lock = ReadWriteLock()
        counter = {"value": 0}

        def bump():
            for _ in range(200):
                with lock.write():
                    current = counter["value"]
                    counter["value"] = current + 1

        threads = [threading.Thread(target=bump) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)
        assert counter["value"] == 800

    def test_released_after_exception(self):
        lock = ReadWriteLock()
        try:
            with lock.write():
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        with lock.read():
            pass
        with lock.write():
            pass
