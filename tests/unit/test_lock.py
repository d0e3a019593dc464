"""
Unit tests for ReadWriteLock.

Covers:
    - concurrent readers share the lock
    - a writer excludes readers and other writers
    - waiting writers are not starved by new readers
    - releasing an unheld lock is an error
"""

import threading
import time

import pytest

from shorturl.storage.lock import ReadWriteLock


def test_readers_share_access():
    lock = ReadWriteLock()
    inside = threading.Barrier(3, timeout=5)

    def reader():
        with lock.read_locked():
            # All three must be inside at once or the barrier times out.
            inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)
    assert not any(t.is_alive() for t in threads)
    assert lock.readers == 0


def test_writer_waits_for_reader():
    lock = ReadWriteLock()
    events = []
    lock.acquire_read()

    def writer():
        with lock.write_locked():
            events.append("write")

    t = threading.Thread(target=writer)
    t.start()
    time.sleep(0.05)
    assert events == []
    events.append("read-done")
    lock.release_read()
    t.join(timeout=5)
    assert events == ["read-done", "write"]


def test_reader_waits_for_writer():
    lock = ReadWriteLock()
    events = []
    lock.acquire_write()
    assert lock.writer_active is True

    def reader():
        with lock.read_locked():
            events.append("read")

    t = threading.Thread(target=reader)
    t.start()
    time.sleep(0.05)
    assert events == []
    events.append("write-done")
    lock.release_write()
    t.join(timeout=5)
    assert events == ["write-done", "read"]


def test_writers_are_mutually_exclusive():
    lock = ReadWriteLock()
    counter = {"active": 0, "max": 0}

    def writer():
        for _ in range(200):
            with lock.write_locked():
                counter["active"] += 1
                counter["max"] = max(counter["max"], counter["active"])
                counter["active"] -= 1

    threads = [threading.Thread(target=writer) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    assert counter["max"] == 1


def test_waiting_writer_blocks_new_readers():
    lock = ReadWriteLock()
    order = []
    lock.acquire_read()

    def writer():
        with lock.write_locked():
            order.append("writer")

    def late_reader():
        with lock.read_locked():
            order.append("reader")

    w = threading.Thread(target=writer)
    w.start()
    time.sleep(0.05)  # writer is now queued behind the held read lock
    r = threading.Thread(target=late_reader)
    r.start()
    time.sleep(0.05)
    assert order == []
    lock.release_read()
    w.join(timeout=5)
    r.join(timeout=5)
    assert order == ["writer", "reader"]


def test_release_without_acquire_raises():
    lock = ReadWriteLock()
    with pytest.raises(RuntimeError):
        lock.release_read()
    with pytest.raises(RuntimeError):
        lock.release_write()


def test_context_manager_releases_on_error():
    lock = ReadWriteLock()
    with pytest.raises(ValueError):
        with lock.write_locked():
            raise ValueError("boom")
    assert lock.writer_active is False
    with lock.read_locked():
        assert lock.readers == 1
    assert lock.readers == 0
