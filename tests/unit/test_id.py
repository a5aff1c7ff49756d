"""Tests for ID generation and fetch sequencing."""

import threading

from sdui.core.id import Sequence, new_fetch_id, new_request_id


def test_request_id_prefix():
    request_id = new_request_id()
    assert request_id.startswith("req_")
    assert len(request_id) == len("req_") + 26


def test_fetch_ids_unique():
    ids = {new_fetch_id() for _ in range(100)}
    assert len(ids) == 100


def test_sequence_latest():
    sequence = Sequence()

    first = sequence.next()
    second = sequence.next()

    assert second > first
    assert sequence.is_latest(second)
    assert not sequence.is_latest(first)
    assert sequence.latest == second


def test_sequence_thread_safe():
    """Concurrent issuers never receive the same token."""
    sequence = Sequence()
    issued: list[int] = []
    lock = threading.Lock()

    def worker():
        for _ in range(200):
            token = sequence.next()
            with lock:
                issued.append(token)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(set(issued)) == 800
    assert sequence.latest == max(issued)
