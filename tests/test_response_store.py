"""
Tests for the in-memory response cache.
"""

import threading

import pytest

from counsel_ai.protocols import ResponseStore
from counsel_ai.repositories import MemoryResponseStore


def test_satisfies_protocol(store):
    """The memory store satisfies the ResponseStore protocol."""
    assert isinstance(store, ResponseStore)


def test_get_missing_returns_none(store):
    assert store.get("chat:nothing here") is None


def test_set_then_get(store):
    store.set("chat:hello", "Hi there!")
    assert store.get("chat:hello") == "Hi there!"
    assert len(store) == 1


def test_entry_expires_after_ttl(store, clock):
    """Entries older than the TTL are never returned."""
    store.set("chat:hello", "Hi there!")

    clock.advance(599)
    assert store.get("chat:hello") == "Hi there!"

    clock.advance(1)
    assert store.get("chat:hello") is None
    assert len(store) == 0


def test_reads_do_not_extend_lifetime(store, clock):
    """A hit does not refresh the entry's age."""
    store.set("chat:hello", "Hi there!")

    for _ in range(5):
        clock.advance(100)
        assert store.get("chat:hello") == "Hi there!"

    clock.advance(100)
    assert store.get("chat:hello") is None


def test_capacity_evicts_least_recently_used(clock):
    """Inserting beyond capacity evicts exactly one LRU entry."""
    store = MemoryResponseStore(capacity=3, ttl_seconds=600, timer=clock)
    store.set("chat:a", "A")
    store.set("chat:b", "B")
    store.set("chat:c", "C")

    # Touch "a" so "b" becomes the least recently used
    assert store.get("chat:a") == "A"

    store.set("chat:d", "D")

    assert len(store) == 3
    assert store.get("chat:b") is None
    assert store.get("chat:a") == "A"
    assert store.get("chat:c") == "C"
    assert store.get("chat:d") == "D"


def test_never_exceeds_capacity(clock):
    store = MemoryResponseStore(capacity=5, ttl_seconds=600, timer=clock)
    for i in range(50):
        store.set(f"chat:{i}", str(i))
        assert len(store) <= 5

    assert store.keys() == [f"chat:{i}" for i in range(45, 50)]


def test_overwrite_same_key_keeps_one_entry(store):
    """Last write wins for the same key."""
    store.set("chat:hello", "first")
    store.set("chat:hello", "second")
    assert store.get("chat:hello") == "second"
    assert len(store) == 1


def test_clear(store):
    store.set("chat:a", "A")
    store.set("chat:b", "B")
    store.clear()
    assert len(store) == 0
    assert store.get("chat:a") is None


def test_create_from_settings(settings):
    store = MemoryResponseStore.create(settings)
    assert store.capacity == 100
    assert store.ttl_seconds == 600


@pytest.mark.parametrize("capacity,ttl", [(0, 600), (10, 0), (-1, 600)])
def test_rejects_invalid_bounds(capacity, ttl):
    with pytest.raises(ValueError):
        MemoryResponseStore(capacity=capacity, ttl_seconds=ttl)


def test_concurrent_inserts_respect_capacity():
    store = MemoryResponseStore(capacity=20, ttl_seconds=600)

    def writer(offset: int) -> None:
        for i in range(200):
            store.set(f"chat:{offset}:{i}", "x")
            store.get(f"chat:{offset}:{i // 2}")

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store) == 20
