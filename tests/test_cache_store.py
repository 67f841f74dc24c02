from __future__ import annotations

import sqlite3

import pytest

from db.connection import get_connection
from services.cache_store import MemoryCacheStore, SqliteCacheStore


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    if request.param == "memory":
        yield MemoryCacheStore()
        return
    conn = get_connection(str(tmp_path / "cache.db"))
    yield SqliteCacheStore(conn)
    conn.close()


def test_get_returns_equal_copy(store):
    value = {"data": [{"agency": "A", "platforms": ["YouTube"]}], "timestamp": 1.5}
    store.set("creators_cache", value)
    got = store.get("creators_cache")
    assert got == value
    assert got is not value
    got["data"].clear()
    assert store.get("creators_cache") == value


def test_missing_key_returns_default(store):
    assert store.get("nope") is None
    assert store.get("nope", {"x": 1}) == {"x": 1}


def test_set_overwrites_and_remove_deletes(store):
    store.set("k", 1)
    store.set("k", 2)
    assert store.get("k") == 2
    store.remove("k")
    assert store.get("k", "gone") == "gone"
    # Removing again is a no-op
    store.remove("k")


def test_unserializable_value_keeps_previous_state(store):
    store.set("k", {"ok": True})
    store.set("k", {"bad": object()})
    assert store.get("k") == {"ok": True}


def test_sqlite_store_ignores_corrupt_rows(tmp_path):
    conn = get_connection(str(tmp_path / "cache.db"))
    store = SqliteCacheStore(conn)
    conn.execute("INSERT INTO cache_entries (key, value, updated_at) VALUES (?, ?, datetime('now'))", ("k", "{not json"))
    conn.commit()
    assert store.get("k", "fallback") == "fallback"
    conn.close()


def test_sqlite_store_survives_reopen(tmp_path):
    path = str(tmp_path / "cache.db")
    conn = get_connection(path)
    SqliteCacheStore(conn).set("k", [1, 2, 3])
    conn.close()

    conn = get_connection(path)
    assert SqliteCacheStore(conn).get("k") == [1, 2, 3]
    conn.close()


def test_sqlite_store_closed_connection_does_not_raise(tmp_path):
    conn = get_connection(str(tmp_path / "cache.db"))
    store = SqliteCacheStore(conn)
    conn.close()
    assert store.get("k", 0) == 0
    store.set("k", 1)
    store.remove("k")
    with pytest.raises(sqlite3.ProgrammingError):
        conn.execute("SELECT 1")
