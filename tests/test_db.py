"""Tests for the key/value stores."""
import sqlite3

import pytest

from tf_tutor.db import MemoryStore, SqliteStore, get_connection, init_db


def test_init_db_creates_table(tmp_db):
    init_db(tmp_db)
    conn = get_connection(tmp_db)
    tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    assert "kv_store" in tables
    conn.close()


def test_init_db_is_idempotent(tmp_db):
    init_db(tmp_db)
    init_db(tmp_db)  # should not raise


def test_init_db_creates_parent_directory(tmp_path):
    db_path = tmp_path / "nested" / "dir" / "tutor.db"
    init_db(str(db_path))
    assert db_path.exists()


def test_sqlite_store_get_missing(tmp_db):
    store = SqliteStore(tmp_db)
    assert store.get("nothing") is None


def test_sqlite_store_set_and_overwrite(tmp_db):
    store = SqliteStore(tmp_db)
    store.set("k", "v1")
    store.set("k", "v2")
    assert store.get("k") == "v2"


def test_sqlite_store_set_many(tmp_db):
    store = SqliteStore(tmp_db)
    store.set("a", "old")
    store.set_many([("a", "1"), ("b", "2")])
    assert store.get("a") == "1"
    assert store.get("b") == "2"


def test_sqlite_store_set_many_is_all_or_nothing(tmp_db):
    store = SqliteStore(tmp_db)
    with pytest.raises(sqlite3.Error):
        store.set_many([("a", "1"), ("b", ["not", "bindable"])])
    assert store.get("a") is None


def test_sqlite_store_remove(tmp_db):
    store = SqliteStore(tmp_db)
    store.set("k", "v")
    store.remove("k")
    store.remove("k")  # removing a missing key is fine
    assert store.get("k") is None


def test_sqlite_store_persists_across_instances(tmp_db):
    SqliteStore(tmp_db).set("k", "v")
    assert SqliteStore(tmp_db).get("k") == "v"


def test_memory_store_roundtrip():
    store = MemoryStore()
    store.set("a", "1")
    assert store.get("a") == "1"
    store.set_many([("a", "2"), ("b", "3")])
    assert (store.get("a"), store.get("b")) == ("2", "3")
    store.remove("a")
    assert store.get("a") is None


def test_memory_store_copies_initial_data():
    data = {"a": "1"}
    store = MemoryStore(data)
    store.set("b", "2")
    assert data == {"a": "1"}
