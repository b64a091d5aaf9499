# tests/test_db.py
import json
import os
import stat
import threading
from pathlib import Path

import pytest

from taskboard.core.errors import StoreError
from taskboard.db import JsonFileStore, MemoryStore


def test_read_returns_copies() -> None:
    store = MemoryStore()
    store.write("projects", [{"id": "p1", "name": "P1"}])

    projects = store.read("projects")
    projects[0]["name"] = "changed"
    projects.append({"id": "p2"})

    assert store.read("projects") == [{"id": "p1", "name": "P1"}]


def test_unknown_collection_rejected() -> None:
    store = MemoryStore()
    with pytest.raises(KeyError):
        store.read("comments")
    with pytest.raises(KeyError):
        store.write("comments", [])


def test_transaction_rolls_back_on_error() -> None:
    store = MemoryStore()
    store.write("projects", [{"id": "p1"}])
    store.write("tasks", [{"id": "t1", "projectId": "p1"}])

    with pytest.raises(RuntimeError):
        with store.transaction() as data:
            data["tasks"] = []
            data["projects"] = []
            raise RuntimeError("boom")

    assert store.read("projects") == [{"id": "p1"}]
    assert store.read("tasks") == [{"id": "t1", "projectId": "p1"}]


def test_transaction_commits_all_collections_together() -> None:
    store = MemoryStore()
    with store.transaction() as data:
        data["projects"].append({"id": "p1"})
        data["tasks"].append({"id": "t1", "projectId": "p1"})

    assert store.counts() == {"users": 0, "projects": 1, "tasks": 1}


def test_json_store_creates_directory_and_reloads(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "storage.json"
    store = JsonFileStore(path)
    assert not path.exists()

    store.write("users", [{"id": "u1", "email": "a@x.com"}])

    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk == {"users": [{"id": "u1", "email": "a@x.com"}], "projects": [], "tasks": []}

    reopened = JsonFileStore(path)
    assert reopened.read("users") == [{"id": "u1", "email": "a@x.com"}]


def test_json_store_leaves_no_temp_files(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    store = JsonFileStore(path)
    for i in range(3):
        store.write("projects", [{"id": str(i)}])

    assert sorted(p.name for p in tmp_path.iterdir()) == ["storage.json"]


def test_json_store_missing_collections_default_to_empty(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({"users": [{"id": "u1"}]}), encoding="utf-8")

    store = JsonFileStore(path)

    assert store.counts() == {"users": 1, "projects": 0, "tasks": 0}


def test_json_store_moves_corrupt_file_aside(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("{not json", encoding="utf-8")

    store = JsonFileStore(path)

    assert store.counts() == {"users": 0, "projects": 0, "tasks": 0}
    assert not path.exists()
    backups = [p for p in tmp_path.iterdir() if p.name.startswith("storage.json.corrupt-")]
    assert len(backups) == 1
    assert backups[0].read_text(encoding="utf-8") == "{not json"


def test_json_store_failed_persist_keeps_previous_state(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    store = JsonFileStore(path)
    store.write("projects", [{"id": "p1"}])

    # A directory in place of the file makes os.replace fail.
    path.unlink()
    path.mkdir()

    with pytest.raises(StoreError):
        store.write("projects", [{"id": "p1"}, {"id": "p2"}])

    assert store.read("projects") == [{"id": "p1"}]
    assert [p.name for p in tmp_path.iterdir()] == ["storage.json"]


def test_json_store_fsyncs_file_and_directory(tmp_path: Path, monkeypatch) -> None:
    store = JsonFileStore(tmp_path / "storage.json")
    real_fsync = os.fsync
    synced = []

    def recording_fsync(fd: int) -> None:
        synced.append(stat.S_ISDIR(os.fstat(fd).st_mode))
        real_fsync(fd)

    monkeypatch.setattr(os, "fsync", recording_fsync)
    store.write("projects", [{"id": "p1"}])

    # Temp file first, then the directory holding the renamed file.
    assert synced == [False, True]


def test_concurrent_transactions_keep_every_append(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path / "storage.json")
    n = 30
    barrier = threading.Barrier(n)

    def worker(i: int) -> None:
        barrier.wait()
        with store.transaction() as data:
            data["projects"].append({"id": f"p{i}"})

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    expected = sorted(f"p{i}" for i in range(n))
    assert sorted(p["id"] for p in store.read("projects")) == expected
    assert sorted(p["id"] for p in JsonFileStore(store.path).read("projects")) == expected
