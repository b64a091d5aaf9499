# taskboard/db.py
import copy
import json
import logging
import os
import tempfile
import threading
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Union

from .core.errors import StoreError

logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "projects", "tasks")

Record = Dict[str, object]
Dataset = Dict[str, List[Record]]


def empty_dataset() -> Dataset:
    return {name: [] for name in COLLECTIONS}


class BaseStore(ABC):
    """
    Holds the users/projects/tasks collections in memory.

    Every change goes through ``transaction()``: the lock is held for the whole
    read-modify-write, the full dataset is persisted first and only then
    becomes the live in-memory state.
    """

    def __init__(self, data: Dataset = None):
        self._lock = threading.RLock()
        self._data = data if data is not None else empty_dataset()

    @staticmethod
    def _check_collection(collection: str) -> None:
        if collection not in COLLECTIONS:
            raise KeyError(f"unknown collection: {collection}")

    def read(self, collection: str) -> List[Record]:
        self._check_collection(collection)
        with self._lock:
            return copy.deepcopy(self._data[collection])

    def write(self, collection: str, records: Iterable[Record]) -> None:
        self._check_collection(collection)
        with self.transaction() as data:
            data[collection] = list(records)

    def snapshot(self) -> Dataset:
        """Consistent copy of all collections."""
        with self._lock:
            return copy.deepcopy(self._data)

    @contextmanager
    def transaction(self) -> Iterator[Dataset]:
        with self._lock:
            snapshot = copy.deepcopy(self._data)
            yield snapshot
            for name in COLLECTIONS:
                if not isinstance(snapshot.get(name), list):
                    raise StoreError(f"collection {name} must be a list")
            self._persist(snapshot)
            self._data = snapshot

    def counts(self) -> Dict[str, int]:
        with self._lock:
            return {name: len(self._data[name]) for name in COLLECTIONS}

    @abstractmethod
    def _persist(self, data: Dataset) -> None:
        """Durably store the full dataset or raise StoreError."""


class MemoryStore(BaseStore):
    """Store without persistence; state lives as long as the object."""

    def _persist(self, data: Dataset) -> None:
        return


class JsonFileStore(BaseStore):
    """
    Store backed by a single JSON file ``{"users": [], "projects": [], "tasks": []}``.

    The file is read once at construction. Each commit rewrites the whole file
    through a temp file + ``os.replace`` so a crash never leaves a truncated file.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        super().__init__(self._load())
        logger.info("JsonFileStore ready path=%s counts=%s", self._path, self.counts())

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dataset:
        if not self._path.exists():
            return empty_dataset()
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            return self._validate(raw)
        except (ValueError, TypeError) as e:
            aside = self._path.with_name(f"{self._path.name}.corrupt-{int(time.time())}")
            logger.error("Storage file %s is unreadable (%s); moved to %s", self._path, e, aside)
            os.replace(self._path, aside)
            return empty_dataset()

    @staticmethod
    def _validate(raw) -> Dataset:
        if not isinstance(raw, dict):
            raise ValueError("top-level value must be an object")
        data = empty_dataset()
        for name in COLLECTIONS:
            value = raw.get(name, [])
            if not isinstance(value, list):
                raise ValueError(f"{name} must be an array")
            data[name] = value
        return data

    def _fsync_dir(self) -> None:
        """Flush the directory entry so the rename itself survives a power loss."""
        dir_fd = os.open(str(self._path.parent), os.O_RDONLY)
        try:
            os.fsync(dir_fd)
        finally:
            os.close(dir_fd)

    def _persist(self, data: Dataset) -> None:
        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=str(self._path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
            tmp_name = None
            self._fsync_dir()
        except OSError as e:
            logger.exception("Failed to persist storage to %s", self._path)
            raise StoreError(f"failed to persist storage: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
