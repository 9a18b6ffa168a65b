"""
File-mirrored record collections.

A ``Collection`` keeps one record type in memory and rewrites its backing
``<directory>/<name>.json`` file after every mutation. Each mutation computes
the next sequence first, persists it, and only then swaps it in, so a failed
write leaves memory and disk at the last committed state.

Lookups are linear scans over the stored order.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Generic, Optional, Type, TypeVar

from pydantic import ValidationError

from api.core.locks import ReadWriteLock
from api.domain.models import Entry, Record, TodoList
from api.repositories.errors import StorageOpenError
from api.repositories.json_storage import container_path, read_container, write_container

log = logging.getLogger(__name__)

T = TypeVar("T", bound=Record)

Predicate = Callable[[T], bool]
Mutator = Callable[[T], None]


class Collection(Generic[T]):
    """Ordered, file-synchronized store for a single record type."""

    def __init__(self, name: str, directory: Path, record_type: Type[T], records: list[T]) -> None:
        self.name = name
        self.directory = Path(directory)
        self.record_type = record_type
        self._data: list[T] = records
        self._count = len(records)
        self._lock = ReadWriteLock()

    @classmethod
    def open(cls, name: str, directory: str | Path, record_type: Type[T]) -> "Collection[T]":
        """Load ``<directory>/<name>.json``. The file must already exist."""
        path = container_path(directory, name)
        doc = read_container(path)
        try:
            records = [record_type.model_validate(item) for item in doc["data"]]
        except ValidationError as exc:
            raise StorageOpenError(f"{path} holds records that are not {record_type.__name__}: {exc}", path) from exc
        log.info("opened collection %s (%d records) from %s", name, len(records), path)
        return cls(name, Path(directory), record_type, records)

    @property
    def path(self) -> Path:
        return container_path(self.directory, self.name)

    # -------------------------- reads --------------------------
    def find_one(self, predicate: Predicate) -> Optional[T]:
        with self._lock.read():
            for record in self._data:
                if predicate(record):
                    return record.model_copy(deep=True)
        return None

    def find(self, predicate: Predicate) -> list[T]:
        with self._lock.read():
            return [r.model_copy(deep=True) for r in self._data if predicate(r)]

    def get_all(self) -> list[T]:
        with self._lock.read():
            return [r.model_copy(deep=True) for r in self._data]

    def count(self) -> int:
        with self._lock.read():
            return self._count

    # -------------------------- writes --------------------------
    def append(self, record: T) -> None:
        with self._lock.write():
            self._commit(self._data + [record.model_copy(deep=True)])

    def delete_one(self, predicate: Predicate) -> Optional[T]:
        with self._lock.write():
            index = self._index_of(predicate)
            if index is None:
                return None
            removed = self._data[index]
            self._commit(self._data[:index] + self._data[index + 1:])
            return removed.model_copy(deep=True)

    def delete_many(self, predicate: Predicate) -> int:
        with self._lock.write():
            kept = [r for r in self._data if not predicate(r)]
            removed = len(self._data) - len(kept)
            if removed:
                self._commit(kept)
            return removed

    def patch_one(self, predicate: Predicate, mutator: Mutator) -> Optional[T]:
        """Apply ``mutator`` to the first match and persist; returns a copy of the result."""
        with self._lock.write():
            index = self._index_of(predicate)
            if index is None:
                return None
            patched = self._data[index].model_copy(deep=True)
            mutator(patched)
            updated = list(self._data)
            updated[index] = patched
            self._commit(updated)
            return patched.model_copy(deep=True)

    def put_one(self, predicate: Predicate, record: T) -> bool:
        """Replace the first match wholesale. Returns False (no write) when nothing matches."""
        with self._lock.write():
            index = self._index_of(predicate)
            if index is None:
                return False
            updated = list(self._data)
            updated[index] = record.model_copy(deep=True)
            self._commit(updated)
            return True

    # -------------------------- internals --------------------------
    def _index_of(self, predicate: Predicate) -> Optional[int]:
        for i, record in enumerate(self._data):
            if predicate(record):
                return i
        return None

    def _commit(self, records: list[T]) -> None:
        # caller holds the write lock
        try:
            write_container(self.path, [r.to_document() for r in records])
        except Exception:
            log.exception("failed to persist collection %s", self.name)
            raise
        self._data = records
        self._count = len(records)


class Database:
    """The two collections of the todo store: lists and their entries."""

    LIST_COLLECTION = "list"
    ENTRY_COLLECTION = "entry"

    def __init__(self, directory: Path, lists: Collection[TodoList], entries: Collection[Entry]) -> None:
        self.directory = directory
        self._lists = lists
        self._entries = entries

    @classmethod
    def open(cls, directory: str | Path) -> "Database":
        directory = Path(directory)
        lists = Collection.open(cls.LIST_COLLECTION, directory, TodoList)
        entries = Collection.open(cls.ENTRY_COLLECTION, directory, Entry)
        return cls(directory, lists, entries)

    @property
    def lists(self) -> Collection[TodoList]:
        return self._lists

    @property
    def entries(self) -> Collection[Entry]:
        return self._entries

    def delete_list_cascade(self, list_id: str) -> tuple[Optional[TodoList], int]:
        """
        Delete the entries of ``list_id`` and then the list itself.

        Two independent commits: if the second one fails, the entries are
        already gone while the list remains.
        """
        removed_entries = self._entries.delete_many(lambda e: e.list_id == list_id)
        removed_list = self._lists.delete_one(lambda todo_list: todo_list.id == list_id)
        log.info("cascade delete of list %s removed %d entries (list found: %s)",
                 list_id, removed_entries, removed_list is not None)
        return removed_list, removed_entries
