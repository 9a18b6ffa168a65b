"""Entry use cases. Every entry must point at an existing list."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from api.domain.models import Entry
from api.repositories.filedb import Database
from api.services.errors import EntryNotFoundError, ListNotFoundError

log = logging.getLogger(__name__)


def _by_id(entry_id: str):
    return lambda entry: entry.id == entry_id


class EntryService:
    def __init__(self, db: Database) -> None:
        self.db = db

    def _require_list(self, list_id: str) -> None:
        if self.db.lists.find_one(lambda todo_list: todo_list.id == list_id) is None:
            raise ListNotFoundError(list_id)

    def all(self) -> list[Entry]:
        return self.db.entries.get_all()

    def get(self, entry_id: str) -> Entry:
        entry = self.db.entries.find_one(_by_id(entry_id))
        if entry is None:
            raise EntryNotFoundError(entry_id)
        return entry

    def of_list(self, list_id: str) -> list[Entry]:
        return self.db.entries.find(lambda entry: entry.list_id == list_id)

    def create(self, list_id: str, name: str, done: bool = False) -> Entry:
        self._require_list(list_id)
        entry = Entry(id=str(uuid.uuid4()), list_id=list_id, name=name, done=done)
        self.db.entries.append(entry)
        log.info("created entry %s in list %s", entry.id, list_id)
        return entry

    def patch(
        self,
        entry_id: str,
        *,
        list_id: Optional[str] = None,
        name: Optional[str] = None,
        done: Optional[bool] = None,
    ) -> Entry:
        if list_id is not None:
            self._require_list(list_id)

        def apply(entry: Entry) -> None:
            if list_id is not None:
                entry.list_id = list_id
            if name is not None:
                entry.name = name
            if done is not None:
                entry.done = done

        patched = self.db.entries.patch_one(_by_id(entry_id), apply)
        if patched is None:
            raise EntryNotFoundError(entry_id)
        return patched

    def delete(self, entry_id: str) -> Entry:
        removed = self.db.entries.delete_one(_by_id(entry_id))
        if removed is None:
            raise EntryNotFoundError(entry_id)
        return removed
