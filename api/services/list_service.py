"""List use cases (lookups, creation, renaming, cascade delete)."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from api.domain.models import ListWithEntries, TodoList
from api.repositories.filedb import Database
from api.services.errors import ListNotFoundError

log = logging.getLogger(__name__)


def _by_id(list_id: str):
    return lambda todo_list: todo_list.id == list_id


class ListService:
    """Orchestrates the list collection (and the entry collection on delete)."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def all(self) -> list[TodoList]:
        return self.db.lists.get_all()

    def get(self, list_id: str) -> TodoList:
        todo_list = self.db.lists.find_one(_by_id(list_id))
        if todo_list is None:
            raise ListNotFoundError(list_id)
        return todo_list

    def get_with_entries(self, list_id: str) -> ListWithEntries:
        todo_list = self.get(list_id)
        entries = self.db.entries.find(lambda entry: entry.list_id == list_id)
        return ListWithEntries(parent=todo_list, children=entries)

    def create(self, name: str) -> TodoList:
        todo_list = TodoList(id=str(uuid.uuid4()), name=name)
        self.db.lists.append(todo_list)
        log.info("created list %s", todo_list.id)
        return todo_list

    def patch(self, list_id: str, name: Optional[str] = None) -> TodoList:
        def apply(todo_list: TodoList) -> None:
            if name is not None:
                todo_list.name = name

        patched = self.db.lists.patch_one(_by_id(list_id), apply)
        if patched is None:
            raise ListNotFoundError(list_id)
        return patched

    def delete(self, list_id: str) -> TodoList:
        """Delete a list and every entry referencing it."""
        removed, _ = self.db.delete_list_cascade(list_id)
        if removed is None:
            raise ListNotFoundError(list_id)
        return removed
