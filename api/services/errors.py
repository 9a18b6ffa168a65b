"""Use-case level errors shared by the list/entry services."""

from __future__ import annotations


class NotFoundError(Exception):
    """Base exception for missing records."""

    message = "Not found"

    def __init__(self, record_id: str) -> None:
        super().__init__(f"{self.message}: {record_id}")
        self.record_id = record_id


class ListNotFoundError(NotFoundError):
    """Raised when a list id does not match any stored list."""

    message = "List not found"


class EntryNotFoundError(NotFoundError):
    """Raised when an entry id does not match any stored entry."""

    message = "Entry not found"
