"""Errors raised by the file-backed storage layer."""

from __future__ import annotations

from pathlib import Path


class StorageError(Exception):
    """Base exception for the JSON file store."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class StorageOpenError(StorageError):
    """Raised when a backing file is missing, unreadable or undecodable."""


class StoragePersistError(StorageError):
    """Raised when writing a backing file fails."""
