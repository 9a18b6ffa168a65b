"""
JSON codec for collection files.

Every collection lives in ``<directory>/<name>.json`` with the layout::

    {"count": <int>, "data": [<record>, ...]}

``count`` is always rewritten from ``len(data)`` on save.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from api.repositories.errors import StorageOpenError, StoragePersistError


def container_path(directory: str | Path, name: str) -> Path:
    return Path(directory) / f"{name}.json"


def empty_container() -> dict:
    return {"count": 0, "data": []}


def read_container(path: Path) -> dict:
    """Read and parse a collection file. No fallback when it is missing."""
    try:
        with path.open("r", encoding="utf-8") as f:
            doc = json.load(f)
    except FileNotFoundError as exc:
        raise StorageOpenError(f"collection file not found: {path}", path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise StorageOpenError(f"cannot read collection file {path}: {exc}", path) from exc
    except json.JSONDecodeError as exc:
        raise StorageOpenError(f"invalid JSON in {path}: {exc}", path) from exc

    if not isinstance(doc, dict) or not isinstance(doc.get("data"), list):
        raise StorageOpenError(f"{path} is not a {{count, data}} document", path)
    count = doc.get("count")
    if count is not None and (not isinstance(count, int) or isinstance(count, bool) or count < 0):
        raise StorageOpenError(f"{path} has an invalid count: {count!r}", path)
    return {"count": len(doc["data"]), "data": doc["data"]}


def write_container(path: Path, data: list[Any]) -> None:
    """Serialize ``data`` and atomically replace ``path`` with it."""
    try:
        payload = json.dumps({"count": len(data), "data": data}, ensure_ascii=False, indent=2)
    except (TypeError, ValueError) as exc:
        raise StoragePersistError(f"cannot serialize {path.name}: {exc}", path) from exc

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
        raise StoragePersistError(f"cannot write {path}: {exc}", path) from exc


def ensure_container(path: Path) -> bool:
    """Create an empty collection file if none exists. Returns True when created."""
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    write_container(path, empty_container()["data"])
    return True
