from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Make the api package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def write_collection(directory: Path, name: str, records: list[dict]) -> Path:
    path = directory / f"{name}.json"
    path.write_text(json.dumps({"count": len(records), "data": records}), encoding="utf-8")
    return path


@pytest.fixture()
def data_dir(tmp_path):
    """Data directory seeded with empty list/entry collections."""
    write_collection(tmp_path, "list", [])
    write_collection(tmp_path, "entry", [])
    return tmp_path
