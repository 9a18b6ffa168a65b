#!/usr/bin/env python3
"""
Create the data directory and empty collection files for the todo API.

Usage:
  python scripts/init_data.py [--data-dir data]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from api.core.config import get_settings
from api.repositories.filedb import Database
from api.repositories.json_storage import container_path, ensure_container


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed the JSON collection files")
    ap.add_argument("--data-dir", help="Target directory (default: DATA_DIR or ./data)")
    args = ap.parse_args()

    data_dir = Path((args.data_dir or "").strip() or get_settings().data_dir)
    for name in (Database.LIST_COLLECTION, Database.ENTRY_COLLECTION):
        path = container_path(data_dir, name)
        if ensure_container(path):
            print(f"OK: created {path}")
        else:
            print(f"skip: {path} already exists")

    # make sure the seeded directory opens cleanly
    db = Database.open(data_dir)
    print(f"  lists: {db.lists.count()}  entries: {db.entries.count()}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
