"""
Behaviour of the file-mirrored Collection.
"""
from __future__ import annotations

import json
import threading

import pytest

from api.domain.models import Record
from api.repositories import filedb
from api.repositories.errors import StorageOpenError, StoragePersistError
from api.repositories.filedb import Collection

from conftest import write_collection


class Item(Record):
    x: int
    tags: list[str] = []


@pytest.fixture()
def items(tmp_path):
    write_collection(tmp_path, "item", [])
    return Collection.open("item", tmp_path, Item)


def _on_disk(collection: Collection) -> dict:
    return json.loads(collection.path.read_text(encoding="utf-8"))


def _ids(records) -> list[str]:
    return [r.id for r in records]


def test_open_requires_existing_file(tmp_path):
    with pytest.raises(StorageOpenError):
        Collection.open("item", tmp_path, Item)


def test_open_rejects_records_of_wrong_shape(tmp_path):
    write_collection(tmp_path, "item", [{"_id": "a", "x": "not-a-number"}])
    with pytest.raises(StorageOpenError):
        Collection.open("item", tmp_path, Item)


def test_round_trip_through_reopen(items, tmp_path):
    for i, x in enumerate([3, 1, 2]):
        items.append(Item(id=f"r{i}", x=x))

    reopened = Collection.open("item", tmp_path, Item)
    assert reopened.get_all() == items.get_all()
    assert reopened.count() == len(reopened.get_all()) == 3
    assert _on_disk(reopened)["count"] == 3


def test_append_preserves_order(items):
    records = [Item(id="R1", x=1), Item(id="R2", x=2), Item(id="R3", x=3)]
    for record in records:
        items.append(record)
    assert items.get_all() == records
    assert _on_disk(items)["data"] == [r.to_document() for r in records]


def test_find_one_and_find(items):
    for i, x in enumerate([1, 2, 1]):
        items.append(Item(id=f"r{i}", x=x))

    assert items.find_one(lambda r: r.x == 1).id == "r0"
    assert items.find_one(lambda r: r.x == 9) is None
    assert _ids(items.find(lambda r: r.x == 1)) == ["r0", "r2"]
    assert items.find(lambda r: r.x == 9) == []


def test_delete_many_removes_every_match(items):
    for rid, x in [("A", 1), ("B", 2), ("C", 1), ("D", 1)]:
        items.append(Item(id=rid, x=x))

    assert items.delete_many(lambda r: r.x == 1) == 3
    assert _ids(items.get_all()) == ["B"]
    assert items.count() == 1
    assert _on_disk(items) == {"count": 1, "data": [{"_id": "B", "x": 2, "tags": []}]}


def test_delete_one_removes_first_match_and_keeps_order(items):
    for rid, x in [("A", 1), ("B", 2), ("C", 1), ("D", 3)]:
        items.append(Item(id=rid, x=x))

    removed = items.delete_one(lambda r: r.x == 1)
    assert removed.id == "A"
    assert _ids(items.get_all()) == ["B", "C", "D"]
    assert _on_disk(items)["count"] == 3


def test_patch_one_is_visible_to_later_reads(items):
    items.append(Item(id="a", x=1))
    items.append(Item(id="b", x=2))

    def bump(record):
        record.x = 10

    patched = items.patch_one(lambda r: r.x == 1, bump)
    assert patched.x == 10
    assert items.find_one(lambda r: r.x == 1) is None
    assert items.find_one(lambda r: r.id == "a").x == 10
    assert _on_disk(items)["data"][0]["x"] == 10


def test_put_one_replaces_first_match(items):
    items.append(Item(id="a", x=1))
    assert items.put_one(lambda r: r.id == "a", Item(id="a", x=5, tags=["new"])) is True
    assert items.find_one(lambda r: r.id == "a") == Item(id="a", x=5, tags=["new"])
    assert items.put_one(lambda r: r.id == "zzz", Item(id="zzz", x=0)) is False
    assert _ids(items.get_all()) == ["a"]


def test_returned_records_are_copies(items):
    original = Item(id="a", x=1, tags=["t"])
    items.append(original)
    original.x = 99

    from_all = items.get_all()[0]
    from_all.x = 50
    from_all.tags.append("leak")
    items.find_one(lambda r: r.id == "a").tags.append("leak")
    patched = items.patch_one(lambda r: r.id == "a", lambda r: setattr(r, "x", 2))
    patched.x = 77
    patched.tags.append("leak")

    stored = items.find_one(lambda r: r.id == "a")
    assert stored.x == 2
    assert stored.tags == ["t"]
    assert items.find(lambda r: r.id == "a") == [stored]


def test_absence_is_not_failure_and_writes_nothing(items, monkeypatch):
    items.append(Item(id="a", x=1))

    def fail(*args, **kwargs):
        raise AssertionError("unexpected write")

    monkeypatch.setattr(filedb, "write_container", fail)
    no_match = lambda r: r.id == "missing"  # noqa: E731
    assert items.find_one(no_match) is None
    assert items.delete_one(no_match) is None
    assert items.patch_one(no_match, lambda r: setattr(r, "x", 0)) is None
    assert items.put_one(no_match, Item(id="missing", x=0)) is False
    assert items.delete_many(no_match) == 0


def test_failed_write_leaves_memory_and_disk_unchanged(items, monkeypatch):
    items.append(Item(id="a", x=1))
    before_disk = _on_disk(items)

    def fail(path, data):
        raise StoragePersistError("disk full", path)

    monkeypatch.setattr(filedb, "write_container", fail)
    with pytest.raises(StoragePersistError):
        items.append(Item(id="b", x=2))
    with pytest.raises(StoragePersistError):
        items.patch_one(lambda r: r.id == "a", lambda r: setattr(r, "x", 5))
    with pytest.raises(StoragePersistError):
        items.delete_many(lambda r: True)

    assert items.get_all() == [Item(id="a", x=1)]
    assert items.count() == 1
    assert _on_disk(items) == before_disk


def test_concurrent_appends_do_not_lose_updates(items, tmp_path):
    def worker(offset):
        for i in range(20):
            items.append(Item(id=f"{offset}-{i}", x=i))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert items.count() == 100
    reopened = Collection.open("item", tmp_path, Item)
    assert sorted(_ids(reopened.get_all())) == sorted(_ids(items.get_all()))
