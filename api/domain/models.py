"""Record types stored in the JSON collections and the payloads that touch them."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Record(BaseModel):
    """
    Serializable record with a stable identifier (``_id`` on disk).

    Unknown keys found in a collection file are kept and written back.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(alias="_id")

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class TodoList(Record):
    name: str


class Entry(Record):
    list_id: str = Field(alias="listId")
    name: str
    done: bool = False


class ListWithEntries(BaseModel):
    parent: TodoList
    children: list[Entry]


# -------------------------- request bodies --------------------------
# strict: "done": "yes" or "name": 5 are rejected instead of coerced
class ListCreate(BaseModel):
    model_config = ConfigDict(strict=True)

    name: str = Field(min_length=1)


class ListPatch(BaseModel):
    model_config = ConfigDict(strict=True)

    name: Optional[str] = None


class EntryCreate(BaseModel):
    model_config = ConfigDict(strict=True, populate_by_name=True)

    list_id: str = Field(alias="listId", min_length=1)
    name: str = Field(min_length=1)
    done: bool = False


class EntryPatch(BaseModel):
    model_config = ConfigDict(strict=True, populate_by_name=True)

    list_id: Optional[str] = Field(default=None, alias="listId")
    name: Optional[str] = None
    done: Optional[bool] = None
