from __future__ import annotations

from typing import Any, Protocol

from bson import ObjectId
from bson.errors import InvalidId

Document = dict[str, Any]


def parse_id(doc_id: str | ObjectId) -> ObjectId | None:
    """Return the ObjectId for ``doc_id``, or None when it cannot identify a document."""
    if isinstance(doc_id, ObjectId):
        return doc_id
    try:
        return ObjectId(doc_id)
    except (InvalidId, TypeError):
        return None


class Collection(Protocol):
    def find(self, query: Document | None = None) -> list[Document]: ...

    def find_one(self, query: Document) -> Document | None: ...

    def find_by_id(self, doc_id: str) -> Document | None: ...

    def insert_one(self, document: Document) -> Document: ...

    def replace_by_id(self, doc_id: str, document: Document) -> Document | None: ...

    def delete_by_id(self, doc_id: str) -> bool: ...

    def create_unique_index(self, field: str) -> None: ...


class Database(Protocol):
    def collection(self, name: str) -> Collection: ...

    def close(self) -> None: ...
