from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

from pymongo import MongoClient, ReturnDocument
from pymongo.collection import Collection as PyMongoCollection
from pymongo.errors import DuplicateKeyError as PyMongoDuplicateKeyError
from pymongo.errors import PyMongoError

from ..errors import DuplicateKeyError, StorageError
from .base import Document, parse_id

logger = logging.getLogger(__name__)

T = TypeVar("T")


@contextmanager
def _translate_errors(action: str) -> Iterator[None]:
    try:
        yield
    except PyMongoDuplicateKeyError as exc:
        key_value = (exc.details or {}).get("keyValue") or {}
        field, value = next(iter(key_value.items()), ("unknown", None))
        raise DuplicateKeyError(field, value) from exc
    except PyMongoError as exc:
        raise StorageError(f"Error {action}", details=str(exc)) from exc


class MongoCollection:
    def __init__(self, collection: PyMongoCollection) -> None:
        self._collection = collection

    @property
    def name(self) -> str:
        return self._collection.name

    def _run(self, action: str, op: Callable[[], T]) -> T:
        with _translate_errors(action):
            return op()

    def find(self, query: Document | None = None) -> list[Document]:
        return self._run(f"reading {self.name}", lambda: list(self._collection.find(query or {})))

    def find_one(self, query: Document) -> Document | None:
        return self._run(f"reading {self.name}", lambda: self._collection.find_one(query))

    def find_by_id(self, doc_id: str) -> Document | None:
        oid = parse_id(doc_id)
        if oid is None:
            return None
        return self.find_one({"_id": oid})

    def insert_one(self, document: Document) -> Document:
        stored = dict(document)
        result = self._run(f"writing {self.name}", lambda: self._collection.insert_one(stored))
        stored["_id"] = result.inserted_id
        return stored

    def replace_by_id(self, doc_id: str, document: Document) -> Document | None:
        oid = parse_id(doc_id)
        if oid is None:
            return None
        replacement = {k: v for k, v in document.items() if k != "_id"}
        return self._run(
            f"writing {self.name}",
            lambda: self._collection.find_one_and_replace(
                {"_id": oid}, replacement, return_document=ReturnDocument.AFTER,
            ),
        )

    def delete_by_id(self, doc_id: str) -> bool:
        oid = parse_id(doc_id)
        if oid is None:
            return False
        result = self._run(f"deleting from {self.name}", lambda: self._collection.delete_one({"_id": oid}))
        return result.deleted_count == 1

    def create_unique_index(self, field: str) -> None:
        self._run(
            f"indexing {self.name}",
            lambda: self._collection.create_index(field, unique=True),
        )


class MongoDatabase:
    """Long-lived MongoDB handle shared by every request."""

    def __init__(self, uri: str, database: str) -> None:
        # MongoClient connects lazily on the first operation.
        self._client: MongoClient = MongoClient(uri)
        self._db = self._client[database]
        logger.info("Using MongoDB database '%s'", database)

    def collection(self, name: str) -> MongoCollection:
        return MongoCollection(self._db[name])

    def close(self) -> None:
        self._client.close()
