from __future__ import annotations

import copy
import re
import threading
from typing import Any

from bson import ObjectId

from ..errors import DuplicateKeyError
from .base import Document, parse_id

_REGEX_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}


def _regex_matches(condition: dict[str, Any], value: Any) -> bool:
    if not isinstance(value, str):
        return False
    flags = 0
    for opt in condition.get("$options", ""):
        flags |= _REGEX_FLAGS.get(opt, 0)
    return re.search(condition["$regex"], value, flags) is not None


def matches(document: Document, query: Document) -> bool:
    """Evaluate the subset of MongoDB filter syntax the API produces."""
    for field, condition in query.items():
        value = document.get(field)
        if isinstance(condition, dict) and "$regex" in condition:
            if not _regex_matches(condition, value):
                return False
        elif value != condition:
            return False
    return True


class MemoryCollection:
    """In-process collection. Operations are serialised so each is atomic."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._docs: dict[ObjectId, Document] = {}
        self._unique_fields: set[str] = set()
        self._lock = threading.Lock()

    def _check_unique(self, document: Document, exclude: ObjectId | None = None) -> None:
        for field in self._unique_fields:
            if field not in document:
                continue
            for oid, existing in self._docs.items():
                if oid != exclude and existing.get(field) == document[field]:
                    raise DuplicateKeyError(field, document[field])

    def find(self, query: Document | None = None) -> list[Document]:
        query = query or {}
        with self._lock:
            return [copy.deepcopy(d) for d in self._docs.values() if matches(d, query)]

    def find_one(self, query: Document) -> Document | None:
        with self._lock:
            for doc in self._docs.values():
                if matches(doc, query):
                    return copy.deepcopy(doc)
        return None

    def find_by_id(self, doc_id: str) -> Document | None:
        oid = parse_id(doc_id)
        if oid is None:
            return None
        with self._lock:
            doc = self._docs.get(oid)
            return copy.deepcopy(doc) if doc is not None else None

    def insert_one(self, document: Document) -> Document:
        stored = copy.deepcopy(document)
        stored.setdefault("_id", ObjectId())
        with self._lock:
            self._check_unique(stored)
            self._docs[stored["_id"]] = stored
        return copy.deepcopy(stored)

    def replace_by_id(self, doc_id: str, document: Document) -> Document | None:
        oid = parse_id(doc_id)
        if oid is None:
            return None
        stored = copy.deepcopy(document)
        stored["_id"] = oid
        with self._lock:
            if oid not in self._docs:
                return None
            self._check_unique(stored, exclude=oid)
            self._docs[oid] = stored
        return copy.deepcopy(stored)

    def delete_by_id(self, doc_id: str) -> bool:
        oid = parse_id(doc_id)
        if oid is None:
            return False
        with self._lock:
            return self._docs.pop(oid, None) is not None

    def create_unique_index(self, field: str) -> None:
        with self._lock:
            self._unique_fields.add(field)

    def count(self) -> int:
        with self._lock:
            return len(self._docs)


class MemoryDatabase:
    def __init__(self) -> None:
        self._collections: dict[str, MemoryCollection] = {}

    def collection(self, name: str) -> MemoryCollection:
        if name not in self._collections:
            self._collections[name] = MemoryCollection(name)
        return self._collections[name]

    def close(self) -> None:
        self._collections.clear()
