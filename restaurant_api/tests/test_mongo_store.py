from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError as PyMongoDuplicateKeyError
from pymongo.errors import ServerSelectionTimeoutError

from restaurant_api.errors import DuplicateKeyError, StorageError
from restaurant_api.store.mongo import MongoCollection


@pytest.fixture
def raw() -> MagicMock:
    mock = MagicMock()
    mock.name = "restaurants"
    return mock


def test_insert_returns_document_with_id(raw):
    oid = ObjectId()
    raw.insert_one.return_value.inserted_id = oid
    doc = MongoCollection(raw).insert_one({"name": "a"})
    assert doc == {"_id": oid, "name": "a"}


def test_find_by_unparseable_id_skips_the_server(raw):
    assert MongoCollection(raw).find_by_id("nope") is None
    raw.find_one.assert_not_called()


def test_replace_uses_find_one_and_replace(raw):
    oid = ObjectId()
    raw.find_one_and_replace.return_value = {"_id": oid, "name": "b"}
    doc = MongoCollection(raw).replace_by_id(str(oid), {"_id": "ignored", "name": "b"})
    assert doc == {"_id": oid, "name": "b"}
    args = raw.find_one_and_replace.call_args.args
    assert args == ({"_id": oid}, {"name": "b"})


def test_delete_reports_deleted_count(raw):
    raw.delete_one.return_value.deleted_count = 0
    assert MongoCollection(raw).delete_by_id(str(ObjectId())) is False


def test_server_errors_become_storage_errors(raw):
    raw.find.side_effect = ServerSelectionTimeoutError("no servers")
    with pytest.raises(StorageError) as excinfo:
        MongoCollection(raw).find({})
    assert "no servers" in excinfo.value.details


def test_duplicate_key_is_translated(raw):
    raw.insert_one.side_effect = PyMongoDuplicateKeyError(
        "E11000 duplicate key",
        code=11000,
        details={"keyValue": {"email": "a@b.c"}},
    )
    with pytest.raises(DuplicateKeyError) as excinfo:
        MongoCollection(raw).insert_one({"email": "a@b.c"})
    assert excinfo.value.field == "email"
    assert excinfo.value.value == "a@b.c"


def test_create_unique_index(raw):
    MongoCollection(raw).create_unique_index("email")
    raw.create_index.assert_called_once_with("email", unique=True)
