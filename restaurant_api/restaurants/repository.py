from __future__ import annotations

import logging

from ..errors import NotFoundError
from ..store.base import Collection, Document
from .models import RestaurantIn, RestaurantOut
from .query import build_search_filter

logger = logging.getLogger(__name__)

RESTAURANT_NOT_FOUND = "Restaurant not found"
NO_SEARCH_MATCHES = "No restaurants found matching the search criteria"


def _to_document(restaurant: RestaurantIn) -> Document:
    return restaurant.model_dump(exclude_none=True)


def _to_restaurant(doc: Document) -> RestaurantOut:
    fields = {k: v for k, v in doc.items() if k != "_id"}
    return RestaurantOut(id=str(doc["_id"]), **fields)


class RestaurantRepository:
    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def create(self, restaurant: RestaurantIn) -> RestaurantOut:
        stored = self._collection.insert_one(_to_document(restaurant))
        logger.info("Created restaurant %s", stored["_id"])
        return _to_restaurant(stored)

    def list_all(self) -> list[RestaurantOut]:
        return [_to_restaurant(d) for d in self._collection.find()]

    def get(self, restaurant_id: str) -> RestaurantOut:
        doc = self._collection.find_by_id(restaurant_id)
        if doc is None:
            raise NotFoundError(RESTAURANT_NOT_FOUND)
        return _to_restaurant(doc)

    def replace(self, restaurant_id: str, restaurant: RestaurantIn) -> RestaurantOut:
        """Overwrite the whole document; fields missing from ``restaurant`` are dropped."""
        doc = self._collection.replace_by_id(restaurant_id, _to_document(restaurant))
        if doc is None:
            raise NotFoundError(RESTAURANT_NOT_FOUND)
        return _to_restaurant(doc)

    def delete(self, restaurant_id: str) -> None:
        if not self._collection.delete_by_id(restaurant_id):
            raise NotFoundError(RESTAURANT_NOT_FOUND)
        logger.info("Deleted restaurant %s", restaurant_id)

    def search(self, name: str | None = None, cuisine: str | None = None) -> list[RestaurantOut]:
        """Case-insensitive substring search.

        An empty result raises NotFoundError (404) rather than returning ``[]``.
        """
        docs = self._collection.find(build_search_filter(name=name, cuisine=cuisine))
        if not docs:
            raise NotFoundError(NO_SEARCH_MATCHES)
        return [_to_restaurant(d) for d in docs]
