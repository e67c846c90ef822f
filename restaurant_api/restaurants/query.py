from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any


def contains_ignore_case(value: str) -> dict[str, str]:
    """Filter clause matching any string that contains ``value``, ignoring case."""
    return {"$regex": re.escape(value), "$options": "i"}


def fold_predicates(predicates: Iterable[tuple[str, str | None]]) -> dict[str, Any]:
    """Combine ordered ``(field, value)`` pairs into a single filter.

    Pairs whose value is ``None`` or empty leave the field unconstrained, so
    folding nothing yields ``{}``, which matches every document.
    """
    query: dict[str, Any] = {}
    for field, value in predicates:
        if value:
            query[field] = contains_ignore_case(value)
    return query


def build_search_filter(name: str | None = None, cuisine: str | None = None) -> dict[str, Any]:
    return fold_predicates([("name", name), ("cuisine", cuisine)])
