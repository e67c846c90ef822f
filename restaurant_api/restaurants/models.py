from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class Address(BaseModel):
    building: str | None = None
    street: str | None = None
    zipcode: str | None = None


class Grade(BaseModel):
    date: datetime | None = None
    grade: str | None = None
    score: int | float | None = None


class RestaurantIn(BaseModel):
    address: Address | None = None
    borough: str | None = None
    cuisine: str | None = None
    grades: list[Grade] = Field(default_factory=list)
    name: str | None = None
    restaurant_id: str | None = None


class RestaurantOut(RestaurantIn):
    id: str
