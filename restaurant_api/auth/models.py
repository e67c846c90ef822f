from __future__ import annotations

from pydantic import BaseModel, Field


class CredentialsRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class User(BaseModel):
    id: str
    email: str
    password_hash: str


class TokenResponse(BaseModel):
    token: str


class MessageResponse(BaseModel):
    message: str
