from __future__ import annotations

import logging

from ..errors import (
    DuplicateEmailError,
    DuplicateKeyError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from ..store.base import Collection, Document
from .models import User
from .passwords import (
    DEFAULT_ROUNDS,
    PasswordHashError,
    PasswordTooLongError,
    hash_password,
    verify_password,
)
from .tokens import TokenService

logger = logging.getLogger(__name__)


def _to_user(doc: Document) -> User:
    return User(id=str(doc["_id"]), email=doc["email"], password_hash=doc["password"])


class UserStore:
    """Credential storage keyed by a unique email."""

    def __init__(self, collection: Collection, bcrypt_rounds: int = DEFAULT_ROUNDS) -> None:
        self._collection = collection
        self._rounds = bcrypt_rounds

    def ensure_indexes(self) -> None:
        self._collection.create_unique_index("email")

    def register_user(self, email: str, password: str) -> User:
        """Create a user.

        Raises DuplicateEmailError if the email is taken and ValidationError
        if the password is longer than bcrypt accepts.
        """
        if self._collection.find_one({"email": email}) is not None:
            raise DuplicateEmailError(email)

        try:
            hashed = hash_password(password, rounds=self._rounds)
        except PasswordTooLongError as exc:
            raise ValidationError(str(exc)) from exc

        doc = {"email": email, "password": hashed}
        try:
            stored = self._collection.insert_one(doc)
        except DuplicateKeyError as exc:
            # Lost a concurrent registration race; the unique index decides.
            raise DuplicateEmailError(email) from exc

        logger.info("Registered user %s", stored["_id"])
        return _to_user(stored)

    def find_by_email(self, email: str) -> User:
        doc = self._collection.find_one({"email": email})
        if doc is None:
            raise NotFoundError("User not found")
        return _to_user(doc)

    def delete_by_id(self, user_id: str) -> None:
        if not self._collection.delete_by_id(user_id):
            raise NotFoundError("User not found")
        logger.info("Deleted user %s", user_id)


def authenticate(users: UserStore, tokens: TokenService, email: str, password: str) -> str:
    """Verify credentials and return a fresh token.

    Unknown email, wrong password and an unreadable stored hash all raise the
    same InvalidCredentialsError so callers cannot tell which one failed.
    """
    try:
        user = users.find_by_email(email)
    except NotFoundError:
        logger.warning("Login failed: unknown email")
        raise InvalidCredentialsError() from None

    try:
        valid = verify_password(password, user.password_hash)
    except PasswordHashError:
        logger.warning("Login failed: stored hash for user %s is malformed", user.id)
        valid = False

    if not valid:
        logger.warning("Login failed: bad password for user %s", user.id)
        raise InvalidCredentialsError()

    return tokens.issue(user.id, user.email)
