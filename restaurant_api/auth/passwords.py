from __future__ import annotations

import bcrypt

DEFAULT_ROUNDS = 10

# bcrypt only reads the first 72 bytes; bcrypt>=5 rejects longer input.
MAX_PASSWORD_BYTES = 72


class PasswordHashError(ValueError):
    """The stored hash is not a valid bcrypt string."""


class PasswordTooLongError(ValueError):
    pass


def hash_password(plain: str, rounds: int = DEFAULT_ROUNDS) -> str:
    encoded = plain.encode()
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise PasswordTooLongError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(plain: str, hashed: str) -> bool:
    encoded = plain.encode()
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, hashed.encode())
    except ValueError as exc:
        raise PasswordHashError(str(exc)) from exc
