# skincare_ai/auth/passwords.py
import os

from passlib.hash import bcrypt

from skincare_ai.utils.exceptions import StorageError, ValidationError

DEFAULT_HASH_ROUNDS = 12
HASH_ROUNDS = int(os.getenv("PASSWORD_HASH_ROUNDS", str(DEFAULT_HASH_ROUNDS)))
# bcrypt only reads the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72

_hasher = bcrypt.using(rounds=HASH_ROUNDS)


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    """Return a salted bcrypt digest of ``password``."""
    if not password:
        raise ValidationError("Password cannot be empty")
    if password_too_long(password):
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored digest.

    A wrong password is simply ``False``. Only a digest that is not a bcrypt
    hash at all (corrupted storage) raises. Nothing longer than 72 bytes can
    have been hashed, so such input never matches.
    """
    if not password or password_too_long(password):
        return False
    try:
        return bcrypt.verify(password, password_hash)
    except (ValueError, TypeError) as exc:
        raise StorageError("Stored password digest is malformed") from exc
