from __future__ import annotations

import logging
import os
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from skincare_ai.auth.passwords import (
    MAX_PASSWORD_BYTES,
    hash_password,
    password_too_long,
    verify_password,
)
from skincare_ai.auth.schemas import MIN_PASSWORD_LENGTH
from skincare_ai.models.account import Account, Role
from skincare_ai.utils.exceptions import DuplicateEmail, StorageError, ValidationError

logger = logging.getLogger("skincare_ai")

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@skincare-ai.com")
# Documented demo credential for the bootstrap admin.
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")


def find_by_email(db: Session, email: str) -> Optional[Account]:
    return db.query(Account).filter(Account.email == email).first()


def find_by_id(db: Session, account_id: str) -> Optional[Account]:
    return db.get(Account, account_id)


def list_accounts(db: Session) -> List[Account]:
    return db.query(Account).order_by(Account.created_at.desc()).all()


def create_account(
    db: Session,
    email: str,
    password: str,
    name: str,
    role: Role = Role.USER,
) -> Account:
    """Insert a new account, storing only the bcrypt digest of ``password``.

    The email is checked up front, and the unique constraint catches the race
    where two registrations for the same address pass that check together.
    """
    email = (email or "").strip()
    name = (name or "").strip()
    if not email or not name:
        raise ValidationError("All fields are required")
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if password_too_long(password):
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    if find_by_email(db, email):
        raise DuplicateEmail()

    # Hash before touching the store so no transaction waits on bcrypt.
    digest = hash_password(password)
    account = Account(email=email, hashed_password=digest, name=name, role=role)
    db.add(account)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateEmail() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError("Failed to create account") from exc
    db.refresh(account)
    logger.info({"function": "create_account", "account_id": account.id, "role": account.role.value})
    return account


def authenticate_credentials(db: Session, email: str, password: str) -> Optional[Account]:
    """Return the account for a correct email/password pair, else None.

    Unknown email and wrong password are deliberately indistinguishable.
    """
    account = find_by_email(db, email)
    if account is None:
        return None
    if not verify_password(password, account.hashed_password):
        return None
    return account


def ensure_admin_account(db: Session) -> Account:
    """Create the bootstrap admin on first startup; a no-op afterwards.

    Any existing admin counts, so changing ``ADMIN_EMAIL`` later does not
    add a second one.
    """
    existing = (
        db.query(Account)
        .filter(Account.role == Role.ADMIN)
        .order_by(Account.created_at)
        .first()
    )
    if existing:
        return existing
    try:
        admin = create_account(db, ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_NAME, role=Role.ADMIN)
    except DuplicateEmail:
        # Another worker bootstrapped it between our check and insert.
        return find_by_email(db, ADMIN_EMAIL)
    logger.info({"function": "ensure_admin_account", "status": "created", "email": ADMIN_EMAIL})
    return admin


__all__ = [
    "ADMIN_EMAIL",
    "authenticate_credentials",
    "create_account",
    "ensure_admin_account",
    "find_by_email",
    "find_by_id",
    "list_accounts",
]
