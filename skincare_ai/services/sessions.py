from __future__ import annotations

import logging
import os
import secrets
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from skincare_ai.auth.schemas import Principal
from skincare_ai.db.session import utcnow
from skincare_ai.models.account import Account, AuthSession
from skincare_ai.utils.exceptions import StorageError

logger = logging.getLogger("skincare_ai")

SESSION_TTL_HOURS = int(os.getenv("SESSION_TTL_HOURS", "24"))
SESSION_TTL = timedelta(hours=SESSION_TTL_HOURS)
# 32 random bytes, i.e. 256 bits of entropy.
TOKEN_BYTES = 32


def create_session(db: Session, account_id: str, now: Optional[datetime] = None) -> str:
    """Issue a session for ``account_id`` that expires SESSION_TTL after creation."""
    now = now or utcnow()
    token = secrets.token_urlsafe(TOKEN_BYTES)
    db.add(AuthSession(token=token, account_id=account_id, created_at=now, expires_at=now + SESSION_TTL))
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError("Failed to create session") from exc
    logger.info({"function": "create_session", "account_id": account_id})
    return token


def resolve_session(db: Session, token: Optional[str], now: Optional[datetime] = None) -> Optional[Principal]:
    """Return the principal behind ``token``.

    An expired session resolves to None exactly like a token that never
    existed; there is no sliding renewal.
    """
    if not token:
        return None
    now = now or utcnow()
    account = (
        db.query(Account)
        .join(AuthSession, AuthSession.account_id == Account.id)
        .filter(AuthSession.token == token, AuthSession.expires_at > now)
        .first()
    )
    if account is None:
        return None
    return Principal.model_validate(account)


def revoke_session(db: Session, token: Optional[str]) -> None:
    if not token:
        return
    try:
        removed = db.query(AuthSession).filter(AuthSession.token == token).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError("Failed to revoke session") from exc
    if removed:
        logger.info({"function": "revoke_session", "status": "revoked"})


def sweep_expired_sessions(db: Session, now: Optional[datetime] = None) -> int:
    """Delete every session with ``expires_at <= now``; returns the count removed."""
    now = now or utcnow()
    try:
        removed = (
            db.query(AuthSession)
            .filter(AuthSession.expires_at <= now)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError("Failed to sweep sessions") from exc
    logger.info({"function": "sweep_expired_sessions", "removed": removed})
    return removed


__all__ = [
    "SESSION_TTL",
    "create_session",
    "resolve_session",
    "revoke_session",
    "sweep_expired_sessions",
]
