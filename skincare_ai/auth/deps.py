"""Authentication and authorization dependencies for FastAPI routes.

Every privileged route depends on ``get_current_principal`` (or
``require_admin``), so an unauthenticated or under-privileged request is
rejected before any repository is touched.
"""

import os
from typing import Optional

from fastapi import Cookie, Depends
from sqlalchemy.orm import Session

from skincare_ai.auth.schemas import Principal
from skincare_ai.db.session import get_db
from skincare_ai.models.account import Role
from skincare_ai.services.sessions import resolve_session
from skincare_ai.utils.exceptions import Forbidden, Unauthenticated

SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "session")


def authenticate(db: Session, token: Optional[str]) -> Principal:
    """Resolve ``token`` to a principal or raise Unauthenticated."""
    if not token:
        raise Unauthenticated()
    principal = resolve_session(db, token)
    if principal is None:
        raise Unauthenticated("Invalid or expired session")
    return principal


def require_role(principal: Principal, role: Role) -> None:
    if principal.role != role:
        raise Forbidden(f"{role.value.capitalize()} access required")


def get_current_principal(
    session_token: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    db: Session = Depends(get_db),
) -> Principal:
    return authenticate(db, session_token)


def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    require_role(principal, Role.ADMIN)
    return principal
