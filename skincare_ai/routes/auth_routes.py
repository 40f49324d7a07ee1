# skincare_ai/routes/auth_routes.py
import os
from typing import Optional

from fastapi import APIRouter, Body, Cookie, Depends, Request, Response, status
from sqlalchemy.orm import Session

from skincare_ai.auth.deps import SESSION_COOKIE_NAME, get_current_principal
from skincare_ai.auth.schemas import LoginIn, LoginOut, Principal, RegisterIn
from skincare_ai.db.session import get_db
from skincare_ai.middleware.rate_limit import LOGIN_RATE_LIMIT, limiter
from skincare_ai.services.accounts import authenticate_credentials, create_account
from skincare_ai.services.sessions import SESSION_TTL, create_session, revoke_session
from skincare_ai.utils.exceptions import Unauthenticated

router = APIRouter(prefix="/api/auth", tags=["auth"])

COOKIE_SECURE = (os.getenv("APP_ENV", "development") or "").strip().lower() == "production"


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: RegisterIn = Body(...), db: Session = Depends(get_db)):
    """Create a new user account. The frontend logs in separately afterwards."""
    account = create_account(db, str(payload.email), payload.password, payload.name)
    return {"status": "created", "id": account.id}


@router.post("/login", response_model=LoginOut)
@limiter.limit(LOGIN_RATE_LIMIT)
def login(
    request: Request,
    response: Response,
    payload: LoginIn = Body(...),
    db: Session = Depends(get_db),
):
    account = authenticate_credentials(db, payload.email, payload.password)
    if account is None:
        # Same answer for unknown email and wrong password.
        raise Unauthenticated("Invalid credentials")

    token = create_session(db, account.id)
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=int(SESSION_TTL.total_seconds()),
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="lax",
    )
    return {"user": Principal.model_validate(account)}


@router.post("/logout")
def logout(
    response: Response,
    session_token: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    db: Session = Depends(get_db),
):
    revoke_session(db, session_token)
    response.delete_cookie(SESSION_COOKIE_NAME, httponly=True, secure=COOKIE_SECURE, samesite="lax")
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=Principal)
def me(principal: Principal = Depends(get_current_principal)):
    return principal
