# --- imports (top of skincare_ai/app.py) ---
import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

# Resolve paths early so env vars are available before importing the app modules
BASE_DIR = Path(__file__).resolve().parent
ROOT_DIR = BASE_DIR.parent
ENV_PATH = BASE_DIR / ".env"

if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

load_dotenv(ENV_PATH)

import skincare_ai.db.session as session_mod
from skincare_ai.middleware.rate_limit import limiter, rate_limit_handler
from skincare_ai.middleware.tracing import TRACE_ID_CTX_VAR, TracingMiddleware
from skincare_ai.models import init_db
from skincare_ai.routes import admin_routes, analysis_routes, auth_routes
from skincare_ai.services.accounts import create_account, ensure_admin_account, find_by_email
from skincare_ai.utils.exceptions import (
    AppError,
    handle_app_error,
    handle_http_exception,
    handle_unhandled_exception,
    handle_validation_exception,
)

CORS_ORIGINS = [
    origin.strip()
    for origin in (os.getenv("CORS_ORIGINS", "http://localhost:3000") or "").split(",")
    if origin.strip()
]

app = FastAPI(title="SkinCare AI Backend", version="0.1.0")


# --- logging setup ---
class JsonFormatter(logging.Formatter):
    def format(self, record):  # type: ignore[override]
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname,
            "function": record.funcName,
            "message": record.getMessage(),
            "trace_id": TRACE_ID_CTX_VAR.get(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging() -> logging.Logger:
    logger = logging.getLogger("skincare_ai")
    logger.setLevel(logging.INFO)
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    return logger


logger = configure_logging()

# ---- Tracing & rate limiting (slowapi) ----
app.add_middleware(TracingMiddleware)
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---- Error envelope ----
app.add_exception_handler(AppError, handle_app_error)
app.add_exception_handler(StarletteHTTPException, handle_http_exception)
app.add_exception_handler(RequestValidationError, handle_validation_exception)
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
app.add_exception_handler(Exception, handle_unhandled_exception)


def _maybe_seed_demo_user() -> None:
    email = (os.getenv("DEMO_USER_EMAIL", "") or "").strip()
    password = os.getenv("DEMO_USER_PASSWORD", "password123")
    name = (os.getenv("DEMO_USER_NAME", "Demo User") or "").strip()

    if not email or not password:
        return

    with session_mod.SessionLocal() as db:
        if find_by_email(db, email):
            return
        create_account(db, email, password, name)
        logger.info({"function": "seed_demo_user", "email": email})


@app.on_event("startup")
def _init_db():
    init_db()
    with session_mod.SessionLocal() as db:
        ensure_admin_account(db)
    _maybe_seed_demo_user()


app.include_router(auth_routes.router)
app.include_router(analysis_routes.router)
app.include_router(admin_routes.router)


@app.get("/health")
def health():
    return {"status": "ok"}
