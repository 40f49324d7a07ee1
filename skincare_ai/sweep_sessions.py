# skincare_ai/sweep_sessions.py
"""Delete expired login sessions.

Meant for cron or a manual run; lookups already ignore expired sessions, so
skipping a run never lets an expired session through.
"""
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

ENV_PATH = ROOT_DIR / "skincare_ai" / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH, override=True)

from skincare_ai.db.session import SessionLocal
from skincare_ai.services.sessions import sweep_expired_sessions


def main() -> int:
    with SessionLocal() as db:
        removed = sweep_expired_sessions(db)
    print(f"Removed {removed} expired session(s)")
    return removed


if __name__ == "__main__":
    main()
