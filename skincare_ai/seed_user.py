# skincare_ai/seed_user.py
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Allow running from skincare_ai/ without tweaking PYTHONPATH
ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

ENV_PATH = ROOT_DIR / "skincare_ai" / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH, override=True)

from skincare_ai.db.session import SessionLocal
from skincare_ai.services.accounts import create_account, find_by_email


def main():
    email = os.getenv("DEMO_USER_EMAIL", "user@demo.com")
    password = os.getenv("DEMO_USER_PASSWORD", "password123")
    name = os.getenv("DEMO_USER_NAME", "Demo User")

    if not email or not password:
        raise SystemExit("Set DEMO_USER_EMAIL and DEMO_USER_PASSWORD before seeding")

    with SessionLocal() as db:
        exists = find_by_email(db, email)
        if exists:
            print(f"User already exists: {email} (id={exists.id})")
            return

        user = create_account(db, email, password, name)
        print(f"Seeded user: {email} (id={user.id})")


if __name__ == "__main__":
    main()
