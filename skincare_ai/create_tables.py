# skincare_ai/create_tables.py
import sys
from pathlib import Path

from dotenv import load_dotenv

# Allow running from the package directory without PYTHONPATH tweaks
ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

ENV_PATH = ROOT_DIR / "skincare_ai" / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH, override=True)

from skincare_ai.db.session import SessionLocal
from skincare_ai.models import init_db
from skincare_ai.services.accounts import ensure_admin_account


def main():
    print("Creating tables...")
    init_db()
    with SessionLocal() as db:
        admin = ensure_admin_account(db)
    print(f"Tables created. Admin account: {admin.email}")


if __name__ == "__main__":
    main()
