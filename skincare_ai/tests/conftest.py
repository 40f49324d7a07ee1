import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure tests use an in-memory SQLite DB and cheap bcrypt rounds
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("DEMO_USER_EMAIL", "")

# Ensure the project root is on sys.path so `import skincare_ai` works when running
# pytest from the repository root.
ROOT_DIR = Path(__file__).resolve().parents[2]  # repository root
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from skincare_ai.app import app
from skincare_ai.db.session import Base, SessionLocal, engine
from skincare_ai.services.accounts import ADMIN_EMAIL, ADMIN_PASSWORD, create_account

SAMPLE_RESULT = {
    "disease": "Eczema (Atopic Dermatitis)",
    "confidence": 87,
    "description": "A chronic inflammatory skin condition characterized by dry, itchy, and inflamed skin patches.",
    "symptoms": ["Dry, scaly skin", "Intense itching", "Red or brownish patches", "Small raised bumps"],
    "medications": [
        {"name": "Hydrocortisone Cream 1%", "dosage": "Apply thin layer", "frequency": "2-3 times daily"},
        {"name": "Cetirizine", "dosage": "10mg", "frequency": "Once daily"},
        {"name": "Moisturizing Lotion", "dosage": "Liberal application", "frequency": "Multiple times daily"},
    ],
    "recommendations": [
        "Avoid known triggers and allergens",
        "Use fragrance-free moisturizers",
        "Take lukewarm baths with oatmeal",
        "Wear soft, breathable fabrics",
    ],
    "severity": "Medium",
}


@pytest.fixture(autouse=True)
def reset_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    # ensure limiter state fresh each test
    app.state.limiter.reset()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    # Entering the context runs the startup hook (schema + admin bootstrap).
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sample_result():
    return {**SAMPLE_RESULT, "symptoms": list(SAMPLE_RESULT["symptoms"]),
            "recommendations": list(SAMPLE_RESULT["recommendations"]),
            "medications": [dict(m) for m in SAMPLE_RESULT["medications"]]}


def register(client, email, password="secret1", name="U"):
    r = client.post("/api/auth/register", json={"email": email, "password": password, "name": name})
    assert r.status_code == 201, r.text
    return r.json()["id"]


def login(client, email, password="secret1"):
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["user"]


def login_admin(client):
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def make_account(db):
    def _make(email, password="secret1", name="U", **kwargs):
        return create_account(db, email, password, name, **kwargs)
    return _make
