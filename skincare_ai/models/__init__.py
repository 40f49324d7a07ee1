# skincare_ai/models/__init__.py
from skincare_ai.db.session import Base, engine

# Import model modules so SQLAlchemy registers all mappers.
from . import account  # noqa: F401
from . import analysis  # noqa: F401


def init_db(bind=None) -> None:
    """Create tables if they don't exist."""
    Base.metadata.create_all(bind=bind or engine)
