# Mark services as a package and expose the service modules for tests to monkeypatch.

from . import accounts as accounts  # noqa: F401
from . import analyses as analyses  # noqa: F401
from . import sessions as sessions  # noqa: F401
from . import stats as stats  # noqa: F401

__all__ = [
    "accounts",
    "analyses",
    "sessions",
    "stats",
]
