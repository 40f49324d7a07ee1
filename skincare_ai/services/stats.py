from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from skincare_ai.db.session import utcnow
from skincare_ai.models.account import Account, Role
from skincare_ai.models.analysis import Analysis
from skincare_ai.services import analyses

ACTIVE_WINDOW = timedelta(days=7)

# Placeholder shown on the admin dashboard. It is a fixed figure, not derived
# from any evaluation of the classifier.
ACCURACY_RATE_PLACEHOLDER = 94.2


def user_stats(db: Session, now: Optional[datetime] = None) -> Dict[str, int]:
    now = now or utcnow()
    total_users = db.query(func.count(Account.id)).filter(Account.role == Role.USER).scalar() or 0
    active_users = (
        db.query(func.count(func.distinct(Analysis.account_id)))
        .filter(Analysis.created_at > now - ACTIVE_WINDOW)
        .scalar()
        or 0
    )
    return {"total_users": total_users, "active_users": active_users}


def analysis_stats(db: Session) -> Dict[str, Any]:
    return {
        "total_analyses": analyses.total_count(db),
        "disease_distribution": analyses.disease_distribution(db),
    }


def admin_overview(db: Session, now: Optional[datetime] = None) -> Dict[str, Any]:
    overview: Dict[str, Any] = {}
    overview.update(user_stats(db, now=now))
    overview.update(analysis_stats(db))
    overview["accuracy_rate"] = ACCURACY_RATE_PLACEHOLDER
    overview["accuracy_rate_is_placeholder"] = True
    return overview
