# skincare_ai/routes/admin_routes.py
import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from skincare_ai.auth.deps import require_admin
from skincare_ai.auth.schemas import AccountOut, Principal
from skincare_ai.db.session import get_db
from skincare_ai.schemas.analysis import AdminAnalysisOut, AdminStatsOut, AnalysisOut
from skincare_ai.services import accounts, analyses, sessions, stats

logger = logging.getLogger("skincare_ai")

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/analyses", response_model=List[AdminAnalysisOut])
def list_recent_analyses(
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin),
):
    items = []
    for analysis, owner in analyses.list_recent(db, limit=analyses.ADMIN_RECENT_LIMIT):
        record = AnalysisOut.model_validate(analysis).model_dump()
        items.append(AdminAnalysisOut(**record, user_name=owner.name, user_email=owner.email))
    return items


@router.get("/stats", response_model=AdminStatsOut)
def admin_stats(
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin),
):
    overview = stats.admin_overview(db)
    overview["disease_distribution"] = [
        {"disease": disease, "count": count}
        for disease, count in overview["disease_distribution"].items()
    ]
    return overview


@router.get("/users", response_model=List[AccountOut])
def list_users(
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin),
):
    return accounts.list_accounts(db)


@router.post("/sessions/sweep")
def sweep_sessions(
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin),
):
    removed = sessions.sweep_expired_sessions(db)
    logger.info({"function": "sweep_sessions", "admin_id": admin.id, "removed": removed})
    return {"removed": removed}
