# skincare_ai/routes/analysis_routes.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from skincare_ai.auth.deps import get_current_principal
from skincare_ai.auth.schemas import Principal
from skincare_ai.db.session import get_db
from skincare_ai.schemas.analysis import AnalysisCreate, AnalysisOut
from skincare_ai.services import analyses

router = APIRouter(prefix="/api/analysis", tags=["analysis"])


@router.post("", response_model=AnalysisOut, status_code=status.HTTP_201_CREATED)
def submit_analysis(
    payload: AnalysisCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return analyses.create_analysis(db, principal.id, payload.image_ref, payload.result)


@router.get("", response_model=List[AnalysisOut])
def list_own_analyses(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return analyses.list_by_account(db, principal.id)


@router.get("/{analysis_id}", response_model=AnalysisOut)
def get_own_analysis(
    analysis_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return analyses.get_analysis(db, analysis_id, principal.id)
