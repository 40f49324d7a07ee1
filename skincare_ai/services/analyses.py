from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from skincare_ai.models.account import Account
from skincare_ai.models.analysis import Analysis, Medication
from skincare_ai.schemas.analysis import PredictionResult
from skincare_ai.utils.exceptions import NotFound, StorageError, ValidationError

logger = logging.getLogger("skincare_ai")

ADMIN_RECENT_LIMIT = 50


def create_analysis(db: Session, account_id: str, image_ref: str, result: PredictionResult | dict) -> Analysis:
    """Persist a prediction result and its medications as one unit.

    The parent row and every medication row go out in a single transaction:
    either all of them are stored or, after a rollback, none is.
    """
    if isinstance(result, dict):
        try:
            result = PredictionResult.model_validate(result)
        except PydanticValidationError as exc:
            raise ValidationError("Malformed prediction result") from exc
    if not 0 <= result.confidence <= 100:
        raise ValidationError("Confidence must be between 0 and 100")
    if db.get(Account, account_id) is None:
        raise ValidationError("Unknown account")

    analysis = Analysis(
        account_id=account_id,
        image_ref=image_ref,
        disease=result.disease,
        confidence=result.confidence,
        severity=result.severity,
        description=result.description,
        symptoms=list(result.symptoms),
        recommendations=list(result.recommendations),
        medications=[
            Medication(name=med.name, dosage=med.dosage, frequency=med.frequency)
            for med in result.medications
        ],
    )
    try:
        db.add(analysis)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error({"function": "create_analysis", "status": "rolled_back", "account_id": account_id}, exc_info=True)
        raise StorageError("Failed to store analysis") from exc

    db.refresh(analysis)
    logger.info({
        "function": "create_analysis",
        "status": "inserted",
        "analysis_id": analysis.id,
        "medications": len(analysis.medications),
    })
    return analysis


def list_by_account(db: Session, account_id: str) -> List[Analysis]:
    return (
        db.query(Analysis)
        .filter(Analysis.account_id == account_id)
        .order_by(Analysis.created_at.desc(), Analysis.id.desc())
        .all()
    )


def get_analysis(db: Session, analysis_id: int, account_id: str) -> Analysis:
    item = (
        db.query(Analysis)
        .filter(Analysis.id == analysis_id, Analysis.account_id == account_id)
        .first()
    )
    if item is None:
        raise NotFound("Analysis not found")
    return item


def list_recent(db: Session, limit: int = ADMIN_RECENT_LIMIT) -> List[Tuple[Analysis, Account]]:
    """Most recent analyses across all accounts, each paired with its owner."""
    return (
        db.query(Analysis, Account)
        .join(Account, Analysis.account_id == Account.id)
        .order_by(Analysis.created_at.desc(), Analysis.id.desc())
        .limit(limit)
        .all()
    )


def disease_distribution(db: Session) -> Dict[str, int]:
    """Analyses per disease label, most frequent first."""
    count = func.count(Analysis.id)
    rows = (
        db.query(Analysis.disease, count)
        .group_by(Analysis.disease)
        .order_by(count.desc(), Analysis.disease)
        .all()
    )
    return {disease: n for disease, n in rows}


def total_count(db: Session) -> int:
    return db.query(func.count(Analysis.id)).scalar() or 0


__all__ = [
    "ADMIN_RECENT_LIMIT",
    "create_analysis",
    "disease_distribution",
    "get_analysis",
    "list_by_account",
    "list_recent",
    "total_count",
]
