import pytest
from sqlalchemy.exc import IntegrityError

from skincare_ai.db.session import utcnow
from skincare_ai.models.account import Account, AuthSession, Role
from skincare_ai.models.analysis import Analysis, Medication, Severity


def test_account_sessions_analyses_and_medications_relationships(db):
    account = Account(email="rel@example.com", hashed_password="hashed", name="Rel")
    db.add(account)
    db.flush()

    db.add(AuthSession(token="tok-1", account_id=account.id, expires_at=utcnow()))
    analysis = Analysis(
        account_id=account.id,
        image_ref="/uploads/rel.jpg",
        disease="Acne Vulgaris",
        confidence=92,
        severity=Severity.LOW,
        symptoms=["Blackheads", "Whiteheads"],
        recommendations=["Wash face gently twice daily"],
        medications=[Medication(name="Benzoyl Peroxide 2.5%", dosage="Apply to affected area", frequency="Once daily")],
    )
    db.add(analysis)
    db.commit()
    db.expunge_all()

    loaded = db.query(Account).filter_by(id=account.id).one()
    assert loaded.role == Role.USER
    assert [s.token for s in loaded.sessions] == ["tok-1"]
    assert len(loaded.analyses) == 1
    stored = loaded.analyses[0]
    assert stored.symptoms == ["Blackheads", "Whiteheads"]
    assert stored.medications[0].name == "Benzoyl Peroxide 2.5%"
    # reverse relations
    assert stored.account.id == account.id
    assert stored.medications[0].analysis.id == stored.id
    assert loaded.sessions[0].account.id == account.id


def test_medication_requires_existing_analysis(db):
    db.add(Medication(analysis_id=999, name="Orphan", dosage="x", frequency="y"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_confidence_check_constraint(db):
    account = Account(email="ck@example.com", hashed_password="hashed", name="Ck")
    db.add(account)
    db.flush()
    db.add(Analysis(account_id=account.id, image_ref="img", disease="X", confidence=150, severity=Severity.HIGH))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()
