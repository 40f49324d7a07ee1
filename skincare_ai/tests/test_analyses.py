from datetime import timedelta

import pytest

from skincare_ai.db.session import utcnow
from skincare_ai.models.analysis import Analysis, Medication, Severity
from skincare_ai.schemas.analysis import MedicationIn, PredictionResult
from skincare_ai.services import analyses
from skincare_ai.utils.exceptions import NotFound, StorageError, ValidationError


@pytest.fixture
def owner(make_account):
    return make_account("owner@example.com", name="Owner")


def test_create_and_list_round_trip(db, owner, sample_result):
    created = analyses.create_analysis(db, owner.id, "/uploads/1-face.jpg", PredictionResult(**sample_result))
    assert created.id is not None

    [record] = analyses.list_by_account(db, owner.id)
    assert record.id == created.id
    assert record.image_ref == "/uploads/1-face.jpg"
    assert record.severity == Severity.MEDIUM
    assert record.confidence == 87
    assert record.symptoms == sample_result["symptoms"]
    assert record.recommendations == sample_result["recommendations"]
    assert [m.name for m in record.medications] == [m["name"] for m in sample_result["medications"]]


def test_lists_survive_a_fresh_session(db, owner, sample_result):
    sample_result["symptoms"] = ["z last", "a first", "ünïcode, with comma", '"quoted"']
    created = analyses.create_analysis(db, owner.id, "img", sample_result)
    db.expunge_all()

    reloaded = db.get(Analysis, created.id)
    assert reloaded.symptoms == ["z last", "a first", "ünïcode, with comma", '"quoted"']
    assert len(reloaded.medications) == 3


def test_accepts_zero_medications_and_empty_lists(db, owner):
    result = PredictionResult(disease="Acne Vulgaris", confidence=92, severity="Low")
    created = analyses.create_analysis(db, owner.id, "img", result)
    assert created.medications == []
    assert created.symptoms == []
    assert created.recommendations == []


def test_list_by_account_newest_first_and_scoped(db, owner, make_account, sample_result):
    other = make_account("other@example.com", name="Other")
    first = analyses.create_analysis(db, owner.id, "a", sample_result)
    second = analyses.create_analysis(db, owner.id, "b", sample_result)
    analyses.create_analysis(db, other.id, "c", sample_result)

    assert [a.id for a in analyses.list_by_account(db, owner.id)] == [second.id, first.id]
    assert all(a.account_id == other.id for a in analyses.list_by_account(db, other.id))


def test_failed_medication_insert_rolls_back_parent(db, owner):
    broken = PredictionResult.model_construct(
        disease="Psoriasis",
        confidence=78,
        description=None,
        symptoms=["Silvery scales"],
        recommendations=[],
        severity=Severity.HIGH,
        medications=[
            MedicationIn(name="Calcipotriene", dosage="Apply thin layer", frequency="Twice daily"),
            MedicationIn.model_construct(name=None, dosage="x", frequency="y"),
        ],
    )
    with pytest.raises(StorageError):
        analyses.create_analysis(db, owner.id, "img", broken)

    assert analyses.total_count(db) == 0
    assert db.query(Medication).count() == 0


def test_confidence_out_of_range_is_rejected(db, owner):
    result = PredictionResult.model_construct(
        disease="X", confidence=101, description=None, symptoms=[], recommendations=[],
        medications=[], severity=Severity.LOW,
    )
    with pytest.raises(ValidationError):
        analyses.create_analysis(db, owner.id, "img", result)


def test_unknown_account_is_rejected(db, sample_result):
    with pytest.raises(ValidationError):
        analyses.create_analysis(db, "no-such-account", "img", sample_result)


def test_get_analysis_is_owner_scoped(db, owner, make_account, sample_result):
    other = make_account("other@example.com", name="Other")
    created = analyses.create_analysis(db, owner.id, "img", sample_result)
    assert analyses.get_analysis(db, created.id, owner.id).id == created.id
    with pytest.raises(NotFound):
        analyses.get_analysis(db, created.id, other.id)


def test_list_recent_joins_owner_and_caps(db, owner, sample_result):
    for i in range(4):
        analyses.create_analysis(db, owner.id, f"img-{i}", sample_result)
    rows = analyses.list_recent(db, limit=3)
    assert len(rows) == 3
    assert [a.image_ref for a, _ in rows] == ["img-3", "img-2", "img-1"]
    assert all(acct.name == "Owner" and acct.email == "owner@example.com" for _, acct in rows)


def test_distribution_and_total(db, owner, sample_result):
    for disease in ["Acne Vulgaris", "Psoriasis", "Acne Vulgaris", "Eczema", "Acne Vulgaris", "Psoriasis"]:
        analyses.create_analysis(db, owner.id, "img", {**sample_result, "disease": disease})

    dist = analyses.disease_distribution(db)
    assert list(dist.items()) == [("Acne Vulgaris", 3), ("Psoriasis", 2), ("Eczema", 1)]
    assert analyses.total_count(db) == 6


def test_created_at_is_set(db, owner, sample_result):
    before = utcnow() - timedelta(seconds=1)
    created = analyses.create_analysis(db, owner.id, "img", sample_result)
    assert created.created_at >= before
