from conftest import login, login_admin, register


def _submit(client, result, image_ref="/uploads/1-face.jpg"):
    return client.post("/api/analysis", json={"image_ref": image_ref, "result": result})


def test_submit_requires_session(client, sample_result):
    r = _submit(client, sample_result)
    assert r.status_code == 401
    assert r.json()["code"] == "UNAUTHORIZED"


def test_submit_and_list_own(client, sample_result):
    register(client, "a@example.com", name="A")
    login(client, "a@example.com")

    r = _submit(client, sample_result)
    assert r.status_code == 201, r.text
    stored = r.json()
    assert isinstance(stored["id"], int)
    assert stored["image_ref"] == "/uploads/1-face.jpg"
    assert stored["symptoms"] == sample_result["symptoms"]
    assert stored["recommendations"] == sample_result["recommendations"]
    assert len(stored["medications"]) == len(sample_result["medications"])

    listed = client.get("/api/analysis").json()
    assert [a["id"] for a in listed] == [stored["id"]]
    assert listed[0]["symptoms"] == sample_result["symptoms"]

    one = client.get(f"/api/analysis/{stored['id']}")
    assert one.status_code == 200
    assert one.json()["disease"] == sample_result["disease"]


def test_other_user_never_sees_record_but_admin_does(client, sample_result):
    register(client, "a@example.com", name="A")
    register(client, "b@example.com", name="B")

    login(client, "a@example.com")
    record_id = _submit(client, sample_result).json()["id"]

    login(client, "b@example.com")
    assert client.get("/api/analysis").json() == []
    assert client.get(f"/api/analysis/{record_id}").status_code == 404

    login_admin(client)
    recent = client.get("/api/admin/analyses")
    assert recent.status_code == 200
    [row] = recent.json()
    assert row["id"] == record_id
    assert row["user_name"] == "A"
    assert row["user_email"] == "a@example.com"
    assert len(row["medications"]) == 3


def test_invalid_prediction_result_is_rejected(client, sample_result):
    register(client, "a@example.com")
    login(client, "a@example.com")

    too_confident = _submit(client, {**sample_result, "confidence": 130})
    assert too_confident.status_code == 422

    bad_severity = _submit(client, {**sample_result, "severity": "Critical"})
    assert bad_severity.status_code == 422

    assert client.get("/api/analysis").json() == []


def test_storage_failure_is_generic(client, sample_result, monkeypatch):
    from skincare_ai.services import analyses
    from skincare_ai.utils.exceptions import StorageError

    def boom(*args, **kwargs):
        raise StorageError("disk I/O error at /var/lib/db")

    register(client, "a@example.com")
    login(client, "a@example.com")
    monkeypatch.setattr(analyses, "create_analysis", boom)

    r = _submit(client, sample_result)
    assert r.status_code == 500
    body = r.json()
    assert body["code"] == "INTERNAL_SERVER_ERROR"
    assert "disk" not in body["message"]
    assert "trace_id" in body
