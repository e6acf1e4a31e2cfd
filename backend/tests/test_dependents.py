"""부양가족 API 테스트입니다."""

from hr_admin.models.personnel import Dependent
from tests.conftest import auth_headers


def _dependent(national_id, personnel_code="1001", first_name="Mina", **extra):
    body = {
        "personnel_code": personnel_code,
        "first_name": first_name,
        "last_name": "Rezaei",
        "relation_type": "child",
        "birth_date": "1398/05/01",
        "gender": "F",
        "national_id": national_id,
    }
    body.update(extra)
    return body


def test_crud(client, seed_users, seed_members):
    hr = auth_headers(client, "hr")
    resp = client.post("/api/dependents", json=_dependent("001"), headers=hr)
    assert resp.status_code == 201
    dependent_id = resp.json()["id"]

    assert client.post("/api/dependents", json=_dependent("001"), headers=hr).status_code == 409
    assert client.post("/api/dependents", json=_dependent("002", personnel_code="9999"), headers=hr).status_code == 400

    resp = client.put(f"/api/dependents/{dependent_id}", json=_dependent("001", insurance_type="basic"), headers=hr)
    assert resp.status_code == 200
    assert resp.json()["insurance_type"] == "basic"

    client.post("/api/dependents", json=_dependent("003", personnel_code="1002", first_name="Aria"), headers=hr)
    resp = client.get("/api/dependents", params={"personnel_code": "1001"}, headers=hr)
    assert [d["national_id"] for d in resp.json()["dependents"]] == ["001"]
    resp = client.get("/api/dependents", headers=hr)
    assert [d["personnel_code"] for d in resp.json()["dependents"]] == ["1001", "1002"]

    assert client.delete(f"/api/dependents/{dependent_id}", headers=hr).status_code == 200
    assert client.delete(f"/api/dependents/{dependent_id}", headers=hr).status_code == 404


def test_import_upserts_by_national_id(client, db, seed_users, seed_members):
    hr = auth_headers(client, "hr")
    client.post("/api/dependents", json=_dependent("001"), headers=hr)

    rows = [
        _dependent("001", relation_type="spouse"),
        _dependent("002", personnel_code="1002", first_name="Aria"),
        _dependent("001", personnel_code="1002"),
        {"personnel_code": "1001", "first_name": "NoId"},
    ]
    resp = client.post("/api/dependents/import", json={"rows": rows}, headers=hr)
    assert resp.status_code == 200
    data = resp.json()
    assert (data["created"], data["updated"], data["failed"]) == (1, 1, 2)

    db.expire_all()
    assert db.query(Dependent).filter(Dependent.national_id == "001").one().relation_type == "spouse"
    assert db.query(Dependent).count() == 2


def test_import_with_unknown_personnel_writes_nothing(client, db, seed_users, seed_members):
    rows = [_dependent("010"), _dependent("011", personnel_code="8888")]
    resp = client.post("/api/dependents/import", json={"rows": rows}, headers=auth_headers(client, "hr"))
    assert resp.status_code == 400
    assert "8888" in resp.json()["cause"]
    assert db.query(Dependent).count() == 0


def test_import_without_valid_rows_is_rejected(client, seed_users):
    resp = client.post(
        "/api/dependents/import",
        json={"rows": [{"personnel_code": "1001"}]},
        headers=auth_headers(client, "hr"),
    )
    assert resp.status_code == 400
