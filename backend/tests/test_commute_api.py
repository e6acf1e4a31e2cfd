"""/api/commute-logs 엔드포인트 상태 코드와 권한 테스트입니다."""

from tests.conftest import auth_headers


def _post(client, headers, **body):
    payload = {"personnel_code": "1001", "guard_name": "Guard A"}
    payload.update(body)
    return client.post("/api/commute-logs", json=payload, headers=headers)


def test_entry_then_exit(client, seed_users, seed_members):
    headers = auth_headers(client, "guard")

    resp = _post(client, headers, action="entry", timestamp="2024-03-01T08:00:00")
    assert resp.status_code == 201, resp.text
    log = resp.json()["log"]
    # 오프셋 없는 시각은 현지 시각(+03:30)으로 해석된다.
    assert log["entry_time"].startswith("2024-03-01T04:30:00")
    assert log["exit_time"] is None
    assert log["log_type"] == "main"
    assert log["work_date"] == "2024-03-01"

    resp = _post(client, headers, action="exit", timestamp="2024-03-01T17:00:00+03:30")
    assert resp.status_code == 200, resp.text
    assert resp.json()["log"]["id"] == log["id"]
    assert resp.json()["log"]["exit_time"].startswith("2024-03-01T13:30:00")


def test_duplicate_entry_is_conflict(client, seed_users):
    headers = auth_headers(client, "guard")
    assert _post(client, headers, action="entry").status_code == 201

    resp = _post(client, headers, action="entry")
    assert resp.status_code == 409
    body = resp.json()
    assert body["error_type"] == "conflict"
    assert body["detail"]


def test_exit_without_entry_is_not_found(client, seed_users):
    resp = _post(client, auth_headers(client, "guard"), action="exit")
    assert resp.status_code == 404
    assert resp.json()["error_type"] == "not_found"


def test_overnight_exit_closes_previous_day_entry(client, seed_users):
    headers = auth_headers(client, "guard")
    entry = _post(client, headers, action="entry", timestamp="2024-03-01T23:50:00+03:30")
    assert entry.status_code == 201

    resp = _post(client, headers, action="exit", timestamp="2024-03-02T00:10:00+03:30")
    assert resp.status_code == 200
    assert resp.json()["log"]["id"] == entry.json()["log"]["id"]


def test_missing_fields_are_bad_request(client, seed_users):
    headers = auth_headers(client, "guard")
    resp = client.post("/api/commute-logs", json={"action": "entry"}, headers=headers)
    assert resp.status_code == 400
    body = resp.json()
    assert body["error_type"] == "validation"
    assert "personnel_code" in body["cause"]

    resp = _post(client, headers, action="teleport")
    assert resp.status_code == 400


def test_short_leave_requires_both_times(client, seed_users):
    headers = auth_headers(client, "guard")
    resp = _post(client, headers, action="short_leave", exit_time="2024-03-01T10:00:00")
    assert resp.status_code == 400

    resp = _post(
        client,
        headers,
        action="short_leave",
        exit_time="2024-03-01T10:00:00",
        return_time="2024-03-01T11:00:00",
    )
    assert resp.status_code == 201
    log = resp.json()["log"]
    assert log["log_type"] == "short_leave"
    assert log["exit_time"].startswith("2024-03-01T06:30:00")
    assert log["entry_time"].startswith("2024-03-01T07:30:00")


def test_day_listing_and_present(client, seed_users, seed_members):
    headers = auth_headers(client, "guard")
    _post(client, headers, action="entry", timestamp="2024-03-01T08:00:00")
    _post(client, headers, personnel_code="1002", action="entry", timestamp="2024-03-01T08:30:00")
    _post(client, headers, personnel_code="1002", action="exit", timestamp="2024-03-01T12:00:00")

    resp = client.get("/api/commute-logs", params={"date": "2024-03-01"}, headers=headers)
    assert resp.status_code == 200
    logs = resp.json()["logs"]
    assert [row["personnel_code"] for row in logs] == ["1002", "1001"]
    assert logs[1]["full_name"] == "Ali Rezaei"

    resp = client.get("/api/commute-logs", params={"date": "2024-03-01", "department": "Finance"}, headers=headers)
    assert [row["personnel_code"] for row in resp.json()["logs"]] == ["1002"]

    # date 생략 시 시계 기준 오늘(2024-03-01)
    resp = client.get("/api/commute-logs/present", headers=headers)
    assert [row["personnel_code"] for row in resp.json()["present"]] == ["1001"]


def test_report_rejects_inverted_range(client, seed_users):
    headers = auth_headers(client, "hr")
    resp = client.get(
        "/api/commute-logs/report",
        params={"start_date": "2024-03-05", "end_date": "2024-03-01"},
        headers=headers,
    )
    assert resp.status_code == 400


def test_report_requires_ledger_admin(client, seed_users):
    resp = client.get("/api/commute-logs/report", headers=auth_headers(client, "guard"))
    assert resp.status_code == 403
    resp = client.get("/api/commute-logs/report", headers=auth_headers(client, "hr"))
    assert resp.status_code == 200
    assert resp.json() == {"reports": []}


def test_edit_and_audit_trail(client, seed_users):
    guard = auth_headers(client, "guard")
    hr = auth_headers(client, "hr")
    log_id = _post(client, guard, action="entry", timestamp="2024-03-01T08:00:00").json()["log"]["id"]

    body = {"entry_time": "2024-03-01T07:45:00", "exit_time": "2024-03-01T16:00:00", "editor_name": "HR"}
    assert client.put(f"/api/commute-logs/{log_id}", json=body, headers=guard).status_code == 403

    resp = client.put(f"/api/commute-logs/{log_id}", json=body, headers=hr)
    assert resp.status_code == 200
    assert resp.json()["id"] == log_id

    resp = client.get(f"/api/commute-logs/{log_id}/edits", headers=hr)
    assert resp.status_code == 200
    assert sorted(row["field_name"] for row in resp.json()) == ["entry_time", "exit_time"]

    resp = client.get("/api/edit-logs", params={"start_date": "2024-03-01"}, headers=hr)
    assert len(resp.json()["logs"]) == 2

    resp = client.put("/api/commute-logs/9999", json=body, headers=hr)
    assert resp.status_code == 404


def test_edit_requires_editor_name(client, seed_users):
    guard = auth_headers(client, "guard")
    log_id = _post(client, guard, action="entry").json()["log"]["id"]
    resp = client.put(
        f"/api/commute-logs/{log_id}",
        json={"entry_time": "2024-03-01T07:45:00"},
        headers=auth_headers(client, "hr"),
    )
    assert resp.status_code == 400


def test_delete(client, seed_users):
    guard = auth_headers(client, "guard")
    admin = auth_headers(client, "admin")
    log_id = _post(client, guard, action="entry").json()["log"]["id"]

    assert client.delete(f"/api/commute-logs/{log_id}", headers=guard).status_code == 403
    assert client.delete(f"/api/commute-logs/{log_id}", headers=admin).status_code == 200
    assert client.delete(f"/api/commute-logs/{log_id}", headers=admin).status_code == 404


def test_requires_authentication(client):
    resp = client.get("/api/commute-logs")
    assert resp.status_code in (401, 403)
