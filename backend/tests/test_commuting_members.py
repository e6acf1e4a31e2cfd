from tests.conftest import auth_headers


def test_list_members(client, seed_users, seed_members):
    resp = client.get("/api/commuting-members", headers=auth_headers(client, "guard"))
    assert resp.status_code == 200
    assert [m["full_name"] for m in resp.json()["members"]] == ["Ali Rezaei", "Sara Karimi"]


def test_create_member(client, seed_users, seed_members):
    body = {"personnel_code": "1003", "full_name": "Reza Ahmadi", "department": "IT", "position": "Developer"}
    assert client.post("/api/commuting-members", json=body, headers=auth_headers(client, "guard")).status_code == 403

    hr = auth_headers(client, "hr")
    resp = client.post("/api/commuting-members", json=body, headers=hr)
    assert resp.status_code == 201
    assert resp.json()["personnel_code"] == "1003"

    resp = client.post("/api/commuting-members", json=body, headers=hr)
    assert resp.status_code == 409
