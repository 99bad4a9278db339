def test_config_is_created_with_defaults(client, admin_headers):
    resp = client.get("/api/system-config", headers=admin_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["autoRegister"] is False
    assert body["manualApproval"] is True
    assert body["inactivityBlockDays"] == 30
    assert body["inactivityBlockEnabled"] is False
    assert body["userLimit"] == 2000
    assert body["userLimitEnabled"] is True

    again = client.get("/api/system-config", headers=admin_headers).json()
    assert again["id"] == body["id"]


def test_update_config_is_partial(client, admin_headers):
    resp = client.put(
        "/api/system-config",
        json={"autoRegister": True, "userLimit": 50},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["autoRegister"] is True
    assert body["userLimit"] == 50
    assert body["manualApproval"] is True


def test_update_config_validation(client, admin_headers):
    resp = client.put(
        "/api/system-config",
        json={"inactivityBlockDays": 0, "userLimit": -5},
        headers=admin_headers,
    )
    assert resp.status_code == 400
    fields = {error["field"] for error in resp.json()["errors"]}
    assert fields == {"inactivityBlockDays", "userLimit"}


def test_config_requires_admin(client, user_headers):
    assert client.get("/api/system-config", headers=user_headers).status_code == 403
    assert (
        client.put("/api/system-config", json={}, headers=user_headers).status_code == 403
    )
