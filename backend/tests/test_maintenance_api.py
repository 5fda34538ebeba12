def test_auth_verify(client, monkeypatch) -> None:
    monkeypatch.setenv("APP_PASSWORD", "1234")
    assert client.post("/api/auth/verify", json={"password": "1234"}).json() == {"success": True}
    assert client.post("/api/auth/verify", json={"password": "0000"}).status_code == 401


def test_auth_without_configured_password(client, monkeypatch) -> None:
    monkeypatch.delenv("APP_PASSWORD", raising=False)
    assert client.post("/api/auth/verify", json={"password": ""}).status_code == 503


def test_operation_log_records_check_in(client) -> None:
    client.post("/api/lockers/check-in", json={"locker_number": 1, "entry_time": "2024-01-01T14:00:00+09:00"})
    logs = client.get("/api/operation-logs", params={"module": "락커"}).json()
    assert logs[0]["action"] == "입실"
    assert logs[0]["status_code"] == 200
    assert '"locker_number": 1' in logs[0]["request_data"] or '"locker_number":1' in logs[0]["request_data"]


def test_password_is_not_written_to_operation_log(client, monkeypatch) -> None:
    monkeypatch.setenv("APP_PASSWORD", "1234")
    client.post("/api/auth/verify", json={"password": "1234"})
    logs = client.get("/api/operation-logs", params={"action": "비밀번호"}).json()
    assert logs[0]["request_data"] is None


def test_backup_and_list(client) -> None:
    resp = client.post("/api/maintenance/backup")
    assert resp.status_code == 200
    filename = resp.json()["filename"]
    names = [b["filename"] for b in client.get("/api/maintenance/backups").json()["backups"]]
    assert filename in names


def test_cleanup_removes_data_older_than_retention(client) -> None:
    old = client.post("/api/lockers/check-in", json={
        "locker_number": 1, "entry_time": "2020-01-01T14:00:00+09:00"
    }).json()
    client.post(f"/api/lockers/logs/{old['id']}/checkout", json={
        "checkout_time": "2020-01-02T14:00:00+09:00", "additional_fee_payment": {"cash": 3000}
    })
    client.post("/api/lockers/check-in", json={"locker_number": 2})

    resp = client.post("/api/maintenance/cleanup-old").json()
    assert resp["skipped"] is False
    assert resp["deleted"]["locker_logs"] == 1
    assert resp["deleted"]["additional_fee_events"] == 1
    assert client.get(f"/api/lockers/logs/{old['id']}").status_code == 404
    assert len(client.get("/api/lockers/active").json()) == 1

    again = client.post("/api/maintenance/cleanup-old").json()
    assert again["skipped"] is True
    assert client.post("/api/maintenance/cleanup-old", params={"force": True}).json()["skipped"] is False


def test_clear_keeps_settings_and_items(client) -> None:
    client.put("/api/settings", json={"night_price": 14000})
    client.post("/api/lockers/check-in", json={"locker_number": 1})
    resp = client.post("/api/maintenance/clear")
    assert resp.status_code == 200
    assert resp.json()["deleted"]["locker_logs"] == 1
    assert client.get("/api/lockers/active").json() == []
    assert client.get("/api/settings").json()["night_price"] == 14000
    assert len(client.get("/api/rental-items").json()) == 2
