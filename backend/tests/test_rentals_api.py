def _default_item(client, name="롱타올대여"):
    items = client.get("/api/rental-items").json()
    return next(item for item in items if item["name"] == name)


def _check_in(client, locker_number=1):
    resp = client.post("/api/lockers/check-in", json={
        "locker_number": locker_number, "entry_time": "2024-01-01T14:00:00+09:00"
    })
    return resp.json()["id"]


def test_default_rental_items_are_seeded(client) -> None:
    names = [item["name"] for item in client.get("/api/rental-items").json()]
    assert names == ["롱타올대여", "담요대여"]


def test_rental_with_deposit_blocks_cancel_until_settled(client) -> None:
    log_id = _check_in(client)
    item = _default_item(client)

    rental = client.post(f"/api/lockers/logs/{log_id}/rentals", json={
        "item_id": item["id"], "rental_time": "2024-01-01T15:00:00+09:00"
    }).json()
    assert rental["deposit_status"] == "received"
    assert rental["business_day"] == "2024-01-01"

    resp = client.post(f"/api/lockers/logs/{log_id}/cancel")
    assert resp.status_code == 409

    settled = client.post(f"/api/rentals/{rental['id']}/settle", json={
        "deposit_status": "refunded",
        "payment": {"cash": item["rental_fee"]},
        "return_time": "2024-01-02T11:00:00+09:00",
    })
    assert settled.status_code == 200
    data = settled.json()
    assert data["revenue"] == item["rental_fee"]
    # 정산 시점 영업일로 다시 기록
    assert data["business_day"] == "2024-01-02"

    assert client.post(f"/api/lockers/logs/{log_id}/cancel").status_code == 200


def test_forfeited_deposit_counts_as_revenue(client) -> None:
    log_id = _check_in(client)
    item = _default_item(client, "담요대여")
    rental = client.post(f"/api/lockers/logs/{log_id}/rentals", json={
        "item_id": item["id"], "rental_time": "2024-01-01T15:00:00+09:00"
    }).json()
    expected = item["rental_fee"] + item["deposit_amount"]

    wrong = client.post(f"/api/rentals/{rental['id']}/settle", json={
        "deposit_status": "forfeited",
        "payment": {"cash": item["rental_fee"]},
        "return_time": "2024-01-01T20:00:00+09:00",
    })
    assert wrong.status_code == 400

    ok = client.post(f"/api/rentals/{rental['id']}/settle", json={
        "deposit_status": "forfeited",
        "payment": {"cash": expected},
        "return_time": "2024-01-01T20:00:00+09:00",
    })
    assert ok.status_code == 200
    assert ok.json()["revenue"] == expected

    again = client.post(f"/api/rentals/{rental['id']}/settle", json={
        "deposit_status": "forfeited",
        "payment": {"cash": expected},
    })
    assert again.status_code == 400

    sales = client.get("/api/statistics/sales/2024-01-01").json()
    assert sales["rental"]["cash"] == expected


def test_deposit_item_requires_deposit_decision(client) -> None:
    log_id = _check_in(client)
    item = _default_item(client)
    rental = client.post(f"/api/lockers/logs/{log_id}/rentals", json={"item_id": item["id"]}).json()
    resp = client.post(f"/api/rentals/{rental['id']}/settle", json={
        "deposit_status": "none", "payment": {"cash": item["rental_fee"]}
    })
    assert resp.status_code == 400


def test_rental_item_crud(client) -> None:
    created = client.post("/api/rental-items", json={"name": "찜질복", "rental_fee": 2000}).json()
    assert created["deposit_amount"] == 0

    updated = client.put(f"/api/rental-items/{created['id']}", json={"rental_fee": 3000}).json()
    assert updated["rental_fee"] == 3000

    log_id = _check_in(client)
    rental = client.post(f"/api/lockers/logs/{log_id}/rentals", json={"item_id": created["id"]}).json()
    assert rental["deposit_status"] == "none"
    assert client.delete(f"/api/rental-items/{created['id']}").status_code == 400

    other = client.post("/api/rental-items", json={"name": "수건", "rental_fee": 500}).json()
    assert client.delete(f"/api/rental-items/{other['id']}").status_code == 200

    listed = client.get("/api/rentals", params={"locker_log_id": log_id}).json()
    assert [r["item_name"] for r in listed] == ["찜질복"]


def test_unknown_item_returns_404(client) -> None:
    log_id = _check_in(client)
    assert client.post(f"/api/lockers/logs/{log_id}/rentals", json={"item_id": 999}).status_code == 404


def test_locker_group_validation(client) -> None:
    resp = client.post("/api/locker-groups", json={"name": "2층", "start_number": 50, "end_number": 41})
    assert resp.status_code == 422

    group = client.post("/api/locker-groups", json={"name": "2층", "start_number": 41, "end_number": 80}).json()
    resp = client.put(f"/api/locker-groups/{group['id']}", json={"start_number": 90})
    assert resp.status_code == 400
    assert client.delete(f"/api/locker-groups/{group['id']}").status_code == 200
    assert client.get("/api/locker-groups").json() == []
