def check_in(client, locker_number, entry_time, **extra):
    payload = {"locker_number": locker_number, "entry_time": entry_time}
    payload.update(extra)
    return client.post("/api/lockers/check-in", json=payload)


def test_check_in_freezes_business_day_tier_and_price(client) -> None:
    resp = check_in(client, 1, "2024-01-01T14:00:00+09:00")
    assert resp.status_code == 200
    data = resp.json()
    assert data["business_day"] == "2024-01-01"
    assert data["time_type"] == "주간"
    assert data["base_price"] == 10000
    assert data["final_price"] == 10000
    assert data["status"] == "in_use"
    assert data["entry_time"] == "2024-01-01 14:00:00"
    assert data["warning"] is None


def test_entry_before_start_hour_is_previous_business_day(client) -> None:
    data = check_in(client, 2, "2024-01-02T03:00:00+09:00").json()
    assert data["business_day"] == "2024-01-01"
    assert data["time_type"] == "야간"
    assert data["base_price"] == 13000


def test_occupied_locker_is_rejected(client) -> None:
    assert check_in(client, 1, "2024-01-01T14:00:00+09:00").status_code == 200
    assert check_in(client, 1, "2024-01-01T15:00:00+09:00").status_code == 409


def test_discount_option_and_daily_summary(client) -> None:
    data = check_in(client, 3, "2024-01-01T14:00:00+09:00", option_type="discount").json()
    assert data["final_price"] == 8000
    check_in(client, 4, "2024-01-01T20:00:00+09:00", option_type="foreigner")

    summary = client.get("/api/statistics/daily-summary/2024-01-01").json()
    assert summary["total_visitors"] == 2
    assert summary["total_sales"] == 8000 + 25000
    assert summary["total_discount"] == 2000
    assert summary["foreigner_count"] == 1
    assert summary["foreigner_sales"] == 25000
    assert summary["day_visitors"] == 1
    assert summary["night_visitors"] == 1


def test_discount_larger_than_base_returns_warning(client) -> None:
    data = check_in(
        client, 5, "2024-01-01T14:00:00+09:00", option_type="custom", option_amount=20000
    ).json()
    assert data["final_price"] == 0
    assert data["warning"]


def test_direct_price_without_amount_is_rejected(client) -> None:
    resp = check_in(client, 6, "2024-01-01T14:00:00+09:00", option_type="direct_price")
    assert resp.status_code == 400


def test_check_in_payment_must_match_final_price(client) -> None:
    resp = check_in(client, 7, "2024-01-01T14:00:00+09:00", payment={"cash": 5000, "card": 4000})
    assert resp.status_code == 400
    resp = check_in(client, 7, "2024-01-01T14:00:00+09:00", payment={"cash": 5000, "card": 5000})
    assert resp.status_code == 200
    assert resp.json()["payment_card"] == 5000


def test_board_shows_live_fee_and_badge(client) -> None:
    client.post("/api/locker-groups", json={"name": "1층", "start_number": 1, "end_number": 3})
    check_in(client, 1, "2024-01-01T14:00:00+09:00")
    check_in(client, 2, "2024-01-01T20:00:00+09:00")

    board = client.get("/api/lockers/board", params={"now": "2024-01-02T00:30:00+09:00"}).json()
    by_number = {item["locker_number"]: item for item in board}
    assert set(by_number) == {1, 2, 3}

    assert by_number[1]["display_status"] == "fee_due"
    assert by_number[1]["badge"] == "추가요금 ×1"
    assert by_number[1]["additional_fee"] == 3000
    assert by_number[1]["next_accrual_at"] == "2024-01-03 00:00:00"

    # 야간 입실 첫 자정은 무료, 영업일은 아직 같음
    assert by_number[2]["display_status"] == "night"
    assert by_number[2]["additional_fee"] == 0
    assert by_number[2]["badge"] == "사용중"

    assert by_number[3]["display_status"] == "empty"


def test_board_marks_carryover_and_multiple_fees(client) -> None:
    check_in(client, 1, "2024-01-01T14:00:00+09:00")
    check_in(client, 2, "2024-01-01T20:00:00+09:00")

    board = client.get("/api/lockers/board", params={"now": "2024-01-02T11:00:00+09:00"}).json()
    by_number = {item["locker_number"]: item for item in board}
    assert by_number[2]["display_status"] == "carryover"

    board = client.get("/api/lockers/board", params={"now": "2024-01-03T01:00:00+09:00"}).json()
    by_number = {item["locker_number"]: item for item in board}
    assert by_number[1]["display_status"] == "fee_multiple"
    assert by_number[1]["additional_fee"] == 3000 + 13000
    assert by_number[2]["display_status"] == "fee_due"


def test_checkout_with_separate_fee_settlement(client) -> None:
    log_id = check_in(client, 1, "2024-01-01T14:00:00+09:00", payment={"card": 10000}).json()["id"]

    resp = client.post(f"/api/lockers/logs/{log_id}/checkout", json={
        "checkout_time": "2024-01-02T00:30:00+09:00",
        "additional_fee_payment": {"cash": 3000},
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["log"]["status"] == "checked_out"
    assert data["log"]["payment_card"] == 10000
    assert data["log"]["exit_time"] == "2024-01-02 00:30:00"
    assert data["additional_fee"]["fee_amount"] == 3000
    event = data["additional_fee_event"]
    assert event["fee_amount"] == 3000
    assert event["original_fee_amount"] == 3000
    assert event["payment_cash"] == 3000
    # 00:30은 영업일 시작(10시) 전이므로 전날 영업일
    assert event["business_day"] == "2024-01-01"

    detail = client.get(f"/api/lockers/logs/{log_id}").json()
    assert detail["additional_fee"] is None
    assert len(detail["additional_fee_events"]) == 1


def test_checkout_fee_payment_mismatch_keeps_log_in_use(client) -> None:
    log_id = check_in(client, 1, "2024-01-01T14:00:00+09:00").json()["id"]

    resp = client.post(f"/api/lockers/logs/{log_id}/checkout", json={
        "checkout_time": "2024-01-02T00:30:00+09:00",
        "payment": {"cash": 10000},
        "additional_fee_payment": {"cash": 2000},
    })
    assert resp.status_code == 400
    assert "추가요금" in resp.json()["detail"]

    detail = client.get(f"/api/lockers/logs/{log_id}", params={"now": "2024-01-02T00:30:00+09:00"}).json()
    assert detail["status"] == "in_use"
    assert detail["additional_fee"]["fee_amount"] == 3000


def test_checkout_fee_discount(client) -> None:
    log_id = check_in(client, 1, "2024-01-01T14:00:00+09:00").json()["id"]

    resp = client.post(f"/api/lockers/logs/{log_id}/checkout", json={
        "checkout_time": "2024-01-02T00:30:00+09:00",
        "additional_fee_discount": 1000,
        "additional_fee_payment": {"transfer": 2000},
    })
    assert resp.status_code == 200
    event = resp.json()["additional_fee_event"]
    assert event["fee_amount"] == 2000
    assert event["original_fee_amount"] == 3000

    log_id = check_in(client, 2, "2024-01-01T14:00:00+09:00").json()["id"]
    resp = client.post(f"/api/lockers/logs/{log_id}/checkout", json={
        "checkout_time": "2024-01-02T00:30:00+09:00",
        "additional_fee_discount": 5000,
    })
    assert resp.status_code == 400


def test_checkout_without_fee_creates_no_event(client) -> None:
    log_id = check_in(client, 1, "2024-01-01T14:00:00+09:00").json()["id"]
    resp = client.post(f"/api/lockers/logs/{log_id}/checkout", json={
        "checkout_time": "2024-01-01T18:00:00+09:00",
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["additional_fee_event"] is None
    assert data["log"]["payment_cash"] == 10000


def test_foreigner_checkout_charges_per_period(client) -> None:
    log_id = check_in(client, 1, "2024-01-01T20:00:00+09:00", option_type="foreigner").json()["id"]
    resp = client.post(f"/api/lockers/logs/{log_id}/checkout", json={
        "checkout_time": "2024-01-02T21:00:00+09:00",
        "payment": {"card": 25000},
        "additional_fee_payment": {"card": 13000},
    })
    assert resp.status_code == 200
    assert resp.json()["additional_fee_event"]["accrual_count"] == 1


def test_terminal_logs_reject_mutation(client) -> None:
    log_id = check_in(client, 1, "2024-01-01T14:00:00+09:00").json()["id"]
    client.post(f"/api/lockers/logs/{log_id}/checkout", json={"checkout_time": "2024-01-01T18:00:00+09:00"})

    assert client.post(f"/api/lockers/logs/{log_id}/checkout", json={}).status_code == 400
    assert client.post(f"/api/lockers/logs/{log_id}/cancel").status_code == 400
    assert client.put(f"/api/lockers/logs/{log_id}/notes", json={"notes": "x"}).status_code == 400
    assert client.put(
        f"/api/lockers/logs/{log_id}/option", json={"option_type": "discount"}
    ).status_code == 400


def test_missing_log_returns_404(client) -> None:
    assert client.get("/api/lockers/logs/999").status_code == 404


def test_update_option_recomputes_from_frozen_base(client) -> None:
    log_id = check_in(client, 1, "2024-01-01T14:00:00+09:00").json()["id"]
    client.put("/api/settings", json={"day_price": 12000})

    data = client.put(f"/api/lockers/logs/{log_id}/option", json={
        "option_type": "custom", "option_amount": 1500
    }).json()
    assert data["base_price"] == 10000
    assert data["final_price"] == 8500

    notes = client.put(f"/api/lockers/logs/{log_id}/notes", json={"notes": "수건 2장"}).json()
    assert notes["notes"] == "수건 2장"


def test_cancel_updates_summary_and_frees_locker(client) -> None:
    log_id = check_in(client, 1, "2024-01-01T14:00:00+09:00").json()["id"]
    resp = client.post(f"/api/lockers/logs/{log_id}/cancel")
    assert resp.status_code == 200
    assert resp.json()["status"] == "cancelled"

    summary = client.get("/api/statistics/daily-summary/2024-01-01").json()
    assert summary["total_visitors"] == 0
    assert summary["cancellations"] == 1

    assert check_in(client, 1, "2024-01-01T15:00:00+09:00").status_code == 200


def test_active_list_and_cursor_pagination(client) -> None:
    check_in(client, 1, "2024-01-01T11:00:00+09:00")
    check_in(client, 2, "2024-01-01T12:00:00+09:00")
    check_in(client, 3, "2024-01-01T13:00:00+09:00")

    active = client.get("/api/lockers/active").json()
    assert [log["locker_number"] for log in active] == [1, 2, 3]

    first = client.get("/api/lockers/logs", params={"business_day": "2024-01-01", "limit": 2}).json()
    assert [log["locker_number"] for log in first["data"]] == [3, 2]
    assert first["next_cursor"]

    second = client.get("/api/lockers/logs", params={
        "business_day": "2024-01-01", "limit": 2, "cursor": first["next_cursor"]
    }).json()
    assert [log["locker_number"] for log in second["data"]] == [1]
    assert second["next_cursor"] is None


def test_bad_cursor_is_rejected(client) -> None:
    assert client.get("/api/lockers/logs", params={"cursor": "yesterday"}).status_code == 400


def test_option_change_clears_stale_payment_split(client) -> None:
    log_id = check_in(client, 1, "2024-01-01T14:00:00+09:00", payment={"card": 10000}).json()["id"]

    data = client.put(f"/api/lockers/logs/{log_id}/option", json={"option_type": "discount"}).json()
    assert data["final_price"] == 8000
    assert data["payment_card"] == 0
    assert data["payment_cash"] + data["payment_card"] + data["payment_transfer"] == 0

    resp = client.post(f"/api/lockers/logs/{log_id}/checkout", json={
        "checkout_time": "2024-01-01T18:00:00+09:00",
    })
    assert resp.status_code == 200
    assert resp.json()["log"]["payment_cash"] == 8000


def test_option_change_with_new_payment(client) -> None:
    log_id = check_in(client, 1, "2024-01-01T14:00:00+09:00", payment={"card": 10000}).json()["id"]

    mismatch = client.put(f"/api/lockers/logs/{log_id}/option", json={
        "option_type": "discount", "payment": {"card": 10000}
    })
    assert mismatch.status_code == 400

    data = client.put(f"/api/lockers/logs/{log_id}/option", json={
        "option_type": "discount", "payment": {"card": 5000, "transfer": 3000}
    }).json()
    assert data["payment_card"] == 5000
    assert data["payment_transfer"] == 3000

    resp = client.post(f"/api/lockers/logs/{log_id}/checkout", json={
        "checkout_time": "2024-01-01T18:00:00+09:00",
    })
    assert resp.status_code == 200
    assert resp.json()["log"]["payment_card"] == 5000


def test_checkout_requires_fee_split_when_fee_is_due(client) -> None:
    log_id = check_in(client, 1, "2024-01-01T14:00:00+09:00").json()["id"]

    resp = client.post(f"/api/lockers/logs/{log_id}/checkout", json={
        "checkout_time": "2024-01-02T00:30:00+09:00",
    })
    assert resp.status_code == 400
    assert "3,000" in resp.json()["detail"]
    assert client.get(f"/api/lockers/logs/{log_id}").json()["status"] == "in_use"

    # 할인으로 추가요금이 0원이 되면 결제 내역 없이 퇴실 가능
    resp = client.post(f"/api/lockers/logs/{log_id}/checkout", json={
        "checkout_time": "2024-01-02T00:30:00+09:00",
        "additional_fee_discount": 3000,
    })
    assert resp.status_code == 200
    event = resp.json()["additional_fee_event"]
    assert event["fee_amount"] == 0
    assert event["original_fee_amount"] == 3000


def test_cursor_pagination_keeps_rows_with_same_entry_time(client) -> None:
    for number in (1, 2, 3):
        check_in(client, number, "2024-01-01T12:00:00+09:00")

    first = client.get("/api/lockers/logs", params={"business_day": "2024-01-01", "limit": 2}).json()
    assert [log["locker_number"] for log in first["data"]] == [3, 2]

    second = client.get("/api/lockers/logs", params={
        "business_day": "2024-01-01", "limit": 2, "cursor": first["next_cursor"]
    }).json()
    assert [log["locker_number"] for log in second["data"]] == [1]
    assert second["next_cursor"] is None
