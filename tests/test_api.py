from datetime import date


def _borrow(client, member_id, copy_id, day="2024-09-01"):
    return client.post("/loans/", json={"member_id": member_id, "copy_id": copy_id, "date": day})


def test_health(client):
    assert client.get("/health").get_json() == {"ok": True}


def test_borrow_and_return_flow(client, library):
    resp = _borrow(client, library.alice, library.copies[0])
    assert resp.status_code == 201
    loan_id = resp.get_json()["loan_id"]

    resp = client.post(f"/loans/{loan_id}/return", json={"date": "2024-09-20"})
    assert resp.status_code == 200
    assert resp.get_json()["success"] is True

    fines = client.get(f"/members/{library.alice}/fines/outstanding").get_json()["data"]
    assert len(fines) == 1
    assert fines[0]["amount"] == 5.0
    assert fines[0]["status"] == "Outstanding"
    assert fines[0]["borrow_date"] == "2024-09-01"


def test_borrow_missing_fields(client, library):
    resp = client.post("/loans/", json={"member_id": library.alice})
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_borrow_limit_maps_to_409(client, library):
    for copy_id in library.copies[:5]:
        assert _borrow(client, library.alice, copy_id).status_code == 201

    resp = _borrow(client, library.alice, library.copies[5])
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "BorrowLimitExceeded"


def test_unavailable_copy_and_unknown_member(client, library):
    _borrow(client, library.alice, library.copies[0])

    resp = _borrow(client, library.bob, library.copies[0])
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "CopyUnavailable"

    resp = _borrow(client, 9999, library.copies[1])
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "NotFound"


def test_return_twice(client, library):
    loan_id = _borrow(client, library.alice, library.copies[0]).get_json()["loan_id"]
    client.post(f"/loans/{loan_id}/return", json={"date": "2024-09-05"})

    resp = client.post(f"/loans/{loan_id}/return", json={"date": "2024-09-06"})
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "AlreadyReturned"


def test_bad_date_is_validation_error(client, library):
    resp = _borrow(client, library.alice, library.copies[0], day="yesterday")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "ValidationError"


def test_record_payment_endpoint(client, library):
    loan_id = _borrow(client, library.alice, library.copies[0]).get_json()["loan_id"]
    client.post(f"/loans/{loan_id}/return", json={"date": "2024-09-25"})
    fine_id = client.get(f"/members/{library.alice}/fines").get_json()["data"][0]["fine_id"]

    resp = client.post(f"/fines/{fine_id}/transactions", json={"type": "Payment", "date": "2024-09-26"})
    assert resp.status_code == 201
    assert resp.get_json()["transaction_id"]

    assert client.get(f"/fines/{fine_id}/status").get_json()["status"] == "Paid"
    assert client.get(f"/members/{library.alice}/fines/outstanding").get_json()["data"] == []


def test_current_loans_and_history_endpoints(client, library):
    _borrow(client, library.alice, library.copies[0], "2024-09-02")
    _borrow(client, library.dave, library.copies[1], "2024-09-03")

    everyone = client.get("/loans/current").get_json()["data"]
    assert len(everyone) == 2

    lending_roles = client.get("/loans/current?role=lending").get_json()["data"]
    assert [r["member_id"] for r in lending_roles] == [library.alice]

    history = client.get(f"/members/{library.alice}/loans?start=2024-09-01&end=2024-09-30").get_json()
    assert [r["borrow_date"] for r in history["data"]] == ["2024-09-02"]

    resp = client.get(f"/members/{library.alice}/loans?start=2024-09-30&end=2024-09-01")
    assert resp.status_code == 400


def test_member_and_catalog_endpoints(client, app):
    resp = client.post("/catalog/item-types", json={"name": "Digital Media", "loan_period_days": 30})
    assert resp.status_code == 201
    type_id = resp.get_json()["id"]

    assert client.post("/catalog/item-types", json={"name": "Broken", "loan_period_days": 0}).status_code == 400

    item_id = client.post("/catalog/items", json={"title": "Podcast", "item_type_id": type_id}).get_json()["id"]
    copy_id = client.post(
        "/catalog/copies", json={"item_id": item_id, "condition": "New", "location": "Server"}
    ).get_json()["id"]
    assert client.get(f"/catalog/copies/{copy_id}").get_json()["data"]["title"] == "Podcast"

    member = client.post("/members/", json={"name": "Erin", "email": "erin@example.com", "role": "Student"})
    assert member.status_code == 201
    member_id = member.get_json()["id"]

    dup = client.post("/members/", json={"name": "Erin 2", "email": "ERIN@example.com", "role": "Staff"})
    assert dup.status_code == 409

    resp = client.post(f"/members/{member_id}/reservations", json={"copy_id": copy_id, "date": str(date(2024, 9, 1))})
    assert resp.status_code == 201
    reservations = client.get(f"/members/{member_id}/reservations").get_json()["data"]
    assert reservations[0]["title"] == "Podcast"
    assert client.get(f"/members/{member_id}").get_json()["data"]["email"] == "erin@example.com"
