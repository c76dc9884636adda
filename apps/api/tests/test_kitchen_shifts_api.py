import uuid

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from conftest import shift_body

from app.core.database import get_db
from app.main import app as fastapi_app
from app.models.kitchen_shift import KitchenShift


def _post(client, member, day, shift_time, role):
    return client.post("/kitchen-shifts", json=shift_body(member, day, shift_time, role))


# ---------- register ----------
def test_register_success_payload(client, make_member):
    alice = make_member("Alice")

    r = _post(client, alice, "Monday", "morning", "manager")

    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Successfully registered as manager for Monday morning shift"
    assert body["data"]["day"] == "Monday"
    assert body["data"]["shiftTime"] == "morning"
    assert body["data"]["role"] == "manager"
    assert body["data"]["remainingSpots"] == 4
    uuid.UUID(body["data"]["id"])


def test_register_rejections_are_409_with_codes(client, make_member):
    alice, bob, carol = make_member("Alice"), make_member("Bob"), make_member("Carol")

    r = _post(client, bob, "Monday", "morning", "volunteer")
    assert r.status_code == 409
    assert r.json()["code"] == "MANAGER_REQUIRED_FIRST"
    assert r.json()["error"] == (
        "A shift manager must be assigned first before volunteers can register. "
        "Please check back later or consider becoming the shift manager!"
    )

    assert _post(client, alice, "Monday", "morning", "manager").status_code == 201

    r = _post(client, alice, "Monday", "morning", "manager")
    assert r.status_code == 409
    assert r.json() == {
        "success": False,
        "error": "You are already registered for this shift",
        "code": "DUPLICATE_REGISTRATION",
    }

    r = _post(client, carol, "Monday", "morning", "manager")
    assert r.status_code == 409
    assert r.json()["code"] == "MANAGER_SLOT_TAKEN"
    assert r.json()["error"] == "This shift already has a manager. Please register as a volunteer instead."


def test_register_full_slot(client, make_member):
    assert _post(client, make_member("Boss"), "Wednesday", "morning", "manager").status_code == 201
    for i in range(4):
        r = _post(client, make_member(f"Vol{i}"), "Wednesday", "morning", "volunteer")
        assert r.status_code == 201
    assert r.json()["data"]["remainingSpots"] == 0

    r = _post(client, make_member("Eve"), "Wednesday", "morning", "volunteer")
    assert r.status_code == 409
    assert r.json()["code"] == "SLOT_FULL"
    assert r.json()["error"] == "This shift is full. 5 volunteers are already registered."


def test_malformed_enums_fail_validation_without_writes(client, db, make_member):
    alice = make_member("Alice")

    for field, value in [("day", "Saturday"), ("shiftTime", "night"), ("role", "chef")]:
        body = shift_body(alice, "Monday", "morning", "manager")
        body[field] = value
        r = client.post("/kitchen-shifts", json=body)
        assert r.status_code == 400
        assert r.json()["error"] == "Validation failed"
        assert r.json()["code"] == "VALIDATION_FAILED"
        assert r.json()["details"]

    assert db.query(KitchenShift).count() == 0


def test_blank_member_name_fails_validation(client, db, make_member):
    body = shift_body(make_member("Alice"), "Monday", "morning", "manager")
    body["memberName"] = "   "

    r = client.post("/kitchen-shifts", json=body)
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_FAILED"
    assert db.query(KitchenShift).count() == 0


def test_member_name_is_stored_trimmed(client, db, make_member):
    body = shift_body(make_member("Alice"), "Monday", "morning", "manager")
    body["memberName"] = "  Alice Camper  "

    assert client.post("/kitchen-shifts", json=body).status_code == 201
    assert db.query(KitchenShift).one().member_name == "Alice Camper"


def test_missing_fields_fail_validation(client):
    r = client.post("/kitchen-shifts", json={"day": "Monday"})
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_FAILED"


def test_unknown_member_is_404(client):
    body = {
        "memberId": str(uuid.uuid4()),
        "memberName": "Ghost",
        "memberEmail": "ghost@example.com",
        "day": "Monday",
        "shiftTime": "morning",
        "role": "manager",
    }
    r = client.post("/kitchen-shifts", json=body)
    assert r.status_code == 404
    assert r.json()["error"] == "Member not found"


def test_unapproved_member_is_rejected(client, db, make_member):
    pending = make_member("Pending", approved=False)

    r = _post(client, pending, "Monday", "morning", "manager")
    assert r.status_code == 400
    assert r.json()["error"] == "Member is not approved yet"
    assert db.query(KitchenShift).count() == 0


def test_database_unreachable_is_503(client, make_member):
    alice = make_member("Alice")

    def unreachable():
        raise OperationalError("connect", {}, Exception("timeout expired"))

    fastapi_app.dependency_overrides[get_db] = unreachable
    try:
        r = _post(client, alice, "Monday", "morning", "manager")
    finally:
        fastapi_app.dependency_overrides.pop(get_db, None)

    assert r.status_code == 503
    assert r.json()["error"] == "Database connection timeout. Please try again."
    assert r.json()["code"] == "DATABASE_UNAVAILABLE"


def test_unexpected_error_uses_error_envelope(make_member, db):
    alice = make_member("Alice")

    def broken():
        raise RuntimeError("boom")

    fastapi_app.dependency_overrides[get_db] = broken
    try:
        with TestClient(fastapi_app, raise_server_exceptions=False) as c:
            r = c.post("/kitchen-shifts", json=shift_body(alice, "Monday", "morning", "manager"))
    finally:
        fastapi_app.dependency_overrides.pop(get_db, None)

    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Internal server error"}


# ---------- availability ----------
def test_availability_is_public(client, make_member):
    _post(client, make_member("Alice"), "Monday", "morning", "manager")
    _post(client, make_member("Bob"), "Monday", "morning", "volunteer")

    r = client.get("/kitchen-shifts", params={"availability": "true"})
    assert r.status_code == 200
    data = r.json()["data"]
    assert len(data) == 10
    assert [(s["day"], s["shiftTime"]) for s in data[:2]] == [("Monday", "morning"), ("Monday", "evening")]

    mon = data[0]
    assert mon["capacity"] == 5
    assert mon["managerCount"] == 1
    assert mon["volunteerCount"] == 1
    assert mon["totalRegistered"] == 2
    assert mon["availableSpots"] == 3
    assert mon["needsManager"] is False
    assert mon["canRegisterVolunteer"] is True
    assert mon["canRegisterManager"] is False
    assert mon["registeredMembers"] == [
        {"name": "Alice Camper", "role": "manager"},
        {"name": "Bob Camper", "role": "volunteer"},
    ]

    assert data[1]["capacity"] == 6
    assert data[1]["needsManager"] is True

    again = client.get("/kitchen-shifts", params={"availability": "true"})
    assert again.json() == r.json()


# ---------- admin listing ----------
def test_listing_requires_admin(client):
    r = client.get("/kitchen-shifts")
    assert r.status_code == 401

    r = client.get("/kitchen-shifts", headers={"Authorization": "Bearer not-a-token"})
    assert r.status_code == 401
    assert r.json()["error"] == "Invalid or expired token"


def test_listing_sorted_and_paginated(client, make_member, admin_headers):
    _post(client, make_member("Fri"), "Friday", "morning", "manager")
    _post(client, make_member("MonEve"), "Monday", "evening", "manager")
    _post(client, make_member("MonMgr"), "Monday", "morning", "manager")
    _post(client, make_member("MonVol"), "Monday", "morning", "volunteer")

    r = client.get("/kitchen-shifts", headers=admin_headers)
    assert r.status_code == 200
    rows = r.json()["data"]
    assert [(x["day"], x["shiftTime"], x["role"]) for x in rows] == [
        ("Monday", "morning", "manager"),
        ("Monday", "morning", "volunteer"),
        ("Monday", "evening", "manager"),
        ("Friday", "morning", "manager"),
    ]
    assert rows[0]["memberName"] == "MonMgr Camper"
    assert rows[0]["memberEmail"] == "monmgr.camper@example.com"
    assert r.json()["pagination"] == {"current": 1, "pages": 1, "total": 4, "limit": 100}

    r = client.get("/kitchen-shifts", params={"page": 2, "limit": 3}, headers=admin_headers)
    assert [x["day"] for x in r.json()["data"]] == ["Friday"]
    assert r.json()["pagination"] == {"current": 2, "pages": 2, "total": 4, "limit": 3}


# ---------- delete ----------
def test_delete_registration(client, make_member, admin_headers):
    created = _post(client, make_member("Alice"), "Monday", "morning", "manager").json()["data"]
    _post(client, make_member("Bob"), "Monday", "morning", "volunteer")

    r = client.delete(f"/kitchen-shifts/{created['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["message"] == "Kitchen shift registration deleted successfully"
    assert r.json()["orphanedVolunteers"] == 1

    r = client.delete(f"/kitchen-shifts/{created['id']}", headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["error"] == "Shift not found"

    slot = client.get("/kitchen-shifts", params={"availability": "true"}).json()["data"][0]
    assert slot["managerCount"] == 0
    assert slot["volunteerCount"] == 1


def test_delete_requires_admin(client, make_member):
    created = _post(client, make_member("Alice"), "Monday", "morning", "manager").json()["data"]
    assert client.delete(f"/kitchen-shifts/{created['id']}").status_code == 401


def test_clear_member(client, make_member, admin_headers):
    alice = make_member("Alice")
    _post(client, alice, "Monday", "morning", "manager")
    _post(client, alice, "Tuesday", "evening", "manager")

    r = client.delete("/kitchen-shifts/clear-member", params={"memberId": str(alice.member_id)}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["deletedCount"] == 2
    assert r.json()["message"] == "Successfully cleared 2 kitchen shift registration(s)"

    r = client.delete("/kitchen-shifts/clear-member", params={"memberId": str(alice.member_id)}, headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["error"] == "No kitchen shifts found for this member"
