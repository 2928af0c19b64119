from __future__ import annotations

ADMIN = "0x00000000000000000000000000000000000000ad"
ALICE = "0x00000000000000000000000000000000000a11ce"
BOB = "0x0000000000000000000000000000000000000b0b"


def _as(identity: str) -> dict:
    return {"X-Caller-Identity": identity}


def _create_lecture(client) -> int:
    resp = client.post("/api/events", json={"name": "Lecture1", "start_time": 100, "end_time": 200}, headers=_as(ADMIN))
    assert resp.status_code == 201
    return resp.get_json()["event_id"]


def _register(client, identity: str):
    return client.post("/api/participants", json={"identity": identity}, headers=_as(ADMIN))


def test_registry_summary(client):
    body = client.get("/api/registry").get_json()
    assert body == {"success": True, "admin": ADMIN, "event_counter": 0, "participant_count": 0}


def test_create_and_get_event(client):
    event_id = _create_lecture(client)
    assert event_id == 1

    body = client.get("/api/events/1").get_json()
    assert body["event"] == {"event_id": 1, "name": "Lecture1", "start_time": 100, "end_time": 200, "active": True}
    assert [e["event_id"] for e in client.get("/api/events").get_json()["events"]] == [1]


def test_unknown_event_is_404(client):
    resp = client.get("/api/events/7")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "NotFound"


def test_missing_caller_header_is_401(client):
    resp = client.post("/api/events", json={"name": "Lecture1", "start_time": 100, "end_time": 200})
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_non_admin_create_event_is_403(client):
    resp = client.post("/api/events", json={"name": "Lecture1", "start_time": 100, "end_time": 200}, headers=_as(ALICE))
    assert resp.status_code == 403
    assert resp.get_json()["error"] == "Unauthorized"
    assert client.get("/api/registry").get_json()["event_counter"] == 0


def test_bad_time_range_is_400(client):
    resp = client.post("/api/events", json={"name": "Lecture1", "start_time": 200, "end_time": 200}, headers=_as(ADMIN))
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "InvalidTimeRange"


def test_malformed_bodies_are_400(client):
    resp = client.post("/api/events", data="not json", headers=_as(ADMIN), content_type="application/json")
    assert resp.status_code == 400
    resp = client.post("/api/events", json={"name": "L", "start_time": "soon", "end_time": 5}, headers=_as(ADMIN))
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "ValidationError"
    resp = client.post("/api/events", json={"name": "  ", "start_time": 1, "end_time": 5}, headers=_as(ADMIN))
    assert resp.status_code == 400


def test_register_participant_flow(client):
    resp = _register(client, ALICE)
    assert resp.status_code == 201
    assert client.get(f"/api/participants/{ALICE}").get_json()["registered"] is True

    dup = _register(client, ALICE)
    assert dup.status_code == 409
    assert dup.get_json()["error"] == "AlreadyRegistered"

    null = _register(client, "0x0000000000000000000000000000000000000000")
    assert null.status_code == 400
    assert null.get_json()["error"] == "InvalidIdentity"


def test_mark_attendance_flow(client, clock):
    event_id = _create_lecture(client)
    _register(client, ALICE)

    clock.value = 150
    resp = client.post(f"/api/events/{event_id}/attendance", json={"location": "Room3", "metadata": ""}, headers=_as(ALICE))
    assert resp.status_code == 201
    assert resp.get_json()["attendance"]["timestamp"] == 150

    clock.value = 160
    again = client.post(f"/api/events/{event_id}/attendance", json={"location": "Room3"}, headers=_as(ALICE))
    assert again.status_code == 409
    assert again.get_json()["error"] == "AlreadyMarked"

    stored = client.get(f"/api/events/{event_id}/attendance/{ALICE}").get_json()["attendance"]
    assert stored["timestamp"] == 150
    assert [r["identity"] for r in client.get(f"/api/events/{event_id}/attendance").get_json()["attendance"]] == [ALICE]


def test_mark_attendance_rejections(client, clock):
    event_id = _create_lecture(client)
    _register(client, BOB)

    clock.value = 50
    early = client.post(f"/api/events/{event_id}/attendance", json={"location": "Room3"}, headers=_as(BOB))
    assert early.status_code == 422
    assert early.get_json()["error"] == "OutsideEventWindow"

    clock.value = 250
    late = client.post(f"/api/events/{event_id}/attendance", json={"location": "Room3"}, headers=_as(BOB))
    assert late.get_json()["error"] == "OutsideEventWindow"

    clock.value = 150
    missing = client.post("/api/events/99/attendance", json={"location": "Room3"}, headers=_as(BOB))
    assert missing.status_code == 404
    assert missing.get_json()["error"] == "EventNotActive"

    stranger = client.post(f"/api/events/{event_id}/attendance", json={"location": "Room3"}, headers=_as(ALICE))
    assert stranger.status_code == 403

    assert client.get(f"/api/events/{event_id}/attendance/{BOB}").status_code == 404


def test_csv_export_is_admin_only(client, clock):
    event_id = _create_lecture(client)
    _register(client, ALICE)
    clock.value = 150
    client.post(f"/api/events/{event_id}/attendance", json={"location": "Room3", "metadata": "seat 4"}, headers=_as(ALICE))

    assert client.get(f"/api/events/{event_id}/attendance.csv", headers=_as(ALICE)).status_code == 403

    resp = client.get(f"/api/events/{event_id}/attendance.csv", headers=_as(ADMIN))
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    lines = resp.data.decode("utf-8-sig").strip().splitlines()
    assert lines[0] == "event_id,event_name,identity,timestamp,timestamp_utc,location,metadata"
    assert lines[1] == f"1,Lecture1,{ALICE},150,1970-01-01T00:02:30Z,Room3,seat 4"


def test_notifications_endpoint(client, clock):
    event_id = _create_lecture(client)
    _register(client, ALICE)
    clock.value = 120
    client.post(f"/api/events/{event_id}/attendance", json={"location": "Room3"}, headers=_as(ALICE))

    items = client.get("/api/notifications").get_json()["notifications"]
    assert [n["kind"] for n in items] == ["EventCreated", "ParticipantRegistered", "AttendanceMarked"]

    tail = client.get("/api/notifications?after=2").get_json()["notifications"]
    assert tail == [{"sequence": 3, "kind": "AttendanceMarked", "event_id": 1, "identity": ALICE, "timestamp": 120}]

    assert client.get("/api/notifications?limit=0").status_code == 400


def test_whoami(client):
    _register(client, ALICE)
    body = client.get("/api/whoami", headers=_as(ALICE)).get_json()
    assert body == {"success": True, "identity": ALICE, "is_admin": False, "registered": True}


def test_unmatched_routes_answer_in_json(client):
    resp = client.get("/api/events/-1")
    assert resp.status_code == 404
    assert resp.is_json
    assert resp.get_json()["success"] is False
    assert resp.get_json()["error"] == "NotFound"

    resp = client.delete("/api/events", headers=_as(ADMIN))
    assert resp.status_code == 405
    assert resp.get_json()["error"] == "MethodNotAllowed"
    assert "POST" in resp.headers["Allow"]
