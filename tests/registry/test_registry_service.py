from __future__ import annotations

import pytest

from src.attendance_registry.attendance_registry.core.enums import NotificationKind
from src.attendance_registry.attendance_registry.core.exceptions import (
    AlreadyMarked,
    AlreadyRegistered,
    EventNotActive,
    InvalidIdentity,
    InvalidTimeRange,
    OutsideEventWindow,
    Unauthorized,
)

ADMIN = "0x00000000000000000000000000000000000000ad"
ALICE = "0x00000000000000000000000000000000000a11ce"
BOB = "0x0000000000000000000000000000000000000b0b"


@pytest.fixture
def lecture(registry):
    """Lecture1 [100, 200] with Alice and Bob registered."""
    event_id = registry.create_event(caller=ADMIN, name="Lecture1", start_time=100, end_time=200)
    registry.register_participant(caller=ADMIN, identity=ALICE)
    registry.register_participant(caller=ADMIN, identity=BOB)
    return event_id


def test_lecture_scenario(registry):
    event_id = registry.create_event(caller=ADMIN, name="Lecture1", start_time=100, end_time=200)
    assert event_id == 1
    assert registry.event_counter == 1

    registry.register_participant(caller=ADMIN, identity=ALICE)
    record = registry.mark_attendance(caller=ALICE, now=150, event_id=1, location="Room3", metadata="")
    assert record.timestamp == 150

    with pytest.raises(AlreadyMarked):
        registry.mark_attendance(caller=ALICE, now=160, event_id=1, location="Room9", metadata="late")

    stored = registry.get_attendance(1, ALICE)
    assert stored is not None
    assert stored.timestamp == 150
    assert stored.location == "Room3"
    assert stored.metadata == ""


def test_event_ids_are_sequential(registry):
    ids = [registry.create_event(caller=ADMIN, name=f"E{i}", start_time=i, end_time=i + 10) for i in range(5)]
    assert ids == [1, 2, 3, 4, 5]
    assert registry.event_counter == 5
    assert [e.event_id for e in registry.list_events()] == ids


def test_created_event_is_stored_active(registry):
    event_id = registry.create_event(caller=ADMIN, name="Workshop", start_time=10, end_time=20)
    event = registry.get_event(event_id)
    assert event is not None
    assert (event.name, event.start_time, event.end_time, event.active) == ("Workshop", 10, 20, True)


@pytest.mark.parametrize("start,end", [(200, 100), (100, 100)])
def test_create_event_rejects_bad_time_range(registry, start, end):
    with pytest.raises(InvalidTimeRange):
        registry.create_event(caller=ADMIN, name="Broken", start_time=start, end_time=end)
    assert registry.event_counter == 0
    assert registry.notifications() == []


def test_failed_creation_does_not_consume_an_id(registry):
    registry.create_event(caller=ADMIN, name="A", start_time=1, end_time=2)
    with pytest.raises(InvalidTimeRange):
        registry.create_event(caller=ADMIN, name="B", start_time=5, end_time=5)
    assert registry.create_event(caller=ADMIN, name="C", start_time=1, end_time=2) == 2


def test_non_admin_cannot_create_event(registry):
    with pytest.raises(Unauthorized):
        registry.create_event(caller=ALICE, name="Nope", start_time=1, end_time=2)
    assert registry.event_counter == 0


def test_unauthorized_is_checked_before_time_range(registry):
    with pytest.raises(Unauthorized):
        registry.create_event(caller=ALICE, name="Nope", start_time=5, end_time=1)


def test_register_participant_grows_set_by_one(registry):
    assert registry.participant_count() == 0
    registry.register_participant(caller=ADMIN, identity=ALICE)
    assert registry.participant_count() == 1
    assert registry.is_registered(ALICE)

    with pytest.raises(AlreadyRegistered):
        registry.register_participant(caller=ADMIN, identity=ALICE)
    assert registry.participant_count() == 1


def test_register_participant_requires_admin(registry):
    with pytest.raises(Unauthorized):
        registry.register_participant(caller=ALICE, identity=BOB)
    assert not registry.is_registered(BOB)


@pytest.mark.parametrize("identity", ["", "   ", "0x0000000000000000000000000000000000000000", "0x00", None])
def test_register_participant_rejects_null_identity(registry, identity):
    with pytest.raises(InvalidIdentity):
        registry.register_participant(caller=ADMIN, identity=identity)
    assert registry.participant_count() == 0


def test_admin_is_not_auto_registered(registry):
    event_id = registry.create_event(caller=ADMIN, name="Staff", start_time=0, end_time=10)
    assert not registry.is_registered(ADMIN)
    with pytest.raises(Unauthorized):
        registry.mark_attendance(caller=ADMIN, now=5, event_id=event_id, location="HQ", metadata="")

    registry.register_participant(caller=ADMIN, identity=ADMIN)
    record = registry.mark_attendance(caller=ADMIN, now=5, event_id=event_id, location="HQ", metadata="")
    assert record.identity == ADMIN


def test_unregistered_caller_cannot_mark(registry, lecture):
    stranger = "0x00000000000000000000000000000000000dead1"
    with pytest.raises(Unauthorized):
        registry.mark_attendance(caller=stranger, now=150, event_id=lecture, location="Room3", metadata="")
    # regardless of event validity
    with pytest.raises(Unauthorized):
        registry.mark_attendance(caller=stranger, now=150, event_id=999, location="Room3", metadata="")
    assert registry.get_attendance(lecture, stranger) is None
    assert registry.list_attendance(lecture) == []


def test_mark_unknown_event_is_not_active(registry, lecture):
    with pytest.raises(EventNotActive):
        registry.mark_attendance(caller=ALICE, now=150, event_id=42, location="Room3", metadata="")
    with pytest.raises(EventNotActive):
        registry.mark_attendance(caller=ALICE, now=150, event_id=0, location="Room3", metadata="")


@pytest.mark.parametrize("now", [50, 99, 201, 250])
def test_mark_outside_window(registry, lecture, now):
    with pytest.raises(OutsideEventWindow):
        registry.mark_attendance(caller=BOB, now=now, event_id=lecture, location="Room3", metadata="")
    assert registry.get_attendance(lecture, BOB) is None


@pytest.mark.parametrize("now", [100, 200])
def test_mark_window_is_inclusive(registry, lecture, now):
    record = registry.mark_attendance(caller=BOB, now=now, event_id=lecture, location="Room3", metadata="")
    assert record.timestamp == now


def test_zero_timestamp_is_a_real_record(registry):
    event_id = registry.create_event(caller=ADMIN, name="Epoch", start_time=0, end_time=10)
    registry.register_participant(caller=ADMIN, identity=ALICE)
    registry.mark_attendance(caller=ALICE, now=0, event_id=event_id, location="Origin", metadata="")

    stored = registry.get_attendance(event_id, ALICE)
    assert stored is not None and stored.timestamp == 0
    with pytest.raises(AlreadyMarked):
        registry.mark_attendance(caller=ALICE, now=1, event_id=event_id, location="Origin", metadata="")


def test_attendance_is_per_event_and_identity(registry, lecture):
    second = registry.create_event(caller=ADMIN, name="Lecture2", start_time=100, end_time=300)
    registry.mark_attendance(caller=ALICE, now=150, event_id=lecture, location="Room3", metadata="")
    registry.mark_attendance(caller=ALICE, now=150, event_id=second, location="Room4", metadata="")
    registry.mark_attendance(caller=BOB, now=151, event_id=lecture, location="Room3", metadata="row 2")

    assert [r.identity for r in registry.list_attendance(lecture)] == [ALICE, BOB]
    assert [r.location for r in registry.list_attendance(second)] == ["Room4"]


def test_notifications_are_ordered(registry, lecture):
    registry.mark_attendance(caller=ALICE, now=150, event_id=lecture, location="Room3", metadata="")

    items = registry.notifications()
    assert [n.sequence for n in items] == [1, 2, 3, 4]
    assert [n.kind for n in items] == [
        NotificationKind.EVENT_CREATED,
        NotificationKind.PARTICIPANT_REGISTERED,
        NotificationKind.PARTICIPANT_REGISTERED,
        NotificationKind.ATTENDANCE_MARKED,
    ]
    assert items[0].to_dict() == {
        "sequence": 1,
        "kind": "EventCreated",
        "event_id": 1,
        "name": "Lecture1",
        "start_time": 100,
        "end_time": 200,
    }
    assert items[3].to_dict() == {
        "sequence": 4,
        "kind": "AttendanceMarked",
        "event_id": 1,
        "identity": ALICE,
        "timestamp": 150,
    }
    assert [n.sequence for n in registry.notifications(2)] == [3, 4]
    assert [n.sequence for n in registry.notifications(0, limit=1)] == [1]


def test_rejected_calls_emit_nothing(registry, lecture):
    before = len(registry.notifications())
    with pytest.raises(OutsideEventWindow):
        registry.mark_attendance(caller=ALICE, now=10, event_id=lecture, location="Room3", metadata="")
    with pytest.raises(AlreadyRegistered):
        registry.register_participant(caller=ADMIN, identity=ALICE)
    assert len(registry.notifications()) == before


def test_subscribers_see_committed_notifications_only(registry):
    seen = []
    registry.subscribe(seen.append)

    registry.create_event(caller=ADMIN, name="Lecture1", start_time=100, end_time=200)
    with pytest.raises(InvalidTimeRange):
        registry.create_event(caller=ADMIN, name="Bad", start_time=2, end_time=1)

    assert [n.kind for n in seen] == [NotificationKind.EVENT_CREATED]


def test_failing_subscriber_does_not_undo_call(registry):
    def broken(_notification):
        raise RuntimeError("listener down")

    registry.subscribe(broken)
    event_id = registry.create_event(caller=ADMIN, name="Lecture1", start_time=100, end_time=200)
    assert registry.get_event(event_id) is not None
