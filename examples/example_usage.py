"""Example: drive the registry service directly (no Flask, in-memory tables).

Controllers are a thin layer; the rules live in AttendanceRegistry.
"""

from src.attendance_registry.attendance_registry.container import build_container
from src.attendance_registry.attendance_registry.core.exceptions import DomainError

ADMIN = "0x00000000000000000000000000000000000000ad"
ALICE = "0x00000000000000000000000000000000000a11ce"


def main():
    container = build_container(admin_identity=ADMIN)
    registry = container.registry
    registry.subscribe(lambda n: print("notification:", n.to_dict()))

    event_id = registry.create_event(caller=ADMIN, name="Lecture1", start_time=100, end_time=200)
    registry.register_participant(caller=ADMIN, identity=ALICE)
    registry.mark_attendance(caller=ALICE, now=150, event_id=event_id, location="Room3", metadata="")

    try:
        registry.mark_attendance(caller=ALICE, now=160, event_id=event_id, location="Room3", metadata="")
    except DomainError as e:
        print(f"rejected: {e.code}: {e}")

    print(registry.get_attendance(event_id, ALICE))


if __name__ == "__main__":
    main()
