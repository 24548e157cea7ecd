"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the attendance rules live in the services.
"""

from timekeeper.attendance.model import SessionFilter
from timekeeper.container import build_container


def main():
    container = build_container(backend="memory")
    service = container.attendance_service

    session = service.clock_in("Jane Doe", "Sales Team")
    print(service.get_status("Jane Doe"))
    print(service.list_sessions(SessionFilter(employee_name="jane")))
    print(service.get_statistics())
    print(session.id)


if __name__ == "__main__":
    main()
