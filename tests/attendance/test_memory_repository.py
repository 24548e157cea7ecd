from __future__ import annotations

import threading
from datetime import datetime
from itertools import count

import pytest

from timekeeper.attendance.memory_repository import InMemorySessionRepository
from timekeeper.attendance.model import Session, SessionFilter
from timekeeper.attendance.service import AttendanceService
from timekeeper.core.enums import Department, SessionStatus
from timekeeper.core.exceptions import AlreadyClosedError, DuplicateSessionError


def _session(session_id: str, name: str = "Alice", **overrides) -> Session:
    fields = dict(
        id=session_id,
        employee_name=name,
        department=Department.OTHER,
        clock_in_time=datetime(2026, 3, 2, 9, 0),
        status=SessionStatus.ACTIVE,
        date="2026-03-02",
    )
    fields.update(overrides)
    return Session(**fields)


def test_insert_then_get_returns_identical_session():
    repo = InMemorySessionRepository()
    session = _session("a")

    repo.insert(session)

    assert repo.get_by_id("a") == session


def test_insert_enforces_one_open_session_per_employee_and_day():
    repo = InMemorySessionRepository()
    repo.insert(_session("a"))

    with pytest.raises(DuplicateSessionError) as excinfo:
        repo.insert(_session("b"))

    assert excinfo.value.record_id == "a"
    assert repo.get_by_id("b") is None


def test_closed_session_does_not_block_new_one():
    repo = InMemorySessionRepository()
    repo.insert(_session("a"))
    repo.update("a", clock_out_time=datetime(2026, 3, 2, 10, 0), total_hours=1.0, status=SessionStatus.COMPLETED)

    repo.insert(_session("b", clock_in_time=datetime(2026, 3, 2, 11, 0)))

    assert repo.find_open_by_employee_and_date("Alice", "2026-03-02").id == "b"


def test_update_unknown_id_returns_none():
    assert InMemorySessionRepository().update("nope", status=SessionStatus.COMPLETED) is None


def test_concurrent_clock_ins_create_exactly_one_session():
    repo = InMemorySessionRepository()
    service = AttendanceService(repo, clock=lambda: datetime(2026, 3, 2, 8, 0))
    barrier = threading.Barrier(8)
    outcomes: list[str] = []
    lock = threading.Lock()

    def worker():
        barrier.wait()
        try:
            service.clock_in("Alice", "Other")
            result = "ok"
        except DuplicateSessionError:
            result = "duplicate"
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("duplicate") == 7
    assert len(repo.query_by_date("2026-03-02")) == 1


def test_close_sets_clock_out_once():
    repo = InMemorySessionRepository()
    repo.insert(_session("a"))
    out = datetime(2026, 3, 2, 10, 0)

    closed = repo.close("a", clock_out_time=out, total_hours=1.0, status=SessionStatus.COMPLETED)

    assert closed.clock_out_time == out
    assert closed.status == SessionStatus.COMPLETED
    with pytest.raises(AlreadyClosedError):
        repo.close("a", clock_out_time=datetime(2026, 3, 2, 12, 0), total_hours=3.0, status=SessionStatus.COMPLETED)
    assert repo.get_by_id("a").clock_out_time == out


def test_close_unknown_id_returns_none():
    repo = InMemorySessionRepository()

    assert repo.close("nope", clock_out_time=datetime(2026, 3, 2, 10, 0), total_hours=1.0, status=SessionStatus.COMPLETED) is None


class RendezvousRepository(InMemorySessionRepository):
    """Holds every get_by_id caller until all of them have read the record."""

    def __init__(self, parties: int):
        super().__init__()
        self.barrier = threading.Barrier(parties)

    def get_by_id(self, session_id):
        found = super().get_by_id(session_id)
        self.barrier.wait(timeout=5)
        return found


def test_concurrent_clock_outs_close_the_session_once():
    repo = RendezvousRepository(parties=2)
    repo.insert(_session("a", clock_in_time=datetime(2026, 3, 2, 8, 0)))
    service = AttendanceService(repo)
    outcomes: list[tuple] = []
    lock = threading.Lock()

    def worker(hour):
        try:
            closed = service.clock_out("a", now=datetime(2026, 3, 2, hour, 0))
            result = ("ok", closed.clock_out_time)
        except AlreadyClosedError:
            result = ("closed", None)
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker, args=(hour,)) for hour in (10, 12)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(kind for kind, _ in outcomes) == ["closed", "ok"]
    winner = next(when for kind, when in outcomes if kind == "ok")
    assert repo.query_by_date("2026-03-02")[0].clock_out_time == winner


def test_listing_waits_for_an_insert_in_progress():
    repo = InMemorySessionRepository()
    listings: list[list[str]] = []
    errors: list[Exception] = []
    readers: list[threading.Thread] = []

    def list_all():
        try:
            listings.append([s.id for s in repo.query_by_filter(SessionFilter())])
        except Exception as exc:
            errors.append(exc)

    class ListingCounter:
        """Starts a concurrent listing while insert is assigning a sequence number."""

        def __init__(self):
            self._inner = count(1)

        def __next__(self):
            reader = threading.Thread(target=list_all)
            reader.start()
            reader.join(timeout=0.2)
            readers.append(reader)
            return next(self._inner)

    repo._counter = ListingCounter()
    repo.insert(_session("a"))
    for reader in readers:
        reader.join()

    assert errors == []
    assert listings == [["a"]]
