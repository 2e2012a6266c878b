from collections import defaultdict

import pytest

from catalog import build_default_catalog, build_sessions, without_faculty
from catalog.default_catalog import FIXED_BLOCKS
from models.data_models import INFEASIBLE, FixedBlock, SchedulerConfig
from solver.csp_solver import CSPSolver


@pytest.fixture(scope="module")
def solved():
    catalog = build_default_catalog()
    solver = CSPSolver(build_sessions(catalog), catalog)
    return solver, solver.solve()


def hour_slots(session):
    return {(session.day, h) for h in range(session.start_hour, session.end_hour)}


def test_default_catalog_is_solved(solved):
    _, result = solved
    assert result.success
    assert all(s.is_assigned for s in result.sessions)
    assert all(8 <= s.start_hour and s.end_hour <= 18 for s in result.sessions)
    assert all(s.room and s.faculty for s in result.sessions if not s.is_break)


def test_no_division_double_booking(solved):
    _, result = solved
    seen = defaultdict(set)
    for s in result.sessions:
        slots = hour_slots(s)
        assert not seen[s.division] & slots, str(s)
        seen[s.division] |= slots


def test_rooms_and_faculty_never_overlap(solved):
    _, result = solved
    rooms = defaultdict(set)
    faculty = defaultdict(set)

    # A, B and C attend the same pinned Tuesday blocks together
    shared_blocks = {(s.subject, s.day, s.start_hour, s.duration, s.room, s.faculty)
                     for s in result.sessions if s.pinned}
    assert len(shared_blocks) == 2
    for subject, day, hour, duration, room, name in shared_blocks:
        slots = {(day, h) for h in range(hour, hour + duration)}
        assert not rooms[room] & slots, subject
        assert not faculty[name] & slots, subject
        rooms[room] |= slots
        faculty[name] |= slots

    for s in result.sessions:
        if s.is_break or s.pinned:
            continue
        slots = hour_slots(s)
        assert not rooms[s.room] & slots, str(s)
        assert not faculty[s.faculty] & slots, str(s)
        rooms[s.room] |= slots
        faculty[s.faculty] |= slots


def test_shared_pinned_blocks_are_the_only_common_sessions(solved):
    _, result = solved
    attendees = defaultdict(set)
    for s in result.sessions:
        if s.is_break:
            continue
        attendees[(s.day, s.start_hour, s.room)].add(s.label)

    shared = {key: labels for key, labels in attendees.items() if len(labels) > 1}
    assert shared == {
        (1, 9, "Room101"): {"A", "B", "C"},
        (1, 12, "Room104"): {"A", "B", "C"},
    }


def test_daily_load_ceiling(solved):
    _, result = solved
    load = defaultdict(int)
    for s in result.sessions:
        if not s.is_break:
            load[(s.division, s.day)] += s.duration
    assert max(load.values()) <= 8


def test_every_division_teaches_on_three_days(solved):
    _, result = solved
    days = defaultdict(set)
    for s in result.sessions:
        if not s.is_break:
            days[s.division].add(s.day)
    assert set(days) == {"A", "B", "C", "D"}
    assert all(len(d) >= 3 for d in days.values())


def test_one_break_per_division_per_day(solved):
    _, result = solved
    breaks = defaultdict(list)
    for s in result.sessions:
        if s.is_break:
            breaks[s.division].append(s)
    for division, sessions in breaks.items():
        assert sorted(s.day for s in sessions) == [0, 1, 2, 3, 4]
        assert all(s.start_hour in (11, 12, 13) for s in sessions)
        tuesday = [s for s in sessions if s.day == 1][0]
        if division in ("A", "B", "C"):
            assert tuesday.start_hour == 11


def test_pinned_blocks_untouched(solved):
    _, result = solved
    pinned = [s for s in result.sessions if s.pinned]
    assert len(pinned) == 6
    assert {(s.subject, s.day, s.start_hour, s.room, s.faculty) for s in pinned} == {
        ("BIDA", 1, 9, "Room101", "NK"),
        ("AI", 1, 12, "Room104", "LAB"),
    }


def test_repeated_runs_are_identical(solved):
    _, result = solved
    catalog = build_default_catalog()
    again = CSPSolver(build_sessions(catalog), catalog).solve()

    def key(sessions):
        return sorted((s.label, s.subject, s.kind, s.day, s.start_hour, s.room or "", s.faculty or "")
                      for s in sessions)

    assert key(again.sessions) == key(result.sessions)


def test_first_lab_takes_first_free_slot(solved):
    _, result = solved
    lab = next(s for s in result.sessions if s.label == "A1" and s.subject == "CN")
    assert (lab.day, lab.start_hour, lab.room, lab.faculty) == (0, 8, "105Lab", "NNS")


def test_cn_without_faculty_is_infeasible():
    catalog = without_faculty(build_default_catalog(), "CN")
    solver = CSPSolver(build_sessions(catalog), catalog, SchedulerConfig())
    result = solver.solve()

    assert result.status == INFEASIBLE
    assert solver.state.is_empty()
    assert not any(s.is_assigned for s in result.sessions if not s.pinned)


def test_blocked_tuesday_break_is_infeasible_after_search():
    # an extra 11:00 block leaves A, B and C no hour for their Tuesday break
    blocks = FIXED_BLOCKS + (FixedBlock("AI", day=1, start_hour=11, duration=1,
                                        room="Room201", faculty="LAB"),)
    catalog = build_default_catalog()
    solver = CSPSolver(build_sessions(catalog, fixed_blocks=blocks), catalog)
    result = solver.solve()

    assert result.status == INFEASIBLE
    assert result.steps > 1000
    assert solver.state.is_empty()
    assert not any(s.is_assigned for s in result.sessions if not s.pinned)
