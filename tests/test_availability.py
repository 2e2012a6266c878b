import pytest

from models.data_models import BREAK, LAB, LECTURE, Assignment, Session, SchedulerConfig
from solver.availability import AvailabilityState


@pytest.fixture
def state():
    return AvailabilityState(("A", "B"), ("R1", "R2"), ("F1", "F2"), SchedulerConfig())


def test_new_state_is_empty(state):
    assert state.is_empty()


def test_commit_marks_every_resource(state):
    lab = Session("A", "CN", LAB, 2, sub_batch="1")
    state.commit(lab, Assignment(0, 9, "R2", "F1"))

    assert (lab.day, lab.start_hour, lab.room, lab.faculty) == (0, 9, "R2", "F1")
    assert state.daily_load("A", 0) == 2
    assert not state.division_free("A", 0, 10, 1)
    assert state.division_free("A", 0, 11, 1)
    assert not state.room_free("R2", 0, 9, 1)
    assert state.room_free("R1", 0, 9, 2)
    assert not state.faculty_free("F1", 0, 10, 1)
    assert state.faculty_free("F2", 0, 9, 2)
    assert state.division_free("B", 0, 9, 2)


def test_commit_then_rollback_restores_state_exactly(state):
    other = Session("B", "CN", LECTURE, 1)
    state.commit(other, Assignment(2, 14, "R1", "F2"))
    before = state.snapshot()

    lab = Session("A", "CN", LAB, 2, sub_batch="2")
    state.commit(lab, Assignment(2, 12, "R1", "F2"))
    assert state.snapshot() != before

    state.rollback(lab)
    assert state.snapshot() == before
    assert not lab.is_assigned
    assert lab.room is None and lab.faculty is None


def test_break_only_touches_division_and_load(state):
    rest = Session("A", "BREAK", BREAK, 1)
    rooms_before = state.snapshot()[1]
    faculty_before = state.snapshot()[2]

    state.commit(rest, Assignment(3, 12))

    assert state.has_break("A", 3)
    assert not state.has_break("A", 2)
    assert state.daily_load("A", 3) == 1
    assert not state.division_free("A", 3, 12, 1)
    assert state.snapshot()[1] == rooms_before
    assert state.snapshot()[2] == faculty_before

    state.rollback(rest)
    assert state.is_empty()


def test_is_free_rejects_clashes(state):
    taken = Session("A", "CN", LECTURE, 1)
    state.commit(taken, Assignment(0, 8, "R1", "F1"))

    lecture = Session("B", "DSML", LECTURE, 1)
    assert not state.is_free(lecture, Assignment(0, 8, "R1", "F2"))
    assert not state.is_free(lecture, Assignment(0, 8, "R2", "F1"))
    assert state.is_free(lecture, Assignment(0, 8, "R2", "F2"))

    sub_batch = Session("A", "DSML", LAB, 2, sub_batch="3")
    assert not state.is_free(sub_batch, Assignment(0, 7, "R2", "F2"))
    assert not state.is_free(sub_batch, Assignment(0, 8, "R2", "F2"))
    assert state.is_free(sub_batch, Assignment(0, 9, "R2", "F2"))


def test_is_free_respects_closing_hour(state):
    lab = Session("A", "CN", LAB, 2)
    assert state.is_free(lab, Assignment(4, 16, "R1", "F1"))
    assert not state.is_free(lab, Assignment(4, 17, "R1", "F1"))


def test_reserve_and_release_leave_fields_alone(state):
    pinned = Session("A", "BIDA", LECTURE, 2, pinned=True,
                     day=1, start_hour=9, room="R1", faculty="F2")
    state.reserve(pinned)
    assert state.daily_load("A", 1) == 2
    assert not state.room_free("R1", 1, 10, 1)

    state.release(pinned)
    assert state.is_empty()
    assert (pinned.day, pinned.start_hour, pinned.room, pinned.faculty) == (1, 9, "R1", "F2")


def test_unknown_room_is_a_programming_error(state):
    lecture = Session("A", "CN", LECTURE, 1)
    with pytest.raises(KeyError):
        state.commit(lecture, Assignment(0, 8, "Nowhere", "F1"))
