"""
Candidate generation for each session kind.

Generators are lazy and read the availability state as they go. The search
always restores the state before asking for the next candidate, so resuming
a generator after a backtrack sees exactly the state it was created with.
"""
from typing import AbstractSet, Iterator, Tuple
from models.data_models import Assignment, Catalog, Session, SchedulerConfig
from solver.availability import AvailabilityState


def break_candidates(session: Session, state: AvailabilityState, config: SchedulerConfig,
                     fixed_days: AbstractSet[Tuple[str, int]]) -> Iterator[Assignment]:
    """Yield (day, hour) slots for a division break, one break per day"""
    for day in range(config.num_days):
        if state.has_break(session.division, day):
            continue
        if (session.division, day) in fixed_days:
            hours = (config.fixed_day_break_hour,)
        else:
            hours = config.break_hours
        for hour in hours:
            yield Assignment(day, hour)


def teaching_candidates(session: Session, state: AvailabilityState, catalog: Catalog,
                        config: SchedulerConfig) -> Iterator[Assignment]:
    """Yield (day, hour, room, faculty) in day, hour, room, faculty order.

    Days over the load ceiling, busy division hours and busy rooms are
    pruned here; faculty clashes are left to ``AvailabilityState.is_free``.
    """
    rooms = catalog.rooms_for(session.kind)
    faculty = catalog.faculty_for(session.subject)
    duration = session.duration

    for day in range(config.num_days):
        if state.daily_load(session.division, day) + duration > config.daily_load_limit:
            continue
        for hour in range(config.day_start, config.day_end - duration + 1):
            if not state.division_free(session.division, day, hour, duration):
                continue
            for room in rooms:
                if not state.room_free(room, day, hour, duration):
                    continue
                for name in faculty:
                    yield Assignment(day, hour, room, name)


def candidates_for(session: Session, state: AvailabilityState, catalog: Catalog,
                   config: SchedulerConfig,
                   fixed_days: AbstractSet[Tuple[str, int]]) -> Iterator[Assignment]:
    if session.is_break:
        return break_candidates(session, state, config, fixed_days)
    return teaching_candidates(session, state, catalog, config)
