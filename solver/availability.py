"""
Availability bookkeeping for the backtracking search
"""
from typing import Dict, List, Sequence, Tuple
from models.data_models import Assignment, Session, SchedulerConfig


Grid = List[List[List[bool]]]


def _empty_grid(rows: int, num_days: int, hours: int) -> Grid:
    return [[[False] * hours for _ in range(num_days)] for _ in range(rows)]


class AvailabilityState:
    """Division, room and faculty occupancy plus per-division daily load.

    Every mutation goes through ``commit``/``rollback`` (searched sessions)
    or ``reserve``/``release`` (pinned sessions); each pair is an exact
    inverse.
    """

    def __init__(self, divisions: Sequence[str], rooms: Sequence[str],
                 faculties: Sequence[str], config: SchedulerConfig):
        self.config = config
        self.division_index: Dict[str, int] = {d: i for i, d in enumerate(divisions)}
        self.room_index: Dict[str, int] = {r: i for i, r in enumerate(rooms)}
        self.faculty_index: Dict[str, int] = {f: i for i, f in enumerate(faculties)}

        days = config.num_days
        hours = config.hours_per_day
        self.division_busy = _empty_grid(len(divisions), days, hours)
        self.room_busy = _empty_grid(len(rooms), days, hours)
        self.faculty_busy = _empty_grid(len(faculties), days, hours)
        self.load = [[0] * days for _ in divisions]
        self.breaks = [[0] * days for _ in divisions]

    def _offsets(self, start_hour: int, duration: int) -> range:
        return range(start_hour - self.config.day_start,
                     start_hour - self.config.day_start + duration)

    def fits_window(self, start_hour: int, duration: int) -> bool:
        return (self.config.day_start <= start_hour
                and start_hour + duration <= self.config.day_end)

    def _block_free(self, row: List[List[bool]], day: int, start_hour: int, duration: int) -> bool:
        slots = row[day]
        return not any(slots[h] for h in self._offsets(start_hour, duration))

    def division_free(self, division: str, day: int, start_hour: int, duration: int) -> bool:
        return self._block_free(self.division_busy[self.division_index[division]],
                                day, start_hour, duration)

    def room_free(self, room: str, day: int, start_hour: int, duration: int) -> bool:
        return self._block_free(self.room_busy[self.room_index[room]],
                                day, start_hour, duration)

    def faculty_free(self, faculty: str, day: int, start_hour: int, duration: int) -> bool:
        return self._block_free(self.faculty_busy[self.faculty_index[faculty]],
                                day, start_hour, duration)

    def daily_load(self, division: str, day: int) -> int:
        return self.load[self.division_index[division]][day]

    def has_break(self, division: str, day: int) -> bool:
        return self.breaks[self.division_index[division]][day] > 0

    def is_free(self, session: Session, value: Assignment) -> bool:
        """Check a candidate against current occupancy"""
        duration = session.duration
        if not self.fits_window(value.start_hour, duration):
            return False
        if not self.division_free(session.division, value.day, value.start_hour, duration):
            return False
        if session.is_break:
            return True
        if not self.room_free(value.room, value.day, value.start_hour, duration):
            return False
        return self.faculty_free(value.faculty, value.day, value.start_hour, duration)

    def _mark(self, session: Session, busy: bool):
        div_idx = self.division_index[session.division]
        day = session.day
        delta = session.duration if busy else -session.duration

        self.load[div_idx][day] += delta
        if session.is_break:
            self.breaks[div_idx][day] += 1 if busy else -1

        offsets = self._offsets(session.start_hour, session.duration)
        for h in offsets:
            self.division_busy[div_idx][day][h] = busy

        if session.is_break:
            return

        room_idx = self.room_index[session.room]
        fac_idx = self.faculty_index[session.faculty]
        for h in offsets:
            self.room_busy[room_idx][day][h] = busy
            self.faculty_busy[fac_idx][day][h] = busy

    def commit(self, session: Session, value: Assignment):
        session.assign(value)
        self._mark(session, True)

    def rollback(self, session: Session):
        self._mark(session, False)
        session.clear()

    def reserve(self, session: Session):
        """Occupy the slots of an already-assigned (pinned) session"""
        self._mark(session, True)

    def release(self, session: Session):
        self._mark(session, False)

    def snapshot(self) -> Tuple:
        def freeze(grid):
            return tuple(tuple(tuple(day) for day in row) for row in grid)

        return (
            freeze(self.division_busy),
            freeze(self.room_busy),
            freeze(self.faculty_busy),
            tuple(tuple(row) for row in self.load),
            tuple(tuple(row) for row in self.breaks),
        )

    def is_empty(self) -> bool:
        grids = (self.division_busy, self.room_busy, self.faculty_busy)
        if any(h for grid in grids for row in grid for day in row for h in day):
            return False
        return not any(v for table in (self.load, self.breaks) for row in table for v in row)
