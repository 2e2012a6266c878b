"""
Data models for the division timetable scheduler
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


LECTURE = "Lecture"
LAB = "Lab"
TUTORIAL = "Tutorial"
BREAK = "Break"

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")

SOLVED = "SOLVED"
INFEASIBLE = "INFEASIBLE"
EXHAUSTED = "EXHAUSTED"


def format_hour(hour: int) -> str:
    return f"{hour:02d}:00"


@dataclass(frozen=True)
class Assignment:
    day: int
    start_hour: int
    room: Optional[str] = None
    faculty: Optional[str] = None


@dataclass(eq=False)
class Session:
    """One schedulable unit.

    ``division`` is always the main division; ``sub_batch`` holds the
    suffix for split lab/tutorial groups. Pinned sessions carry their
    assignment from construction and are never revisited by the search.
    """
    division: str
    subject: str
    kind: str
    duration: int
    sub_batch: str = ""
    pinned: bool = False
    day: Optional[int] = None
    start_hour: Optional[int] = None
    room: Optional[str] = None
    faculty: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.division}{self.sub_batch}"

    @property
    def is_break(self) -> bool:
        return self.kind == BREAK

    @property
    def is_assigned(self) -> bool:
        return self.day is not None and self.start_hour is not None

    @property
    def end_hour(self) -> int:
        return self.start_hour + self.duration

    def assignment(self) -> Assignment:
        return Assignment(self.day, self.start_hour, self.room, self.faculty)

    def assign(self, value: Assignment):
        self.day = value.day
        self.start_hour = value.start_hour
        self.room = value.room
        self.faculty = value.faculty

    def clear(self):
        self.day = None
        self.start_hour = None
        self.room = None
        self.faculty = None

    def __str__(self) -> str:
        if not self.is_assigned:
            return f"{self.subject} {self.kind} for Div {self.label} (unassigned)"
        when = f"{DAY_NAMES[self.day]} {format_hour(self.start_hour)}-{format_hour(self.end_hour)}"
        if self.is_break:
            return f"{when} BREAK for Div {self.label}"
        return f"{when} {self.subject} {self.kind} @ {self.room} by {self.faculty} on Div {self.label}"


@dataclass(frozen=True)
class Catalog:
    divisions: Tuple[str, ...]
    lecture_rooms: Tuple[str, ...]
    tutorial_rooms: Tuple[str, ...]
    lab_rooms: Tuple[str, ...]
    faculty_by_subject: Dict[str, Tuple[str, ...]] = field(default_factory=dict, hash=False)

    @property
    def all_rooms(self) -> List[str]:
        rooms = []
        for room in self.lecture_rooms + self.tutorial_rooms + self.lab_rooms:
            if room not in rooms:
                rooms.append(room)
        return rooms

    @property
    def all_faculties(self) -> List[str]:
        faculties = []
        for names in self.faculty_by_subject.values():
            for name in names:
                if name not in faculties:
                    faculties.append(name)
        return faculties

    def rooms_for(self, kind: str) -> Tuple[str, ...]:
        if kind == LECTURE:
            return self.lecture_rooms
        if kind == TUTORIAL:
            return self.tutorial_rooms
        if kind == LAB:
            return self.lab_rooms
        return ()

    def faculty_for(self, subject: str) -> Tuple[str, ...]:
        return tuple(self.faculty_by_subject.get(subject, ()))


@dataclass(frozen=True)
class SchedulerConfig:
    num_days: int = 5
    day_start: int = 8
    day_end: int = 18
    daily_load_limit: int = 8
    break_hours: Tuple[int, ...] = (11, 12, 13)
    fixed_day_break_hour: int = 11
    min_teaching_days: int = 3
    max_steps: Optional[int] = None

    def __post_init__(self):
        if self.num_days < 1 or self.num_days > len(DAY_NAMES):
            raise ValueError(f"num_days must be between 1 and {len(DAY_NAMES)}")
        if self.day_end <= self.day_start:
            raise ValueError("day_end must be later than day_start")
        if not self.break_hours:
            raise ValueError("break_hours must not be empty")
        for hour in self.break_hours + (self.fixed_day_break_hour,):
            if not self.day_start <= hour < self.day_end:
                raise ValueError(f"break hour {hour} is outside the working day")
        if self.max_steps is not None and self.max_steps < 1:
            raise ValueError("max_steps must be a positive int if provided")

    @property
    def hours_per_day(self) -> int:
        return self.day_end - self.day_start


@dataclass(frozen=True)
class SubjectRequirement:
    lectures: int = 0
    labs: int = 0
    tutorials: int = 0
    lecture_hours: int = 1
    lab_hours: int = 2
    tutorial_hours: int = 1


@dataclass(frozen=True)
class FixedBlock:
    subject: str
    day: int
    start_hour: int
    duration: int
    room: str
    faculty: str


@dataclass
class SolveResult:
    status: str
    sessions: List[Session]
    steps: int
    solve_seconds: float

    @property
    def success(self) -> bool:
        return self.status == SOLVED

    @property
    def exhausted(self) -> bool:
        return self.status == EXHAUSTED
