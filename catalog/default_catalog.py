"""
Static resource catalog and session requirements for divisions A-D
"""
import logging
from dataclasses import replace
from typing import List, Mapping, Optional, Sequence
from models.data_models import (
    LECTURE, LAB, TUTORIAL, BREAK,
    Catalog, FixedBlock, Session, SchedulerConfig, SubjectRequirement
)


logger = logging.getLogger(__name__)

DIVISIONS = ("A", "B", "C", "D")
SUB_BATCHES = ("1", "2", "3")

LECTURE_ROOMS = ("Room101", "Room104", "Room201", "Room204")
TUTORIAL_ROOMS = ("Room214", "Room314", "Room104")
LAB_ROOMS = ("105Lab", "106Lab", "307Lab")

FACULTY_BY_SUBJECT = {
    "CN": ("NNS", "VAMI"),
    "DSML": ("PDM", "NNW"),
    "SEPM": ("MPM", "YYD"),
    "SMSS": ("LAB", "VKK"),
    "AI": ("LAB",),
    "BIDA": ("NK",),
}

SUBJECTS_BY_DIVISION = {
    "A": ("CN", "DSML", "SEPM", "SMSS"),
    "B": ("CN", "DSML", "SEPM", "SMSS"),
    "C": ("CN", "DSML", "SMSS", "SEPM"),
    "D": ("CN", "DSML", "SEPM", "SMSS"),
}

REQUIREMENTS = {
    "CN": SubjectRequirement(lectures=2, labs=1),
    "DSML": SubjectRequirement(lectures=2, labs=1),
    "SEPM": SubjectRequirement(lectures=2, labs=1),
    "SMSS": SubjectRequirement(lectures=2, tutorials=1),
}

# Tuesday blocks for A, B and C
FIXED_BLOCKS = (
    FixedBlock("BIDA", day=1, start_hour=9, duration=2, room="Room101", faculty="NK"),
    FixedBlock("AI", day=1, start_hour=12, duration=2, room="Room104", faculty="LAB"),
)
FIXED_BLOCK_DIVISIONS = ("A", "B", "C")


def build_default_catalog() -> Catalog:
    return Catalog(
        divisions=DIVISIONS,
        lecture_rooms=LECTURE_ROOMS,
        tutorial_rooms=TUTORIAL_ROOMS,
        lab_rooms=LAB_ROOMS,
        faculty_by_subject=dict(FACULTY_BY_SUBJECT),
    )


def without_faculty(catalog: Catalog, subject: str) -> Catalog:
    """Copy of the catalog in which nobody may teach ``subject``"""
    faculty = dict(catalog.faculty_by_subject)
    faculty[subject] = ()
    return replace(catalog, faculty_by_subject=faculty)


def validate_catalog(catalog: Catalog, fixed_blocks: Sequence[FixedBlock] = (),
                     config: Optional[SchedulerConfig] = None):
    """Raise ValueError for catalogs the solver cannot be handed.

    A subject without eligible faculty is allowed; it shows up as an
    infeasible search instead. Fixed blocks may name faculty outside
    the catalog, the solver indexes them from the pinned sessions.
    """
    config = config or SchedulerConfig()
    if not catalog.divisions:
        raise ValueError("catalog must list at least one division")
    if len(set(catalog.divisions)) != len(catalog.divisions):
        raise ValueError("catalog divisions must be unique")
    for kind, rooms in ((LECTURE, catalog.lecture_rooms),
                        (TUTORIAL, catalog.tutorial_rooms),
                        (LAB, catalog.lab_rooms)):
        if not rooms:
            raise ValueError(f"catalog has no {kind.lower()} rooms")

    rooms = catalog.all_rooms
    for block in fixed_blocks:
        if block.room not in rooms:
            raise ValueError(f"fixed {block.subject} block uses unknown room '{block.room}'")
        if not 0 <= block.day < config.num_days:
            raise ValueError(f"fixed {block.subject} block day {block.day} is outside the week")
        if block.start_hour < config.day_start or block.start_hour + block.duration > config.day_end:
            raise ValueError(f"fixed {block.subject} block leaves the working day")


def build_sessions(catalog: Catalog,
                   subjects_by_division: Mapping[str, Sequence[str]] = SUBJECTS_BY_DIVISION,
                   requirements: Mapping[str, SubjectRequirement] = REQUIREMENTS,
                   fixed_blocks: Sequence[FixedBlock] = FIXED_BLOCKS,
                   fixed_divisions: Sequence[str] = FIXED_BLOCK_DIVISIONS,
                   config: Optional[SchedulerConfig] = None) -> List[Session]:
    """Expand requirements into pinned blocks, breaks and teaching sessions"""
    config = config or SchedulerConfig()
    validate_catalog(catalog, fixed_blocks, config)

    sessions: List[Session] = []

    for division in fixed_divisions:
        for block in fixed_blocks:
            sessions.append(Session(
                division=division,
                subject=block.subject,
                kind=LECTURE,
                duration=block.duration,
                pinned=True,
                day=block.day,
                start_hour=block.start_hour,
                room=block.room,
                faculty=block.faculty,
            ))

    for division in catalog.divisions:
        for _ in range(config.num_days):
            sessions.append(Session(division, "BREAK", BREAK, 1))

    for division in catalog.divisions:
        for subject in subjects_by_division.get(division, ()):
            req = requirements[subject]
            for _ in range(req.lectures):
                sessions.append(Session(division, subject, LECTURE, req.lecture_hours))
            for _ in range(req.labs):
                for sb in SUB_BATCHES:
                    sessions.append(Session(division, subject, LAB, req.lab_hours, sub_batch=sb))
            for _ in range(req.tutorials):
                for sb in SUB_BATCHES:
                    sessions.append(Session(division, subject, TUTORIAL, req.tutorial_hours, sub_batch=sb))

    logger.info("Built %d sessions for %d divisions", len(sessions), len(catalog.divisions))
    return sessions
