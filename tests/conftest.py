import os

import pytest

from models.data_models import LECTURE, Catalog, Session, SchedulerConfig

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def _make_catalog(divisions=("X",), lecture_rooms=("R1",), tutorial_rooms=("T1",),
                  lab_rooms=("L1",), faculty=None):
    return Catalog(
        divisions=tuple(divisions),
        lecture_rooms=tuple(lecture_rooms),
        tutorial_rooms=tuple(tutorial_rooms),
        lab_rooms=tuple(lab_rooms),
        faculty_by_subject=faculty if faculty is not None else {"MATH": ("F1",)},
    )


def _lectures(division, count, subject="MATH"):
    return [Session(division, subject, LECTURE, 1) for _ in range(count)]


@pytest.fixture
def make_catalog():
    return _make_catalog


@pytest.fixture
def lectures():
    return _lectures


@pytest.fixture
def config():
    return SchedulerConfig()
