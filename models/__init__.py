"""Data models package"""
from .data_models import (
    LECTURE, LAB, TUTORIAL, BREAK, DAY_NAMES,
    SOLVED, INFEASIBLE, EXHAUSTED, format_hour,
    Assignment, Session, Catalog, SchedulerConfig,
    SubjectRequirement, FixedBlock, SolveResult
)

__all__ = [
    'LECTURE', 'LAB', 'TUTORIAL', 'BREAK', 'DAY_NAMES',
    'SOLVED', 'INFEASIBLE', 'EXHAUSTED', 'format_hour',
    'Assignment', 'Session', 'Catalog', 'SchedulerConfig',
    'SubjectRequirement', 'FixedBlock', 'SolveResult'
]
