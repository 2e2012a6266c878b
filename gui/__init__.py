"""PyQt6 front end: solver tab and division grid viewer"""
from .main_window import MainWindow, SolverTab
from .timetable_viewer import TimetableViewer

__all__ = ['MainWindow', 'SolverTab', 'TimetableViewer']
