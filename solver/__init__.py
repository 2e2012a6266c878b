"""Solver package"""
from .availability import AvailabilityState
from .csp_solver import CSPSolver, SearchToken

__all__ = ['AvailabilityState', 'CSPSolver', 'SearchToken']
