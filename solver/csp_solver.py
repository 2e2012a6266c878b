"""
CSP Solver for division timetable generation
"""
import logging
import time
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from models.data_models import (
    LECTURE, LAB, TUTORIAL, BREAK, DAY_NAMES,
    SOLVED, INFEASIBLE, EXHAUSTED,
    Catalog, Session, SchedulerConfig, SolveResult
)
from solver.availability import AvailabilityState
from solver.candidates import candidates_for


logger = logging.getLogger(__name__)

KIND_PRIORITY = {BREAK: 0, LAB: 1, TUTORIAL: 2, LECTURE: 3}
KIND_TAGS = {LECTURE: "(L)", TUTORIAL: "(T)", LAB: "(Lab)"}
EMPTY_CELL = "--"


def order_sessions(sessions: Iterable[Session]) -> List[Session]:
    """Pinned sessions first, then breaks, labs, tutorials and lectures"""
    return sorted(sessions, key=lambda s: -1 if s.pinned else KIND_PRIORITY[s.kind])


def check_break_distribution(sessions: Sequence[Session]) -> bool:
    """Hook for break placement rules beyond one break per division per day"""
    return True


def check_day_coverage(sessions: Sequence[Session], divisions: Iterable[str],
                       min_days: int) -> bool:
    """Every division must teach on at least ``min_days`` distinct days"""
    used_days: Dict[str, set] = {}
    for s in sessions:
        if s.is_break or not s.is_assigned:
            continue
        used_days.setdefault(s.division, set()).add(s.day)
    return all(len(used_days.get(d, ())) >= min_days for d in divisions)


def division_cells(sessions: Iterable[Session], division: str,
                   config: SchedulerConfig) -> Dict[Tuple[int, int], Session]:
    """Map (day, hour) to the session a division has there, sub-batches included"""
    cells = {}
    for s in sessions:
        if s.division != division or not s.is_assigned:
            continue
        for hour in range(s.start_hour, s.end_hour):
            if config.day_start <= hour < config.day_end:
                cells[(s.day, hour)] = s
    return cells


def cell_label(session: Optional[Session]) -> str:
    if session is None:
        return EMPTY_CELL
    if session.is_break:
        return "BREAK"
    return f"{session.subject} {KIND_TAGS.get(session.kind, '')} ({session.faculty})"


def build_division_grid(sessions: Iterable[Session], division: str,
                        config: SchedulerConfig) -> List[List[str]]:
    """Day rows by hour columns of cell labels"""
    cells = division_cells(sessions, division, config)
    return [
        [cell_label(cells.get((day, hour))) for hour in range(config.day_start, config.day_end)]
        for day in range(config.num_days)
    ]


class SearchToken:
    """Shared cancellation flag for every active recursion depth"""

    def __init__(self, max_steps: Optional[int] = None):
        self.max_steps = max_steps
        self.steps = 0
        self.solved = False
        self.exhausted = False

    @property
    def cancelled(self) -> bool:
        return self.solved or self.exhausted

    def tick(self):
        self.steps += 1
        if self.max_steps is not None and self.steps > self.max_steps:
            self.exhausted = True


class CSPSolver:
    def __init__(self, sessions: List[Session], catalog: Catalog,
                 config: Optional[SchedulerConfig] = None):
        self.catalog = catalog
        self.config = config or SchedulerConfig()
        self.sessions = order_sessions(sessions)
        self.pinned = [s for s in self.sessions if s.pinned]

        # Divisions with fixed teaching blocks get a single break hour on those days
        self.fixed_days = {(s.division, s.day) for s in self.pinned if not s.is_break}

        faculties = self.catalog.all_faculties
        for s in self.pinned:
            if s.faculty and s.faculty not in faculties:
                faculties.append(s.faculty)
        self.faculties = faculties
        self.state: Optional[AvailabilityState] = None

    def new_state(self) -> AvailabilityState:
        return AvailabilityState(self.catalog.divisions, self.catalog.all_rooms,
                                 self.faculties, self.config)

    def has_empty_domain(self, session: Session) -> bool:
        if session.is_break or session.pinned:
            return False
        if session.duration > self.config.hours_per_day:
            return True
        return not self.catalog.rooms_for(session.kind) or not self.catalog.faculty_for(session.subject)

    def accept(self) -> bool:
        """Global checks run once every session holds an assignment"""
        if not check_break_distribution(self.sessions):
            return False
        return check_day_coverage(self.sessions, self.catalog.divisions,
                                  self.config.min_teaching_days)

    def search(self, index: int, token: SearchToken) -> bool:
        token.tick()
        if token.exhausted:
            return False

        if index == len(self.sessions):
            if not self.accept():
                return False
            token.solved = True
            return True

        session = self.sessions[index]
        if session.pinned:
            return self.search(index + 1, token)

        candidates = candidates_for(session, self.state, self.catalog,
                                    self.config, self.fixed_days)
        for value in candidates:
            if not self.state.is_free(session, value):
                continue
            self.state.commit(session, value)
            if self.search(index + 1, token):
                return True
            self.state.rollback(session)
            if token.cancelled:
                break

        return False

    def backtrack_search(self) -> SolveResult:
        """Depth-first search over the ordered session list"""
        logger.info("Starting backtrack search over %d sessions (%d pinned)",
                    len(self.sessions), len(self.pinned))
        start_time = time.time()

        for s in self.sessions:
            if not s.pinned:
                s.clear()

        self.state = self.new_state()
        for s in self.pinned:
            self.state.reserve(s)

        result = SolveResult(status=INFEASIBLE, sessions=self.sessions,
                             steps=0, solve_seconds=0.0)

        empty = [s for s in self.sessions if self.has_empty_domain(s)]
        if empty:
            for s in empty:
                logger.warning("Session %s %s for Div %s has empty domain",
                               s.subject, s.kind, s.label)
            self.release_pinned()
            result.solve_seconds = time.time() - start_time
            return result

        token = SearchToken(self.config.max_steps)
        found = self.search(0, token)

        result.steps = token.steps
        result.solve_seconds = time.time() - start_time

        if found:
            result.status = SOLVED
            logger.info("Solution found in %.2fs after %d steps",
                        result.solve_seconds, result.steps)
        else:
            self.release_pinned()
            if token.exhausted:
                result.status = EXHAUSTED
                logger.warning("Search budget of %d steps exhausted after %.2fs",
                               token.max_steps, result.solve_seconds)
            else:
                logger.info("No solution found after %.2f seconds", result.solve_seconds)

        return result

    def release_pinned(self):
        for s in self.pinned:
            self.state.release(s)

    def solve(self) -> SolveResult:
        """Solve the CSP"""
        return self.backtrack_search()

    def print_result(self, result: SolveResult):
        """Print one weekly grid per division"""
        if not result.success:
            if result.exhausted:
                print(f"\nSearch stopped after {result.steps} steps without a timetable.")
            else:
                print("\nNo valid timetable found.")
            return

        print("\nTimetable Generated:")
        for division in self.catalog.divisions:
            grid = build_division_grid(result.sessions, division, self.config)

            print("\n=====================================================")
            print(f"               Timetable for Division {division}")
            print("=====================================================")

            header = f"{'Day/Time':<15}"
            for hour in range(self.config.day_start, self.config.day_end):
                header += f"{f'{hour}-{hour + 1}':<25}"
            print(header)

            for day, row in enumerate(grid):
                print(f"{DAY_NAMES[day]:<15}" + "".join(f"{cell:<25}" for cell in row))

        print(f"\nSolution found in {result.solve_seconds:.2f}s")
        print("=========================================")
