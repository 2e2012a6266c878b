"""
Main window for the division timetable scheduler
"""
from typing import Optional
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QTextEdit, QLabel, QMessageBox,
    QProgressBar, QTabWidget, QSpinBox, QComboBox
)
from PyQt6.QtCore import Qt, QThread, pyqtSignal
from catalog import build_default_catalog, build_sessions, without_faculty
from catalog.default_catalog import FACULTY_BY_SUBJECT
from models.data_models import SchedulerConfig, SolveResult
from solver.csp_solver import CSPSolver
from gui.timetable_viewer import TimetableViewer


class SolverThread(QThread):
    """Thread for running the solver"""
    finished = pyqtSignal(object)
    progress = pyqtSignal(str)

    def __init__(self, config: SchedulerConfig, drop_subject: Optional[str] = None):
        super().__init__()
        self.config = config
        self.drop_subject = drop_subject
        self.solver = None

    def run(self):
        try:
            self.progress.emit("Building catalog...")
            catalog = build_default_catalog()
            if self.drop_subject:
                catalog = without_faculty(catalog, self.drop_subject)

            self.progress.emit("Building sessions...")
            sessions = build_sessions(catalog, config=self.config)

            self.progress.emit(f"Searching over {len(sessions)} sessions...")
            self.solver = CSPSolver(sessions, catalog, self.config)
            result = self.solver.solve()

            self.finished.emit(result)
        except Exception as e:
            self.progress.emit(f"Error: {str(e)}")
            self.finished.emit(None)


class SolverTab(QWidget):
    """Tab for solving the division timetable"""

    def __init__(self):
        super().__init__()
        self.result: Optional[SolveResult] = None
        self.config: Optional[SchedulerConfig] = None
        self.solver_thread = None

        self.init_ui()

    def init_ui(self):
        layout = QVBoxLayout(self)

        title_label = QLabel("Division Timetable Backtracking Solver")
        title_label.setStyleSheet("font-size: 18px; font-weight: bold; padding: 10px;")
        title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title_label)

        # Options
        option_layout = QHBoxLayout()
        option_layout.addWidget(QLabel("Max steps (0 = unlimited):"))
        self.max_steps_spin = QSpinBox()
        self.max_steps_spin.setRange(0, 100_000_000)
        self.max_steps_spin.setSingleStep(1000)
        option_layout.addWidget(self.max_steps_spin)

        option_layout.addWidget(QLabel("Remove faculty for:"))
        self.drop_combo = QComboBox()
        self.drop_combo.addItem("(none)", None)
        for subject in FACULTY_BY_SUBJECT:
            self.drop_combo.addItem(subject, subject)
        option_layout.addWidget(self.drop_combo)
        option_layout.addStretch()
        layout.addLayout(option_layout)

        # Buttons
        button_layout = QHBoxLayout()
        self.solve_btn = QPushButton("Solve")
        self.solve_btn.clicked.connect(self.solve)
        button_layout.addWidget(self.solve_btn)
        layout.addLayout(button_layout)

        self.progress_bar = QProgressBar()
        self.progress_bar.setVisible(False)
        layout.addWidget(self.progress_bar)

        self.status_label = QLabel("Ready")
        self.status_label.setStyleSheet("padding: 5px;")
        layout.addWidget(self.status_label)

        self.output_text = QTextEdit()
        self.output_text.setReadOnly(True)
        self.output_text.setStyleSheet("font-family: monospace;")
        layout.addWidget(self.output_text)

    def log(self, message: str):
        """Append message to output"""
        self.output_text.append(message)

    def solve(self):
        """Start the search on a worker thread"""
        max_steps = self.max_steps_spin.value() or None
        self.config = SchedulerConfig(max_steps=max_steps)

        self.solve_btn.setEnabled(False)
        self.progress_bar.setVisible(True)
        self.progress_bar.setRange(0, 0)  # Indeterminate

        self.solver_thread = SolverThread(self.config, self.drop_combo.currentData())
        self.solver_thread.progress.connect(self.on_progress)
        self.solver_thread.finished.connect(self.on_solve_finished)
        self.solver_thread.start()

    def on_progress(self, message: str):
        self.status_label.setText(message)
        self.log(message)

    def on_solve_finished(self, result: Optional[SolveResult]):
        self.progress_bar.setVisible(False)
        self.solve_btn.setEnabled(True)

        if result is None:
            self.status_label.setText("Solving failed")
            return

        self.result = result

        if result.success:
            self.log("\n" + "=" * 50)
            self.log("SOLUTION FOUND!")
            self.log("=" * 50)
            ordered = sorted(result.sessions, key=lambda s: (s.day, s.start_hour, s.label))
            for s in ordered:
                self.log(str(s))
            self.log(f"\nSUCCESS | {result.steps} steps")
            self.status_label.setText(f"Solution found in {result.solve_seconds:.2f}s")
        else:
            self.log("\n" + "=" * 50)
            self.log("NO SOLUTION FOUND")
            self.log("=" * 50)
            if result.exhausted:
                self.log(f"STOPPED | Step budget used up after {result.steps} steps")
                self.status_label.setText("Search budget exhausted")
            else:
                self.log("FAILED | No valid timetable exists")
                self.status_label.setText("No solution found")
            QMessageBox.warning(self, "No Solution", "Could not find a valid timetable.")


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.init_ui()

    def init_ui(self):
        self.setWindowTitle("Division Timetable Scheduler")
        self.setGeometry(100, 100, 1200, 800)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        layout = QVBoxLayout(central_widget)

        self.tabs = QTabWidget()

        self.solver_tab = SolverTab()
        self.tabs.addTab(self.solver_tab, "Solver")

        self.viewer_tab = TimetableViewer()
        self.tabs.addTab(self.viewer_tab, "Timetable Viewer")

        button_layout = QHBoxLayout()
        self.view_result_btn = QPushButton("View Current Solution")
        self.view_result_btn.clicked.connect(self.view_current_solution)
        self.view_result_btn.setEnabled(False)
        button_layout.addStretch()
        button_layout.addWidget(self.view_result_btn)

        layout.addWidget(self.tabs)
        layout.addLayout(button_layout)

        self.tabs.currentChanged.connect(self.on_tab_changed)

    def on_tab_changed(self, index):
        result = self.solver_tab.result
        self.view_result_btn.setEnabled(bool(result and result.success))

    def view_current_solution(self):
        """Load current solver result into viewer"""
        result = self.solver_tab.result
        if result and result.success:
            self.viewer_tab.load_from_result(result, self.solver_tab.config)
            self.tabs.setCurrentWidget(self.viewer_tab)
        else:
            QMessageBox.warning(
                self,
                "No Solution",
                "Please solve a timetable first before viewing."
            )
