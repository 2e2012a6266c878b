"""
Timetable viewer widget for displaying division schedules
"""
from typing import List, Optional
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QComboBox, QTableWidget, QTableWidgetItem,
    QHeaderView, QScrollArea, QFrame
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QFont
from models.data_models import LAB, TUTORIAL, DAY_NAMES, SchedulerConfig, Session, SolveResult
from solver.csp_solver import EMPTY_CELL, cell_label, division_cells


KIND_COLORS = {
    LAB: QColor(255, 243, 205),       # Light yellow for labs
    TUTORIAL: QColor(227, 242, 253),  # Light blue for tutorials
}
LECTURE_COLOR = QColor(232, 245, 233)
BREAK_COLOR = QColor(238, 238, 238)
EMPTY_COLOR = QColor(250, 250, 250)


class TimetableViewer(QWidget):
    """Widget for viewing a division timetable as a day x hour grid"""

    def __init__(self):
        super().__init__()
        self.sessions: List[Session] = []
        self.config = SchedulerConfig()

        self.init_ui()

    def init_ui(self):
        layout = QVBoxLayout(self)

        title_label = QLabel("Timetable Viewer")
        title_label.setStyleSheet("font-size: 18px; font-weight: bold; padding: 10px;")
        title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title_label)

        control_panel = QWidget()
        control_layout = QHBoxLayout(control_panel)
        control_layout.addWidget(QLabel("Division:"))
        self.division_combo = QComboBox()
        self.division_combo.currentIndexChanged.connect(self.refresh_table)
        self.division_combo.setEnabled(False)
        control_layout.addWidget(self.division_combo)
        control_layout.addStretch()
        layout.addWidget(control_panel)

        self.table_scroll = QScrollArea()
        self.table_scroll.setWidgetResizable(True)
        self.table_scroll.setFrameShape(QFrame.Shape.StyledPanel)

        self.table_widget = QTableWidget()
        self.table_widget.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.setup_table_style()

        self.table_scroll.setWidget(self.table_widget)
        layout.addWidget(self.table_scroll)

        self.status_label = QLabel("Solve a timetable to view the schedule")
        self.status_label.setStyleSheet("padding: 5px; color: #666;")
        layout.addWidget(self.status_label)

    def setup_table_style(self):
        self.table_widget.setStyleSheet("""
            QTableWidget {
                gridline-color: #d0d0d0;
                font-size: 11px;
            }
            QTableWidget::item {
                padding: 5px;
                border: 1px solid #e0e0e0;
            }
            QHeaderView::section {
                background-color: #2196F3;
                color: white;
                padding: 8px;
                font-weight: bold;
                border: 1px solid #1976D2;
            }
        """)

    def load_from_result(self, result: SolveResult, config: Optional[SchedulerConfig] = None):
        """Load a solved session list into the viewer"""
        if not result.success:
            self.status_label.setText("No valid schedule to display")
            return

        self.sessions = list(result.sessions)
        self.config = config or SchedulerConfig()

        divisions = []
        for s in self.sessions:
            if s.division not in divisions:
                divisions.append(s.division)

        self.division_combo.blockSignals(True)
        self.division_combo.clear()
        for division in sorted(divisions):
            self.division_combo.addItem(f"Division {division}", division)
        self.division_combo.blockSignals(False)
        self.division_combo.setEnabled(True)

        self.refresh_table()
        self.status_label.setText(
            f"Displaying: {len(self.sessions)} sessions, "
            f"solved in {result.solve_seconds:.2f}s"
        )

    def refresh_table(self):
        division = self.division_combo.currentData()
        if division is None:
            return
        self.display_timetable(division)

    def display_timetable(self, division: str):
        """Fill the grid: one row per day, one column per hour"""
        hours = list(range(self.config.day_start, self.config.day_end))
        days = DAY_NAMES[:self.config.num_days]

        self.table_widget.clearContents()
        self.table_widget.setRowCount(len(days))
        self.table_widget.setColumnCount(len(hours))
        self.table_widget.setVerticalHeaderLabels(list(days))
        self.table_widget.setHorizontalHeaderLabels([f"{h}-{h + 1}" for h in hours])

        cells = division_cells(self.sessions, division, self.config)

        for row in range(len(days)):
            for col, hour in enumerate(hours):
                session = cells.get((row, hour))
                item = QTableWidgetItem(self.format_cell(session))
                item.setBackground(self.cell_color(session))
                if session is not None and session.pinned:
                    font = QFont()
                    font.setBold(True)
                    item.setFont(font)
                item.setTextAlignment(Qt.AlignmentFlag.AlignTop | Qt.AlignmentFlag.AlignLeft)
                self.table_widget.setItem(row, col, item)

        header = self.table_widget.horizontalHeader()
        for i in range(len(hours)):
            header.setSectionResizeMode(i, QHeaderView.ResizeMode.Stretch)

        v_header = self.table_widget.verticalHeader()
        for i in range(len(days)):
            v_header.setSectionResizeMode(i, QHeaderView.ResizeMode.ResizeToContents)

    def format_cell(self, session: Optional[Session]) -> str:
        text = cell_label(session)
        if session is None or session.is_break or text == EMPTY_CELL:
            return text
        lines = [text, f"  {session.room}"]
        if session.sub_batch:
            lines.append(f"  Batch {session.label}")
        return "\n".join(lines)

    def cell_color(self, session: Optional[Session]) -> QColor:
        if session is None:
            return EMPTY_COLOR
        if session.is_break:
            return BREAK_COLOR
        return KIND_COLORS.get(session.kind, LECTURE_COLOR)
