"""
Main entry point for the division timetable scheduler
"""
import argparse
import logging
import sys
from catalog import build_default_catalog, build_sessions, without_faculty
from models.data_models import SchedulerConfig
from solver.csp_solver import CSPSolver


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate a weekly timetable for divisions A-D")
    parser.add_argument("--gui", action="store_true", help="open the PyQt6 window")
    parser.add_argument("--max-steps", type=int, default=None,
                        help="stop the search after this many recursive steps")
    parser.add_argument("--drop-faculty", metavar="SUBJECT", default=None,
                        help="remove every eligible faculty for SUBJECT")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def run_gui():
    from PyQt6.QtWidgets import QApplication
    from gui.main_window import MainWindow

    app = QApplication(sys.argv)
    app.setApplicationName("Division Timetable Scheduler")

    window = MainWindow()
    window.show()

    return app.exec()


def run_console(args) -> int:
    config = SchedulerConfig(max_steps=args.max_steps)
    catalog = build_default_catalog()
    if args.drop_faculty:
        catalog = without_faculty(catalog, args.drop_faculty)

    sessions = build_sessions(catalog, config=config)
    solver = CSPSolver(sessions, catalog, config)
    result = solver.solve()
    solver.print_result(result)
    return 0 if result.success else 1


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    if args.gui:
        sys.exit(run_gui())

    try:
        sys.exit(run_console(args))
    except ValueError as e:
        logging.getLogger("timetable").error("Invalid input: %s", e)
        sys.exit(2)


if __name__ == "__main__":
    main()
