"""
Main entry point for the registrar.
"""

import argparse
import logging
import random
import sys
from typing import List, Optional, TextIO

from .config import RegistrarConfig, load_config
from .core.exceptions import RegistrarException
from .loaders import RosterLoader
from .presentation import DisplayVisitor, Palette
from .services import (
    Registry, ReportGenerator, ScoreChangeLogger, WamSimulator
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class RegistrarApp:
    """Wires the loader, registry and presenters together for one run."""

    def __init__(self, config: RegistrarConfig, out: Optional[TextIO] = None):
        self._config = config
        self._out = out or sys.stdout
        self._registry = Registry(config.institution_name)
        self._display = DisplayVisitor(color=config.color)
        self._score_logger = ScoreChangeLogger()

    @property
    def registry(self) -> Registry:
        return self._registry

    def _print(self, text: str = "") -> None:
        print(text, file=self._out)

    def load(self) -> None:
        """Populate the registry from the roster files and the course catalog."""
        loader = RosterLoader()
        students = loader.load_students(self._config.students_file)
        teachers = loader.load_teachers(self._config.teachers_file)

        for student in students:
            self._registry.register_student(student)
            student.subscribe(self._score_logger)
        for teacher in teachers:
            self._registry.register_teacher(teacher)
        for course in self._config.courses:
            self._registry.register_course(course.to_entity())

        assigned = self._registry.assign_by_specialization(self._config.specialization_courses)
        logger.info("Assigned courses to %d teacher(s)", assigned)

        results = self._registry.enroll_many(self._config.enrollments)
        confirmed = sum(1 for result in results if result.success)
        logger.info("Applied %d of %d enrollment(s)", confirmed, len(results))

        unlinked = self._registry.unlinked_enrollments()
        if unlinked:
            logger.error("Enrollment links out of sync: %s", unlinked)

    def show_department_stats(self) -> None:
        self._print(self._display.heading("\nDepartment Statistics:"))
        for department, count in self._registry.department_counts().items():
            self._print(f"{self._display.paint(department, Palette.CYAN)}: {count} teachers")

    def show_reports(self) -> None:
        self._print(self._display.heading("\nGenerating reports concurrently..."))
        generator = ReportGenerator(self._registry, max_workers=self._config.report_workers)
        reports = generator.generate_reports()
        self._print(self._display.paint(f"Generated {len(reports)} student reports", Palette.GREEN))
        for report in reports:
            self._print(report)

    def simulate(self) -> None:
        self._print(self._display.paint("\nSimulating WAM updates...", Palette.BOLD, Palette.MAGENTA))
        simulator = WamSimulator(
            self._registry,
            rng=random.Random(self._config.seed),
            low=self._config.simulation_low,
            high=self._config.simulation_high,
            delay=self._config.simulation_delay,
        )
        for name, course_id, score in simulator.run():
            self._print(self._display.paint(f"Updated {name}'s {course_id} to {score:.1f}", Palette.CYAN))

    def show_top_performers(self) -> None:
        top_n = self._config.top_n
        self._print(self._display.heading(f"\nTop {top_n} Performers:"))
        for name, wam in self._registry.top_performers(top_n):
            self._print(self._display.performer_line(name, wam))

    def show_all(self) -> None:
        snapshot = self._registry.snapshot()
        self._print(self._display.heading("\nDisplaying ALL information with visitor pattern:"))
        sections = (
            ("=== ALL STUDENTS ===", snapshot.students),
            ("=== ALL TEACHERS ===", snapshot.teachers),
            ("=== ALL COURSES ===", snapshot.courses),
        )
        for title, views in sections:
            self._print(self._display.paint(f"\n{title}", Palette.BOLD, Palette.MAGENTA))
            for view in views:
                self._print(view.accept(self._display))

    def run(self) -> None:
        self.load()
        self.show_department_stats()
        self.show_reports()
        if self._config.simulate:
            self.simulate()
        self.show_top_performers()
        self.show_all()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="In-memory academic records registry")
    parser.add_argument("--config", type=str, help="Configuration file path (JSON)")
    parser.add_argument("--students", type=str, help="Student roster file")
    parser.add_argument("--teachers", type=str, help="Teacher roster file")
    parser.add_argument("--top", type=int, help="Number of top performers to show")
    parser.add_argument("--seed", type=int, help="Seed for simulated WAM updates")
    parser.add_argument("--no-simulate", action="store_true", help="Skip simulated WAM updates")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colours")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _apply_overrides(config: RegistrarConfig, args: argparse.Namespace) -> RegistrarConfig:
    overrides = {}
    if args.students:
        overrides['students_file'] = args.students
    if args.teachers:
        overrides['teachers_file'] = args.teachers
    if args.top is not None:
        overrides['top_n'] = max(args.top, 0)
    if args.seed is not None:
        overrides['seed'] = args.seed
    if args.no_simulate:
        overrides['simulate'] = False
    if args.no_color:
        overrides['color'] = False
    return config.model_copy(update=overrides)


def run(argv: Optional[List[str]] = None, out: Optional[TextIO] = None) -> int:
    """Run the CLI and return its exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _apply_overrides(load_config(args.config), args)
        RegistrarApp(config, out=out).run()
    except (OSError, RegistrarException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except Exception as e:
        logger.exception("Unexpected failure")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


def main():
    """Main entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
