"""
Concurrent per-student report generation.
"""

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable, List, Optional

from ..core.views import StudentView
from .registry import Registry

logger = logging.getLogger(__name__)

NO_GRADE = "No grade yet"

ReportRenderer = Callable[[StudentView], str]


def render_student_report(student: StudentView) -> str:
    """Plain-text summary of one student's enrollments and scores."""
    lines = [
        f"Student Report for {student.name} ({student.id})",
        f"Grade Level: {student.grade_level.value}",
        f"Overall WAM: {student.overall_wam:.1f}",
        "Courses:",
    ]
    for course_id, score in student.sorted_enrollments():
        shown = NO_GRADE if score is None else f"{score:.1f}"
        lines.append(f" - {course_id}: {shown}")
    return "\n".join(lines) + "\n"


class ReportGenerator:
    """Renders one report per student on a bounded worker pool.

    Reports come back in registration order regardless of which worker
    finishes first. The run reads a single registry snapshot and never
    mutates entity state.
    """

    def __init__(self, registry: Registry, max_workers: Optional[int] = None,
                 renderer: ReportRenderer = render_student_report):
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._registry = registry
        self._max_workers = max_workers or os.cpu_count() or 1
        self._renderer = renderer

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def generate_reports(self) -> List[str]:
        """Render every student's report.

        All units are awaited before returning. If any failed, the error of
        the earliest student in registration order is raised and no partial
        result is returned.
        """
        students = self._registry.snapshot().students
        if not students:
            return []

        reports: List[Optional[str]] = [None] * len(students)
        workers = min(self._max_workers, len(students))
        logger.debug("Generating %d reports on %d workers", len(students), workers)

        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="report")
        try:
            futures: List[Future] = [executor.submit(self._renderer, student) for student in students]
            wait(futures)
        except BaseException:
            executor.shutdown(wait=True, cancel_futures=True)
            raise
        executor.shutdown(wait=True)

        for index, future in enumerate(futures):
            error = future.exception()
            if error is not None:
                logger.error("Report for %s failed: %s", students[index].id, error)
                raise error
            reports[index] = future.result()

        logger.info("Generated %d student reports", len(reports))
        return reports
