"""
Terminal rendering of registry views.

This is the only place that knows about ANSI colours. Domain code produces
views; the visitor here turns them into text blocks for the CLI.
"""

from ..core.interfaces import EntityVisitor
from ..core.views import CourseView, StudentView, TeacherView


class Palette:
    """ANSI colour codes for terminal styling."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"


class DisplayVisitor(EntityVisitor[str]):
    """Renders any entity view as a multi-line text block."""

    def __init__(self, color: bool = True):
        self._color = color

    def paint(self, text: str, *codes: str) -> str:
        """Wrap text in colour codes, or return it unchanged when colour is off."""
        if not self._color or not codes:
            return text
        return "".join(codes) + text + Palette.RESET

    def wam_color(self, wam: float) -> str:
        """Green from 70, yellow from 60, red below."""
        if wam < 60:
            return Palette.RED
        if wam < 70:
            return Palette.YELLOW
        return Palette.GREEN

    def heading(self, text: str) -> str:
        return self.paint(text, Palette.BOLD, Palette.BLUE)

    def visit_student(self, student: StudentView) -> str:
        return "\n".join([
            self.paint("STUDENT", Palette.BOLD, Palette.BLUE),
            f"Name: {student.name}",
            f"ID: {student.id}",
            f"Grade Level: {student.grade_level.value}",
            f"Email: {student.email}",
            f"Address: {student.address.one_line()}",
            f"WAM: {student.overall_wam:.1f}",
        ]) + "\n"

    def visit_teacher(self, teacher: TeacherView) -> str:
        return "\n".join([
            self.paint("TEACHER", Palette.BOLD, Palette.GREEN),
            f"Name: {teacher.name}",
            f"ID: {teacher.id}",
            f"Department: {teacher.department}",
            f"Specialization: {teacher.specialization}",
            f"Email: {teacher.email}",
            f"Address: {teacher.address.one_line()}",
        ]) + "\n"

    def visit_course(self, course: CourseView) -> str:
        return "\n".join([
            self.paint("COURSE", Palette.BOLD, Palette.YELLOW),
            f"Name: {course.name}",
            f"ID: {course.id}",
            f"Credits: {course.credits}",
            f"Enrolled: {course.enrolled_count}/{course.capacity}",
        ]) + "\n"

    def performer_line(self, name: str, wam: float) -> str:
        """One row of the top-performer table."""
        return f"{self.paint(name, Palette.BOLD)}: {self.paint(f'{wam:.1f}', self.wam_color(wam))}"
