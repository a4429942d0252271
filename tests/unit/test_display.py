"""Unit tests for the inspection protocol and the display visitor."""

from registrar.core import Course, EntityVisitor, GradeLevel
from registrar.presentation import DisplayVisitor, Palette


class _KindVisitor(EntityVisitor[str]):
    def visit_student(self, student) -> str:
        return f"student:{student.id}"

    def visit_teacher(self, teacher) -> str:
        return f"teacher:{teacher.id}"

    def visit_course(self, course) -> str:
        return f"course:{course.id}"


class TestInspectionProtocol:
    """Tests for view dispatch."""

    def test_views_dispatch_to_matching_method(self, make_student, make_teacher) -> None:
        visitor = _KindVisitor()
        views = [
            make_student("S001").view(),
            make_teacher("T001").view(),
            Course("CS101", "Programming Paradigms", 4).view(),
        ]

        assert [view.accept(visitor) for view in views] == ["student:S001", "teacher:T001", "course:CS101"]


class TestDisplayVisitor:
    """Tests for DisplayVisitor text blocks."""

    def test_student_block_without_color(self, make_student) -> None:
        student = make_student("S001", "Alice", GradeLevel.SENIOR)
        student.enroll_internal("CS101")
        student.update_score("CS101", 72.25)

        text = student.view().accept(DisplayVisitor(color=False))

        assert text == (
            "STUDENT\n"
            "Name: Alice\n"
            "ID: S001\n"
            "Grade Level: SENIOR\n"
            "Email: s001@example.edu\n"
            "Address: 1 Main Street, Springfield, IL\n"
            "WAM: 72.2\n"
        )

    def test_teacher_block_without_color(self, make_teacher) -> None:
        text = make_teacher("T001", "Physics", "Optics").view().accept(DisplayVisitor(color=False))

        assert "TEACHER\n" in text
        assert "Department: Physics\n" in text
        assert "Specialization: Optics\n" in text

    def test_course_block_shows_seats(self) -> None:
        course = Course("CS101", "Programming Paradigms", 4, capacity=2)
        course.enroll_student("S001")

        text = course.view().accept(DisplayVisitor(color=False))

        assert "Credits: 4\n" in text
        assert "Enrolled: 1/2\n" in text

    def test_color_codes_wrap_headings(self) -> None:
        text = Course("CS101", "Programming Paradigms", 4).view().accept(DisplayVisitor())

        assert text.startswith(Palette.BOLD + Palette.YELLOW + "COURSE" + Palette.RESET)

    def test_wam_color_thresholds(self) -> None:
        visitor = DisplayVisitor()

        assert visitor.wam_color(85.0) == Palette.GREEN
        assert visitor.wam_color(70.0) == Palette.GREEN
        assert visitor.wam_color(65.0) == Palette.YELLOW
        assert visitor.wam_color(59.9) == Palette.RED

    def test_performer_line_plain(self) -> None:
        assert DisplayVisitor(color=False).performer_line("Alice", 81.26) == "Alice: 81.3"
