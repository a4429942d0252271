"""Unit tests for the entity layer and its views."""

import pytest

from registrar.core import (
    Course,
    GradeLevel,
    OutOfRangeError,
    ScoreEvent,
    ScoreEventKind,
    UnknownGradeLevelError,
    ValidationError,
    CapacityExceededError,
)


class TestGradeLevel:
    """Tests for grade level parsing."""

    def test_from_token_parses_known_levels(self) -> None:
        assert GradeLevel.from_token("SENIOR") is GradeLevel.SENIOR

    def test_from_token_rejects_unknown_level(self) -> None:
        with pytest.raises(UnknownGradeLevelError) as exc_info:
            GradeLevel.from_token("GRADUATE")

        assert "GRADUATE" in exc_info.value.message


class TestStudent:
    """Tests for Student score slots and WAM."""

    def test_new_student_has_zero_wam(self, make_student) -> None:
        student = make_student("S001")

        assert student.overall_wam() == 0.0
        assert student.enrollments == {}

    def test_enroll_internal_opens_empty_slot_once(self, make_student) -> None:
        student = make_student("S001")

        first = student.enroll_internal("CS101")
        second = student.enroll_internal("CS101")

        assert first is not None
        assert first.kind is ScoreEventKind.ENROLLED
        assert first.as_tuple() == ("S001", "CS101", None, None)
        assert second is None
        assert student.enrollments == {"CS101": None}

    def test_wam_is_mean_of_present_scores(self, make_student, recorder) -> None:
        student = make_student("S001")
        student.enroll_internal("CS101")
        student.enroll_internal("CS201")
        student.enroll_internal("PD101")
        student.subscribe(recorder)

        student.update_score("CS101", 80.0)
        student.update_score("CS201", 90.0)

        assert student.overall_wam() == 85.0
        assert [e.as_tuple() for e in recorder.events] == [
            ("S001", "CS101", None, 80.0),
            ("S001", "CS201", None, 90.0),
        ]

    def test_update_reports_previous_score(self, make_student, recorder) -> None:
        student = make_student("S001")
        student.enroll_internal("CS101")
        student.subscribe(recorder)

        student.update_score("CS101", 60.0)
        student.update_score("CS101", 75.5)

        assert recorder.events[-1].as_tuple() == ("S001", "CS101", 60.0, 75.5)
        assert recorder.events[-1].kind is ScoreEventKind.SCORE_UPDATED

    @pytest.mark.parametrize("score", [-0.1, 100.5, 105, float("nan")])
    def test_out_of_range_score_is_rejected(self, make_student, recorder, score) -> None:
        student = make_student("S001")
        student.enroll_internal("CS101")
        student.update_score("CS101", 70.0)
        student.subscribe(recorder)

        with pytest.raises(OutOfRangeError):
            student.update_score("CS101", score)

        assert student.enrollments == {"CS101": 70.0}
        assert recorder.events == []

    @pytest.mark.parametrize("score", [0, 100])
    def test_boundary_scores_are_accepted(self, make_student, score) -> None:
        student = make_student("S001")
        student.enroll_internal("CS101")

        student.update_score("CS101", score)

        assert student.enrollments["CS101"] == float(score)

    def test_update_for_unenrolled_course_is_ignored(self, make_student, recorder) -> None:
        student = make_student("S001")
        student.subscribe(recorder)

        student.update_score("CS999", 50.0)

        assert student.enrollments == {}
        assert recorder.events == []

    def test_enrollments_is_a_copy(self, make_student) -> None:
        student = make_student("S001")
        student.enroll_internal("CS101")

        student.enrollments["CS101"] = 99.0

        assert student.enrollments == {"CS101": None}

    def test_view_is_frozen_snapshot(self, make_student) -> None:
        student = make_student("S001", "Alice", GradeLevel.JUNIOR)
        student.enroll_internal("CS201")
        student.enroll_internal("CS101")
        student.update_score("CS101", 70.0)

        view = student.view()
        student.update_score("CS101", 90.0)

        assert view.name == "Alice"
        assert view.role == "Student"
        assert view.overall_wam == 70.0
        assert view.sorted_enrollments() == (("CS101", 70.0), ("CS201", None))
        with pytest.raises(TypeError):
            view.enrollments["CS101"] = 1.0

    def test_view_wam_matches_overall_wam(self, make_student) -> None:
        student = make_student("S001")
        for course_id in ("CS101", "CS201", "PD101"):
            student.enroll_internal(course_id)
        student.update_score("CS101", 55.0)
        student.update_score("PD101", 80.0)

        assert student.view().overall_wam == student.overall_wam() == 67.5

    def test_publish_and_updates_nest_inside_locked_block(self, make_student) -> None:
        student = make_student("S001")
        student.enroll_internal("CS101")
        seen = []

        def observer(event) -> None:
            seen.append(event.as_tuple())

        student.subscribe(observer)
        with student.locked() as locked:
            assert locked is student
            student.publish(ScoreEvent("S001", "CS101", None, 40.0))
            student.update_score("CS101", 50.0)

        assert seen == [("S001", "CS101", None, 40.0), ("S001", "CS101", None, 50.0)]


class TestTeacher:
    """Tests for Teacher assignments."""

    def test_assign_course_is_idempotent(self, make_teacher) -> None:
        teacher = make_teacher("T001")

        teacher.assign_course("CS101")
        teacher.assign_course("CS101")

        assert teacher.assigned_courses == {"CS101"}
        assert teacher.course_load == 1
        assert teacher.role == "Teacher"

    def test_profile_info_contains_identity_fields(self, make_teacher) -> None:
        teacher = make_teacher("T001")

        info = teacher.profile.info()

        assert info["id"] == "T001"
        assert info["city"] == "Springfield"
        assert info["zip_code"] == "62701"


class TestCourse:
    """Tests for Course capacity handling."""

    def test_default_capacity_is_thirty(self) -> None:
        course = Course("CS101", "Programming Paradigms", 4)

        assert course.capacity == 30
        assert course.available_seats == 30

    def test_negative_capacity_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Course("CS101", "Programming Paradigms", 4, capacity=-1)

    def test_enroll_student_raises_when_full(self) -> None:
        course = Course("X", "Tiny", 1, capacity=1)
        course.enroll_student("A")

        with pytest.raises(CapacityExceededError):
            course.enroll_student("B")

        assert course.enrolled_students == {"A"}
        assert course.is_full

    def test_prerequisites_are_data_only(self) -> None:
        course = Course("CS301", "Backend Development", 4)

        course.add_prerequisite("CS201")

        assert course.prerequisites == {"CS201"}
        assert course.view().prerequisites == frozenset({"CS201"})
