"""
Registry service: the single source of truth for one institution.
"""

import logging
import threading
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..core.entities import Course, Student, Teacher
from ..core.enums import EnrollmentStatus
from ..core.exceptions import CapacityExceededError, DuplicateIdError, NotFoundError
from ..core.views import CourseView, StudentView, TeacherView

logger = logging.getLogger(__name__)


@dataclass
class EnrollmentResult:
    """Result of one enrollment attempt in a batch."""
    student_id: str
    course_id: str
    status: EnrollmentStatus
    message: str

    @property
    def success(self) -> bool:
        return self.status in (EnrollmentStatus.CONFIRMED, EnrollmentStatus.ALREADY_ENROLLED)


@dataclass(frozen=True)
class RegistrySnapshot:
    """Views of every entity taken in one registry critical section."""
    name: str
    students: Tuple[StudentView, ...]
    teachers: Tuple[TeacherView, ...]
    courses: Tuple[CourseView, ...]


class Registry:
    """In-memory registry of one institution's people, courses and enrollments.

    Locking: a student's lock is always taken before the registry lock, and
    observers are never called while the registry lock is held.
    """

    def __init__(self, name: str):
        self._name = name
        self._students: List[Student] = []
        self._teachers: List[Teacher] = []
        self._courses: List[Course] = []
        self._student_index: Dict[str, Student] = {}
        self._teacher_index: Dict[str, Teacher] = {}
        self._course_index: Dict[str, Course] = {}
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        return self._name

    # Registration

    def register_student(self, student: Student) -> None:
        """Add a student. Raises DuplicateIdError if the id is taken."""
        with self._lock:
            self._check_unique("student", student.id, self._student_index)
            self._students.append(student)
            self._student_index[student.id] = student
        logger.debug("Registered student %s", student.id)

    def register_teacher(self, teacher: Teacher) -> None:
        """Add a teacher. Raises DuplicateIdError if the id is taken."""
        with self._lock:
            self._check_unique("teacher", teacher.id, self._teacher_index)
            self._teachers.append(teacher)
            self._teacher_index[teacher.id] = teacher
        logger.debug("Registered teacher %s", teacher.id)

    def register_course(self, course: Course) -> None:
        """Add a course. Raises DuplicateIdError if the id is taken."""
        with self._lock:
            self._check_unique("course", course.id, self._course_index)
            self._courses.append(course)
            self._course_index[course.id] = course
        logger.debug("Registered course %s", course.id)

    @staticmethod
    def _check_unique(kind: str, entity_id: str, index: Mapping[str, object]) -> None:
        if entity_id in index:
            raise DuplicateIdError(
                f"Duplicate {kind} id: {entity_id}",
                error_code=f"duplicate_{kind}",
                details={'kind': kind, 'id': entity_id},
            )

    # Lookups

    def find_student(self, student_id: str) -> Optional[Student]:
        with self._lock:
            return self._student_index.get(student_id)

    def find_teacher(self, teacher_id: str) -> Optional[Teacher]:
        with self._lock:
            return self._teacher_index.get(teacher_id)

    def find_course(self, course_id: str) -> Optional[Course]:
        with self._lock:
            return self._course_index.get(course_id)

    def get_student(self, student_id: str) -> Student:
        student = self.find_student(student_id)
        if student is None:
            raise NotFoundError(f"Student not found: {student_id}",
                                error_code="student_not_found", details={'id': student_id})
        return student

    def get_teacher(self, teacher_id: str) -> Teacher:
        teacher = self.find_teacher(teacher_id)
        if teacher is None:
            raise NotFoundError(f"Teacher not found: {teacher_id}",
                                error_code="teacher_not_found", details={'id': teacher_id})
        return teacher

    def get_course(self, course_id: str) -> Course:
        course = self.find_course(course_id)
        if course is None:
            raise NotFoundError(f"Course not found: {course_id}",
                                error_code="course_not_found", details={'id': course_id})
        return course

    def all_students(self) -> Tuple[Student, ...]:
        with self._lock:
            return tuple(self._students)

    def all_teachers(self) -> Tuple[Teacher, ...]:
        with self._lock:
            return tuple(self._teachers)

    def all_courses(self) -> Tuple[Course, ...]:
        with self._lock:
            return tuple(self._courses)

    # Enrollment

    def enroll(self, student_id: str, course_id: str) -> bool:
        """Link a student to a course.

        Returns False when the course is full. Enrolling an existing pair
        returns True without changing anything or notifying observers.
        """
        return self.try_enroll(student_id, course_id) is not EnrollmentStatus.COURSE_FULL

    def try_enroll(self, student_id: str, course_id: str) -> EnrollmentStatus:
        """Link a student to a course and report which outcome applied.

        Both sides of the link are written in one registry critical section;
        the enrollment event is published after the registry lock is
        released but before the student lock is, so it precedes any later
        score event for the same student.
        """
        student = self.get_student(student_id)
        course = self.get_course(course_id)

        with student.locked():
            with self._lock:
                if student.is_enrolled(course_id):
                    return EnrollmentStatus.ALREADY_ENROLLED
                try:
                    course.enroll_student(student_id)
                except CapacityExceededError as e:
                    logger.warning("%s; %s not enrolled", e.message, student_id)
                    return EnrollmentStatus.COURSE_FULL
                event = student.enroll_internal(course_id)
            logger.info("Enrolled %s in %s", student_id, course_id)
            if event is not None:
                student.publish(event)
        return EnrollmentStatus.CONFIRMED

    def enroll_many(self, pairs: Iterable[Tuple[str, str]]) -> List[EnrollmentResult]:
        """Apply enrollment pairs in order, reporting each outcome instead of stopping."""
        messages = {
            EnrollmentStatus.CONFIRMED: "Student enrolled successfully",
            EnrollmentStatus.ALREADY_ENROLLED: "Student already enrolled",
        }
        results = []
        for student_id, course_id in pairs:
            try:
                status = self.try_enroll(student_id, course_id)
            except NotFoundError as e:
                logger.warning("Skipping enrollment %s -> %s: %s", student_id, course_id, e.message)
                results.append(EnrollmentResult(student_id, course_id, EnrollmentStatus.NOT_FOUND, e.message))
                continue
            message = messages.get(status, f"Course {course_id} is full")
            results.append(EnrollmentResult(student_id, course_id, status, message))
        return results

    def assign(self, teacher_id: str, course_id: str) -> None:
        """Advertise that a teacher teaches a course. The course is not checked."""
        teacher = self.get_teacher(teacher_id)
        with self._lock:
            teacher.assign_course(course_id)
        logger.debug("Assigned %s to %s", course_id, teacher_id)

    def assign_by_specialization(self, mapping: Mapping[str, str]) -> int:
        """Assign each teacher the course mapped from their specialization.

        Returns the number of teachers that received a course.
        """
        assigned = 0
        for teacher in self.all_teachers():
            course_id = mapping.get(teacher.specialization)
            if course_id is not None:
                self.assign(teacher.id, course_id)
                assigned += 1
        return assigned

    # Aggregate queries

    def department_counts(self) -> Dict[str, int]:
        """Number of teachers per department, keyed in department order."""
        counts = Counter(teacher.department for teacher in self.all_teachers())
        return dict(sorted(counts.items()))

    def top_performers(self, n: int) -> List[Tuple[str, float]]:
        """The n students with the highest overall WAM, best first.

        Ties keep registration order. Students without any score count as
        0.0 and so sink to the bottom with genuinely zero-averaging students.
        """
        if n <= 0:
            return []
        performers = [(student.name, student.overall_wam()) for student in self.all_students()]
        performers.sort(key=lambda pair: pair[1], reverse=True)
        return performers[:n]

    def snapshot(self) -> RegistrySnapshot:
        """Consistent read-only views of all entities."""
        with self._lock:
            return RegistrySnapshot(
                name=self._name,
                students=tuple(student.view() for student in self._students),
                teachers=tuple(teacher.view() for teacher in self._teachers),
                courses=tuple(course.view() for course in self._courses),
            )

    def unlinked_enrollments(self) -> List[Tuple[str, str]]:
        """(student_id, course_id) pairs recorded on only one side of a link."""
        snapshot = self.snapshot()
        student_side = {(s.id, course_id) for s in snapshot.students for course_id in s.enrollments}
        course_side = {(student_id, c.id) for c in snapshot.courses for student_id in c.enrolled}
        return sorted(student_side ^ course_side)

    def __repr__(self) -> str:
        return (f"Registry(name={self._name!r}, students={len(self._students)}, "
                f"teachers={len(self._teachers)}, courses={len(self._courses)})")
