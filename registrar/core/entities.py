"""
Core entities for the registrar.

Students and teachers share identity and contact data through an embedded
:class:`Profile` rather than a common base class. Immutable fields are fixed
at construction; mutable state (enrollment slots, assigned courses, enrolled
students) is only changed through the methods below.
"""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Dict, Iterator, Optional, Set

from .enums import DEFAULT_CAPACITY, MAX_SCORE, MIN_SCORE, GradeLevel, ScoreEventKind
from .events import ObserverBus, ObserverLike, ScoreEvent
from .exceptions import CapacityExceededError, OutOfRangeError, ValidationError
from .views import Address, CourseView, Profile, StudentView, TeacherView

logger = logging.getLogger(__name__)


def _make_profile(entity_id: str, name: str, email: str, address: Address) -> Profile:
    return Profile(
        id=entity_id,
        name=name,
        email=email,
        address=address,
        created_at=datetime.now(timezone.utc),
    )


def _mean_score(courses: Dict[str, Optional[float]]) -> float:
    scores = [score for score in courses.values() if score is not None]
    if not scores:
        return 0.0
    return sum(scores) / len(scores)


class Student:
    """Student with per-course WAM slots and a private observer bus."""

    def __init__(self, student_id: str, name: str, email: str, address: Address,
                 grade_level: GradeLevel):
        self._profile = _make_profile(student_id, name, email, address)
        self._grade_level = grade_level
        self._courses: Dict[str, Optional[float]] = {}  # course_id -> score
        self._bus = ObserverBus(student_id)
        self._lock = threading.RLock()

    @property
    def id(self) -> str:
        """Get the student ID."""
        return self._profile.id

    @property
    def name(self) -> str:
        """Get the student's name."""
        return self._profile.name

    @property
    def email(self) -> str:
        """Get the student's email."""
        return self._profile.email

    @property
    def address(self) -> Address:
        """Get the student's address."""
        return self._profile.address

    @property
    def created_at(self) -> datetime:
        """Get creation timestamp."""
        return self._profile.created_at

    @property
    def profile(self) -> Profile:
        """Get the shared identity record."""
        return self._profile

    @property
    def grade_level(self) -> GradeLevel:
        """Get the grade level."""
        return self._grade_level

    @property
    def role(self) -> str:
        """Get the role label."""
        return "Student"

    @property
    def enrollments(self) -> Dict[str, Optional[float]]:
        """Copy of the enrollment map, ``None`` meaning no grade yet."""
        return self._courses.copy()

    def is_enrolled(self, course_id: str) -> bool:
        return course_id in self._courses

    @contextmanager
    def locked(self) -> Iterator["Student"]:
        """Hold this student's lock for a multi-step change.

        The lock is re-entrant. Callers that also need the registry lock must
        take this one first.
        """
        with self._lock:
            yield self

    def enroll_internal(self, course_id: str) -> Optional[ScoreEvent]:
        """Open an empty score slot for a course.

        Only the registry calls this, holding this student's lock and the
        registry lock. Returns the enrollment event for the registry to
        publish once it has released its own lock, or ``None`` if the slot
        already existed.
        """
        with self._lock:
            if course_id in self._courses:
                return None
            self._courses[course_id] = None
            return ScoreEvent.enrolled(self.id, course_id)

    def update_score(self, course_id: str, score: float) -> None:
        """Record a WAM score for an enrolled course and notify observers.

        Scores outside [0, 100] are rejected before any state changes. Updates
        for courses the student is not enrolled in are ignored.
        """
        if not MIN_SCORE <= score <= MAX_SCORE:
            raise OutOfRangeError(
                f"Score {score} for {self.id}/{course_id} must be between {MIN_SCORE:g} and {MAX_SCORE:g}",
                error_code="score_out_of_range",
                details={'student_id': self.id, 'course_id': course_id, 'score': score},
            )
        with self._lock:
            if course_id not in self._courses:
                logger.debug("Ignoring score for %s: not enrolled in %s", self.id, course_id)
                return
            old_score = self._courses[course_id]
            self._courses[course_id] = float(score)
            self.publish(ScoreEvent(self.id, course_id, old_score, float(score),
                                    ScoreEventKind.SCORE_UPDATED))

    def overall_wam(self) -> float:
        """Arithmetic mean of the present scores.

        Returns 0.0 when no course has a score yet. Rankings therefore place
        ungraded students alongside students averaging zero.
        """
        return _mean_score(self._courses.copy())

    def subscribe(self, observer: ObserverLike) -> None:
        """Subscribe an observer to this student's score events."""
        self._bus.subscribe(observer)

    def publish(self, event: ScoreEvent) -> None:
        """Deliver an event to this student's observers under the student lock."""
        with self._lock:
            self._bus.notify(event)

    def view(self) -> StudentView:
        courses = self._courses.copy()
        return StudentView(
            profile=self._profile,
            grade_level=self._grade_level,
            enrollments=courses,
            overall_wam=_mean_score(courses),
        )

    def __str__(self) -> str:
        return f"Student(id={self.id}, name={self.name})"

    def __repr__(self) -> str:
        return f"Student(id={self.id}, grade_level={self._grade_level.value})"


class Teacher:
    """Teacher entity with department and advertised courses."""

    def __init__(self, teacher_id: str, name: str, email: str, address: Address,
                 department: str, specialization: str):
        self._profile = _make_profile(teacher_id, name, email, address)
        self._department = department
        self._specialization = specialization
        self._assigned_courses: Set[str] = set()

    @property
    def id(self) -> str:
        """Get the teacher ID."""
        return self._profile.id

    @property
    def name(self) -> str:
        """Get the teacher's name."""
        return self._profile.name

    @property
    def email(self) -> str:
        """Get the teacher's email."""
        return self._profile.email

    @property
    def address(self) -> Address:
        """Get the teacher's address."""
        return self._profile.address

    @property
    def created_at(self) -> datetime:
        """Get creation timestamp."""
        return self._profile.created_at

    @property
    def profile(self) -> Profile:
        """Get the shared identity record."""
        return self._profile

    @property
    def department(self) -> str:
        """Get the department."""
        return self._department

    @property
    def specialization(self) -> str:
        """Get the specialization."""
        return self._specialization

    @property
    def role(self) -> str:
        """Get the role label."""
        return "Teacher"

    @property
    def assigned_courses(self) -> Set[str]:
        """Get a copy of the assigned course IDs."""
        return self._assigned_courses.copy()

    @property
    def course_load(self) -> int:
        """Get the number of assigned courses."""
        return len(self._assigned_courses)

    def assign_course(self, course_id: str) -> None:
        """Add a course to teach."""
        self._assigned_courses.add(course_id)

    def view(self) -> TeacherView:
        return TeacherView(
            profile=self._profile,
            department=self._department,
            specialization=self._specialization,
            assigned_courses=frozenset(self._assigned_courses),
        )

    def __repr__(self) -> str:
        return f"Teacher(id={self.id}, department={self._department})"


class Course:
    """Course with a fixed seat capacity."""

    def __init__(self, course_id: str, name: str, credits: int, capacity: int = DEFAULT_CAPACITY):
        if capacity < 0:
            raise ValidationError("Capacity cannot be negative",
                                  details={'course_id': course_id, 'capacity': capacity})
        self._id = course_id
        self._name = name
        self._credits = credits
        self._capacity = capacity
        self._enrolled: Set[str] = set()  # Student IDs
        self._prerequisites: Set[str] = set()  # Course IDs

    @property
    def id(self) -> str:
        """Get the course ID."""
        return self._id

    @property
    def name(self) -> str:
        """Get the course name."""
        return self._name

    @property
    def credits(self) -> int:
        """Get the credit value."""
        return self._credits

    @property
    def capacity(self) -> int:
        """Get the seat capacity."""
        return self._capacity

    @property
    def enrolled_students(self) -> Set[str]:
        """Get a copy of the enrolled student IDs."""
        return self._enrolled.copy()

    @property
    def enrolled_count(self) -> int:
        """Get the number of enrolled students."""
        return len(self._enrolled)

    @property
    def available_seats(self) -> int:
        """Get the number of open seats."""
        return self._capacity - len(self._enrolled)

    @property
    def is_full(self) -> bool:
        """Check if the course has no open seats."""
        return len(self._enrolled) >= self._capacity

    @property
    def prerequisites(self) -> Set[str]:
        """Get a copy of the prerequisite course IDs."""
        return self._prerequisites.copy()

    def add_prerequisite(self, course_id: str) -> None:
        """Record a prerequisite. Enrollment does not check prerequisites."""
        self._prerequisites.add(course_id)

    def enroll_student(self, student_id: str) -> None:
        """Take a seat for a student. Raises CapacityExceededError when full."""
        if student_id in self._enrolled:
            return
        if self.is_full:
            raise CapacityExceededError(
                f"Course {self._id} is full ({self._capacity} seats)",
                error_code="course_full",
                details={'course_id': self._id, 'student_id': student_id},
            )
        self._enrolled.add(student_id)

    def view(self) -> CourseView:
        return CourseView(
            id=self._id,
            name=self._name,
            credits=self._credits,
            capacity=self._capacity,
            enrolled=frozenset(self._enrolled),
            prerequisites=frozenset(self._prerequisites),
        )

    def __repr__(self) -> str:
        return f"Course(id={self._id}, enrolled={len(self._enrolled)}/{self._capacity})"
