"""
Read-only views of registry entities handed to presenters.

Views are frozen snapshots: they copy the entity state at the moment they are
taken and never change afterwards, so presenters can read them from any
thread without locking.
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Optional, Tuple

from .enums import GradeLevel
from .interfaces import EntityVisitor, Visitable


@dataclass(frozen=True)
class Address:
    """Postal address value."""
    street: str
    city: str
    state: str
    zip_code: str

    def one_line(self) -> str:
        return f"{self.street}, {self.city}, {self.state}"


@dataclass(frozen=True)
class Profile:
    """Identity and contact fields shared by students and teachers."""
    id: str
    name: str
    email: str
    address: Address
    created_at: datetime

    def info(self) -> Mapping[str, str]:
        """Flat mapping of the identity fields."""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'street': self.address.street,
            'city': self.address.city,
            'state': self.address.state,
            'zip_code': self.address.zip_code,
            'created_at': self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class StudentView(Visitable):
    profile: Profile
    grade_level: GradeLevel
    enrollments: Mapping[str, Optional[float]]
    overall_wam: float
    role: str = field(default="Student", init=False)

    def __post_init__(self):
        object.__setattr__(self, 'enrollments', MappingProxyType(dict(self.enrollments)))

    @property
    def id(self) -> str:
        return self.profile.id

    @property
    def name(self) -> str:
        return self.profile.name

    @property
    def email(self) -> str:
        return self.profile.email

    @property
    def address(self) -> Address:
        return self.profile.address

    def sorted_enrollments(self) -> Tuple[Tuple[str, Optional[float]], ...]:
        """Enrollment slots ordered by course id."""
        return tuple(sorted(self.enrollments.items()))

    def accept(self, visitor: EntityVisitor) -> Any:
        return visitor.visit_student(self)


@dataclass(frozen=True)
class TeacherView(Visitable):
    profile: Profile
    department: str
    specialization: str
    assigned_courses: FrozenSet[str]
    role: str = field(default="Teacher", init=False)

    @property
    def id(self) -> str:
        return self.profile.id

    @property
    def name(self) -> str:
        return self.profile.name

    @property
    def email(self) -> str:
        return self.profile.email

    @property
    def address(self) -> Address:
        return self.profile.address

    @property
    def course_load(self) -> int:
        return len(self.assigned_courses)

    def accept(self, visitor: EntityVisitor) -> Any:
        return visitor.visit_teacher(self)


@dataclass(frozen=True)
class CourseView(Visitable):
    id: str
    name: str
    credits: int
    capacity: int
    enrolled: FrozenSet[str]
    prerequisites: FrozenSet[str]

    @property
    def enrolled_count(self) -> int:
        return len(self.enrolled)

    @property
    def available_seats(self) -> int:
        return self.capacity - len(self.enrolled)

    def accept(self, visitor: EntityVisitor) -> Any:
        return visitor.visit_course(self)
