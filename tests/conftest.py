"""Pytest configuration and shared fixtures."""

from typing import Callable

import pytest

from registrar.core import Address, Course, GradeLevel, Student, Teacher
from registrar.services import Registry, ScoreEventRecorder


@pytest.fixture
def address() -> Address:
    return Address("1 Main Street", "Springfield", "IL", "62701")


@pytest.fixture
def make_student(address: Address) -> Callable[..., Student]:
    def factory(student_id: str, name: str = "", grade_level: GradeLevel = GradeLevel.FRESHMAN) -> Student:
        return Student(student_id, name or f"Student {student_id}",
                       f"{student_id.lower()}@example.edu", address, grade_level)
    return factory


@pytest.fixture
def make_teacher(address: Address) -> Callable[..., Teacher]:
    def factory(teacher_id: str, department: str = "Computer Science",
                specialization: str = "Programming Paradigms") -> Teacher:
        return Teacher(teacher_id, f"Teacher {teacher_id}", f"{teacher_id.lower()}@example.edu",
                       address, department, specialization)
    return factory


@pytest.fixture
def registry() -> Registry:
    return Registry("Test University")


@pytest.fixture
def recorder() -> ScoreEventRecorder:
    return ScoreEventRecorder()


@pytest.fixture
def populated_registry(registry: Registry, make_student) -> Registry:
    """Registry with S001 and courses CS101 (capacity 2) and CS201."""
    registry.register_student(make_student("S001", "Alice"))
    registry.register_course(Course("CS101", "Programming Paradigms", 4, capacity=2))
    registry.register_course(Course("CS201", "Network and Communication", 4))
    return registry
