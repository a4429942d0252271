"""
Core interfaces and abstract base classes for the registrar.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar


R = TypeVar('R')


class ScoreObserver(ABC):
    """Interface for subscribers to a student's score events."""

    @abstractmethod
    def on_score_event(self, event: 'ScoreEvent') -> None:
        """Handle one score event. Keep this short; it runs under the bus lock."""
        pass


class EntityVisitor(ABC, Generic[R]):
    """Read-only inspection of registry entities.

    The core hands each method a view and returns whatever the visitor
    produces without interpreting it.
    """

    @abstractmethod
    def visit_student(self, student: 'StudentView') -> R:
        """Visit a student view."""
        pass

    @abstractmethod
    def visit_teacher(self, teacher: 'TeacherView') -> R:
        """Visit a teacher view."""
        pass

    @abstractmethod
    def visit_course(self, course: 'CourseView') -> R:
        """Visit a course view."""
        pass


class Visitable(ABC):
    """Interface for views that dispatch to an :class:`EntityVisitor`."""

    @abstractmethod
    def accept(self, visitor: EntityVisitor) -> Any:
        """Call the visitor method matching this view's kind."""
        pass
