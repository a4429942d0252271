"""
Core module containing the entity model, events and interfaces.
"""

from .entities import *
from .events import *
from .interfaces import *
from .exceptions import *
from .enums import *
from .views import *

__all__ = [
    # Entities
    "Student",
    "Teacher",
    "Course",

    # Values and views
    "Address",
    "Profile",
    "StudentView",
    "TeacherView",
    "CourseView",

    # Events
    "ScoreEvent",
    "ObserverBus",

    # Interfaces
    "ScoreObserver",
    "EntityVisitor",
    "Visitable",

    # Enums and constants
    "GradeLevel",
    "ScoreEventKind",
    "EnrollmentStatus",
    "DEFAULT_CAPACITY",
    "MIN_SCORE",
    "MAX_SCORE",

    # Exceptions
    "RegistrarException",
    "NotFoundError",
    "DuplicateIdError",
    "ValidationError",
    "OutOfRangeError",
    "UnknownGradeLevelError",
    "CapacityExceededError",
    "MalformedRecordError",
    "NotifyError",
    "ConfigurationError",
]
