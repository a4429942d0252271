"""
Enumerations and constants for the registrar.
"""

from enum import Enum

from .exceptions import UnknownGradeLevelError


MIN_SCORE = 0.0
MAX_SCORE = 100.0
DEFAULT_CAPACITY = 30


class GradeLevel(Enum):
    """Academic grade levels."""
    FRESHMAN = "FRESHMAN"
    SOPHOMORE = "SOPHOMORE"
    JUNIOR = "JUNIOR"
    SENIOR = "SENIOR"

    @classmethod
    def from_token(cls, token: str) -> "GradeLevel":
        """Parse a roster token such as ``JUNIOR``. Matching is exact."""
        try:
            return cls(token)
        except ValueError:
            raise UnknownGradeLevelError(
                f"Invalid grade level: {token}",
                error_code="unknown_grade_level",
                details={'token': token},
            ) from None


class ScoreEventKind(Enum):
    """What caused a score event."""
    ENROLLED = "enrolled"
    SCORE_UPDATED = "score_updated"


class EnrollmentStatus(Enum):
    """Outcome of a single enrollment attempt in a batch."""
    CONFIRMED = "confirmed"
    ALREADY_ENROLLED = "already_enrolled"
    COURSE_FULL = "course_full"
    NOT_FOUND = "not_found"
