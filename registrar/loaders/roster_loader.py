"""
Roster loader for line-oriented student and teacher files.

Each line is one record of comma-separated fields with surrounding ASCII
whitespace trimmed. Lines with the wrong number of fields or empty key fields
are logged and skipped; an unknown grade level fails the whole load.
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, List, TypeVar, Union

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from ..core.entities import Student, Teacher
from ..core.enums import GradeLevel
from ..core.exceptions import MalformedRecordError
from ..core.views import Address

logger = logging.getLogger(__name__)

STUDENT_FIELDS = 8
TEACHER_FIELDS = 9
_WHITESPACE = " \t\n\r\f\v"

T = TypeVar('T')


class StudentRecord(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: str
    street: str
    city: str
    state: str
    zip_code: str
    grade_level: str

    def to_entity(self) -> Student:
        return Student(
            self.id, self.name, self.email,
            Address(self.street, self.city, self.state, self.zip_code),
            GradeLevel.from_token(self.grade_level),
        )


class TeacherRecord(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: str
    street: str
    city: str
    state: str
    zip_code: str
    department: str
    specialization: str

    def to_entity(self) -> Teacher:
        return Teacher(
            self.id, self.name, self.email,
            Address(self.street, self.city, self.state, self.zip_code),
            self.department, self.specialization,
        )


def split_fields(line: str) -> List[str]:
    """Split a record on commas and trim each field."""
    return [token.strip(_WHITESPACE) for token in line.rstrip("\r\n").split(",")]


class RosterLoader:
    """Builds entities from roster files; the registry never reads files itself."""

    def __init__(self, encoding: str = "utf-8"):
        self._encoding = encoding
        self._skipped: List[MalformedRecordError] = []

    @property
    def skipped(self) -> List[MalformedRecordError]:
        """Records skipped by the most recent parse."""
        return self._skipped.copy()

    def load_students(self, path: Union[str, Path]) -> List[Student]:
        return self.parse_students(self._read_lines(path))

    def load_teachers(self, path: Union[str, Path]) -> List[Teacher]:
        return self.parse_teachers(self._read_lines(path))

    def parse_students(self, lines: Iterable[str]) -> List[Student]:
        return self._parse(lines, "student", STUDENT_FIELDS, StudentRecord)

    def parse_teachers(self, lines: Iterable[str]) -> List[Teacher]:
        return self._parse(lines, "teacher", TEACHER_FIELDS, TeacherRecord)

    def _read_lines(self, path: Union[str, Path]) -> List[str]:
        with open(path, "r", encoding=self._encoding, newline="") as f:
            lines = f.read().split("\n")
        logger.debug("Read %d lines from %s", len(lines), path)
        return lines

    def _parse(self, lines: Iterable[str], kind: str, expected: int,
               record_type: Callable[..., T]) -> List:
        self._skipped = []
        entities = []
        names = list(record_type.model_fields)
        for line_number, line in enumerate(lines, start=1):
            if not line.strip(_WHITESPACE):
                continue
            try:
                record = self._to_record(line, line_number, kind, expected, names, record_type)
            except MalformedRecordError as e:
                logger.warning("%s", e.message)
                self._skipped.append(e)
                continue
            entities.append(record.to_entity())
        logger.info("Loaded %d %s record(s), skipped %d", len(entities), kind, len(self._skipped))
        return entities

    @staticmethod
    def _to_record(line: str, line_number: int, kind: str, expected: int,
                   names: List[str], record_type: Callable[..., T]) -> T:
        tokens = split_fields(line)
        if len(tokens) != expected:
            raise MalformedRecordError(
                f"Invalid {kind} record on line {line_number} "
                f"({len(tokens)} fields, expected {expected}): {line}",
                line_number, line, error_code="field_count",
            )
        try:
            return record_type(**dict(zip(names, tokens)))
        except PydanticValidationError as e:
            field = ".".join(str(part) for part in e.errors()[0]["loc"])
            raise MalformedRecordError(
                f"Invalid {kind} record on line {line_number}: bad field '{field}': {line}",
                line_number, line, error_code="invalid_field",
            ) from e
