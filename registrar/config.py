"""
Configuration for the registrar command line.

Defaults reproduce the stock demonstration data: four courses, the
specialization-to-course mapping used to assign teachers and the initial
enrollment list. A JSON file may override any field.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from .core.entities import Course
from .core.enums import DEFAULT_CAPACITY
from .core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class CourseConfig(BaseModel):
    id: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., min_length=1, max_length=200)
    credits: int = Field(..., ge=0)
    capacity: int = Field(DEFAULT_CAPACITY, ge=0)
    prerequisites: List[str] = Field(default_factory=list)

    def to_entity(self) -> Course:
        course = Course(self.id, self.name, self.credits, self.capacity)
        for prerequisite in self.prerequisites:
            course.add_prerequisite(prerequisite)
        return course


def _default_courses() -> List[CourseConfig]:
    return [
        CourseConfig(id="CS101", name="Programming Paradigms", credits=4),
        CourseConfig(id="CS201", name="Network and Communication", credits=4),
        CourseConfig(id="CS301", name="Backend Development", credits=4),
        CourseConfig(id="PD101", name="Professional Development", credits=3),
    ]


def _default_specializations() -> Dict[str, str]:
    return {
        "Programming Paradigms": "CS101",
        "Network and Communication": "CS201",
        "Backend Development": "CS301",
        "Career Skills": "PD101",
    }


def _default_enrollments() -> List[Tuple[str, str]]:
    return [
        ("S001", "CS101"), ("S001", "CS201"), ("S001", "PD101"),
        ("S002", "CS101"), ("S002", "CS301"), ("S002", "PD101"),
        ("S003", "CS201"), ("S003", "CS301"), ("S003", "PD101"),
        ("S004", "CS101"), ("S004", "PD101"),
        ("S005", "CS101"), ("S005", "CS201"),
        ("S006", "CS101"), ("S006", "CS301"),
        ("S007", "CS101"),
        ("S008", "CS101"), ("S008", "PD101"),
        ("S009", "CS201"), ("S009", "PD101"),
        ("S010", "CS101"), ("S010", "CS201"), ("S010", "CS301"),
    ]


class RegistrarConfig(BaseModel):
    institution_name: str = Field("Chitkara University", min_length=1)
    students_file: str = "students.txt"
    teachers_file: str = "teachers.txt"
    courses: List[CourseConfig] = Field(default_factory=_default_courses)
    specialization_courses: Dict[str, str] = Field(default_factory=_default_specializations)
    enrollments: List[Tuple[str, str]] = Field(default_factory=_default_enrollments)
    report_workers: Optional[int] = Field(None, ge=1)
    top_n: int = Field(3, ge=0)
    simulate: bool = True
    simulation_low: float = Field(50.0, ge=0.0, le=100.0)
    simulation_high: float = Field(95.0, ge=0.0, le=100.0)
    simulation_delay: float = Field(0.0, ge=0.0)
    seed: Optional[int] = None
    color: bool = True

    @model_validator(mode="after")
    def _check_simulation_range(self) -> "RegistrarConfig":
        if self.simulation_low > self.simulation_high:
            raise ValueError("simulation_low must not exceed simulation_high")
        return self


def load_config(path: Optional[Union[str, Path]] = None) -> RegistrarConfig:
    """Load configuration from a JSON file, or the defaults when no path is given."""
    if path is None:
        return RegistrarConfig()

    try:
        with open(path, 'r', encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Configuration file {path} is not valid JSON: {e}",
                                 error_code="invalid_json") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a JSON object",
                                 error_code="invalid_config")
    try:
        config = RegistrarConfig(**raw)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "config"
        raise ConfigurationError(f"Invalid configuration field '{field}': {first['msg']}",
                                 error_code="invalid_config", details={'field': field}) from e

    logger.debug("Loaded configuration from %s", path)
    return config
