"""Unit tests for the roster loader."""

import logging

import pytest

from registrar.core import GradeLevel, UnknownGradeLevelError
from registrar.loaders import RosterLoader, split_fields


STUDENT_LINES = [
    "S001, Alice Smith , alice@example.edu, 1 Main St, Springfield, IL, 62701, FRESHMAN",
    "S002,Bob Jones,bob@example.edu,2 Oak Ave,Shelbyville,IL,62565,SENIOR\r",
]


class TestSplitFields:
    """Tests for field splitting."""

    def test_trims_ascii_whitespace(self) -> None:
        assert split_fields(" a ,\tb\t, c \r\n") == ["a", "b", "c"]


class TestRosterLoader:
    """Tests for RosterLoader parsing."""

    def test_parses_students(self) -> None:
        students = RosterLoader().parse_students(STUDENT_LINES)

        assert [s.id for s in students] == ["S001", "S002"]
        assert students[0].name == "Alice Smith"
        assert students[0].address.zip_code == "62701"
        assert students[1].grade_level is GradeLevel.SENIOR

    def test_wrong_field_count_is_skipped_and_logged(self, caplog) -> None:
        loader = RosterLoader()
        lines = STUDENT_LINES + ["S003, Too, Few, Fields"]

        with caplog.at_level(logging.WARNING):
            students = loader.parse_students(lines)

        assert len(students) == 2
        assert len(loader.skipped) == 1
        assert loader.skipped[0].line_number == 3
        assert "line 3" in caplog.text

    def test_empty_id_is_malformed(self) -> None:
        loader = RosterLoader()

        students = loader.parse_students([" , Nobody, n@example.edu, a, b, c, d, JUNIOR"])

        assert students == []
        assert "'id'" in loader.skipped[0].message

    def test_blank_lines_are_ignored(self) -> None:
        loader = RosterLoader()

        students = loader.parse_students(["", STUDENT_LINES[0], "   "])

        assert len(students) == 1
        assert loader.skipped == []

    def test_unknown_grade_level_fails_whole_load(self) -> None:
        lines = STUDENT_LINES + ["S003, Cy, cy@example.edu, 3 Elm St, Ogdenville, IL, 62000, GRADUATE"]

        with pytest.raises(UnknownGradeLevelError):
            RosterLoader().parse_students(lines)

    def test_parses_teachers(self) -> None:
        teachers = RosterLoader().parse_teachers([
            "T001, Dr Who, who@example.edu, 1 Police Box, London, LDN, 00000, Physics, Time Travel",
            "T002, Short, Record",
        ])

        assert len(teachers) == 1
        assert teachers[0].department == "Physics"
        assert teachers[0].specialization == "Time Travel"

    def test_load_from_file_with_crlf(self, tmp_path) -> None:
        path = tmp_path / "students.txt"
        path.write_bytes("\r\n".join(STUDENT_LINES).encode("utf-8") + b"\r\n")

        students = RosterLoader().load_students(path)

        assert [s.id for s in students] == ["S001", "S002"]
        assert students[1].grade_level is GradeLevel.SENIOR

    def test_missing_file_raises_os_error(self, tmp_path) -> None:
        with pytest.raises(OSError):
            RosterLoader().load_teachers(tmp_path / "missing.txt")
