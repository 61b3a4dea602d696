"""Delimited student-record parsing and grade report writing.

Input lines look like ``<id>,<full name>,<score>``. Anything after the
third field is ignored.
"""

import re
from pathlib import Path
from typing import Iterable, List, Optional

from storekit.models.domain import INT32_MAX, Student
from storekit.models.errors import MalformedFieldError, MissingFieldError, PersistenceError

DELIMITER = ","
REQUIRED_FIELDS = 3
INT32_MIN = -INT32_MAX - 1
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def _parse_int(value: str, field_name: str, line_number: Optional[int], line: str) -> int:
    """Parse a signed ASCII decimal that fits in 32 bits."""
    if INTEGER_PATTERN.fullmatch(value):
        number = int(value)
        if INT32_MIN <= number <= INT32_MAX:
            return number
    raise MalformedFieldError(
        f"Invalid {field_name} format: {value!r}", line_number=line_number, line=line
    )


def parse_student_line(line: str, line_number: Optional[int] = None) -> Student:
    """Parse one delimited line into a Student.

    Raises:
        MissingFieldError: If the line has fewer than three fields
        MalformedFieldError: If the id or score is not an integer
    """
    parts = [part.strip() for part in line.split(DELIMITER)]
    if len(parts) < REQUIRED_FIELDS:
        raise MissingFieldError(
            f"Missing fields in line: {line.strip()!r}", line_number=line_number, line=line
        )

    student_id = _parse_int(parts[0], "ID", line_number, line)
    score = _parse_int(parts[2], "score", line_number, line)
    return Student(id=student_id, full_name=parts[1], score=score)


def parse_student_lines(lines: Iterable[str]) -> List[Student]:
    """Parse lines in order, skipping blank ones. Line numbers start at 1."""
    students = []
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        students.append(parse_student_line(line, line_number))
    return students


def read_students(path: Path) -> List[Student]:
    """Read a student record file.

    Raises:
        PersistenceError: If the file cannot be opened or read
        MissingFieldError, MalformedFieldError: On the first bad line
    """
    try:
        with open(path, encoding="utf-8") as f:
            lines = f.readlines()
    except OSError as exc:
        raise PersistenceError(
            f"Input file could not be read: {path} ({exc.strerror or exc})",
            operation="read_students",
            details={"path": str(path)},
        ) from exc
    return parse_student_lines(lines)


def format_report_line(student: Student) -> str:
    return f"{student.full_name} (ID: {student.id}): Score = {student.score}, Grade = {student.grade}"


def write_report(students: Iterable[Student], path: Path) -> None:
    """Write one report line per student.

    Raises:
        PersistenceError: If the file cannot be written
    """
    try:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            for student in students:
                f.write(format_report_line(student) + "\n")
    except OSError as exc:
        raise PersistenceError(
            f"Report could not be written: {path} ({exc.strerror or exc})",
            operation="write_report",
            details={"path": str(path)},
        ) from exc
