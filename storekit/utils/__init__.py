"""Record file utilities package."""

from .records import (
    parse_student_line,
    parse_student_lines,
    read_students,
    write_report,
)

__all__ = [
    "parse_student_line",
    "parse_student_lines",
    "read_students",
    "write_report",
]
