"""Grading service - student records in, grade report out."""

from pathlib import Path
from typing import Optional

from storekit.models.domain import Student
from storekit.repositories.entity_store import EntityStore
from storekit.services.reporting import ReportSink
from storekit.utils.records import read_students, write_report


class GradingService:
    """
    Service for turning a delimited student file into a grade report.

    Parsed students go through an EntityStore, so a file that repeats a
    student id fails with DuplicateKeyError before any report is written.
    """

    def __init__(self, sink: Optional[ReportSink] = None):
        self.sink = sink or ReportSink()
        self.students: EntityStore[Student] = EntityStore(Student)

    def load_students(self, input_path: Path) -> EntityStore[Student]:
        """Read and store every student in the input file."""
        self.students = EntityStore.from_items(Student, read_students(input_path))
        return self.students

    def generate_report(self, input_path: Path, output_path: Path) -> None:
        self.load_students(input_path)
        write_report(self.students.list(), output_path)

    def run(self, input_path: Path, output_path: Path) -> bool:
        """Run the report; returns False if the failure was reported."""
        def _generate() -> bool:
            self.generate_report(input_path, output_path)
            return True

        if not self.sink.run_step("generate_report", _generate):
            return False
        self.sink.info("Report generated successfully.")
        return True
