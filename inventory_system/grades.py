"""Student grade sheet parsing and report generation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from .config import ScoreOutOfRangeError, ValidationConfig
from .domain import Student
from .repository import DuplicateRecordError, KeyedRepository
from .services import OperationResult
from .validation import RangePolicy

logger = logging.getLogger(__name__)

REPORT_HEADER = "=== STUDENT GRADE REPORT ==="
EXPECTED_FIELDS = 3


class GradeReportError(ValueError):
    """Base class for malformed grade sheet lines."""

    def __init__(self, message: str, *, line_number: Optional[int] = None) -> None:
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class MissingFieldError(GradeReportError):
    """A line lacks one of the id, name and score fields."""


class InvalidStudentIdError(GradeReportError):
    pass


class InvalidScoreFormatError(GradeReportError):
    pass


class StudentResultProcessor:
    """Read ``id, full name, score`` lines and write a graded report."""

    def __init__(self, score_policy: Optional[RangePolicy] = None) -> None:
        self.score_policy = score_policy or ValidationConfig().score_policy()

    def parse_line(self, line: str, line_number: int) -> Optional[Student]:
        line = line.strip()
        if not line:
            return None

        parts = line.split(",")
        if len(parts) < EXPECTED_FIELDS:
            raise MissingFieldError(
                f"Expected {EXPECTED_FIELDS} fields, found {len(parts)}. Content: {line!r}",
                line_number=line_number,
            )
        id_text, full_name, score_text = (part.strip() for part in parts[:EXPECTED_FIELDS])
        if not id_text or not full_name or not score_text:
            raise MissingFieldError("One or more fields are empty.", line_number=line_number)

        try:
            student_id = int(id_text)
        except ValueError as exc:
            raise InvalidStudentIdError(
                f"Invalid student ID format: {id_text!r}", line_number=line_number
            ) from exc
        try:
            score = int(score_text)
        except ValueError as exc:
            raise InvalidScoreFormatError(
                f"Score is not a valid integer: {score_text!r}", line_number=line_number
            ) from exc

        self.score_policy.check(score, context=full_name)
        return Student(id=student_id, full_name=full_name, score=score)

    def read_students(self, lines: Iterable[str]) -> List[Student]:
        students: KeyedRepository[Student] = KeyedRepository()
        for line_number, line in enumerate(lines, start=1):
            student = self.parse_line(line, line_number)
            if student is None:
                continue
            try:
                students.add(student)
            except DuplicateRecordError as exc:
                raise DuplicateRecordError(
                    f"Line {line_number}: {exc}", record_id=student.id
                ) from exc
        return students.list()

    def read_students_from_file(self, path: Union[str, Path]) -> List[Student]:
        with open(path, encoding="utf-8") as handle:
            return self.read_students(handle)

    def build_report(self, students: Sequence[Student]) -> str:
        lines = [REPORT_HEADER, ""]
        lines.extend(str(student) for student in students)
        lines.append("")
        lines.append(f"Total Students Processed: {len(students)}")
        return "\n".join(lines) + "\n"

    def write_report(self, students: Sequence[Student], path: Union[str, Path]) -> None:
        Path(path).write_text(self.build_report(students), encoding="utf-8")

    def process(self, input_path: Union[str, Path], output_path: Union[str, Path]) -> OperationResult:
        """Read ``input_path`` and write the report; errors are reported, not raised."""

        try:
            students = self.read_students_from_file(input_path)
        except FileNotFoundError:
            logger.error("Input file %s not found", input_path)
            return OperationResult.failure(
                f"Error: Input file '{input_path}' not found. Please make sure the file exists."
            )
        except MissingFieldError as exc:
            logger.error("Missing data in %s: %s", input_path, exc)
            return OperationResult.failure(f"Missing Data: {exc}")
        except InvalidScoreFormatError as exc:
            logger.error("Invalid score in %s: %s", input_path, exc)
            return OperationResult.failure(f"Invalid Score Format: {exc}")
        except (InvalidStudentIdError, ScoreOutOfRangeError) as exc:
            logger.error("Format error in %s: %s", input_path, exc)
            return OperationResult.failure(f"Format Error: {exc}")
        except DuplicateRecordError as exc:
            logger.error("Duplicate student in %s: %s", input_path, exc)
            return OperationResult.failure(f"Duplicate Student: {exc}", exc.kind)
        except UnicodeDecodeError as exc:
            logger.error("Input file %s is not valid UTF-8: %s", input_path, exc)
            return OperationResult.failure(f"Encoding Error: Input file '{input_path}' is not valid UTF-8.")
        except OSError as exc:
            logger.error("Could not read %s: %s", input_path, exc)
            return OperationResult.failure(f"Error: Could not read input file '{input_path}': {exc.strerror or exc}")

        try:
            self.write_report(students, output_path)
        except OSError as exc:
            logger.error("Could not write report to %s: %s", output_path, exc)
            return OperationResult.failure(f"Error: Could not write report to '{output_path}': {exc.strerror or exc}")
        logger.info("Wrote report for %d students to %s", len(students), output_path)
        return OperationResult.success(
            f"Processed {len(students)} students. Report saved to '{output_path}'"
        )


__all__ = [
    "StudentResultProcessor",
    "GradeReportError",
    "MissingFieldError",
    "InvalidStudentIdError",
    "InvalidScoreFormatError",
    "REPORT_HEADER",
]
