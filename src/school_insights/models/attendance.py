"""Immutable daily attendance snapshot for a single school."""

from typing import Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from school_insights.utils.numbers import percentage


class AttendanceSnapshot(BaseModel):
    """
    One computed attendance record for one school on one (simulated) day.

    Rates are percentages with one decimal and are always derived from the
    present/total counts, so they can never disagree with the head counts.
    """
    model_config = ConfigDict(frozen=True)

    school_id: Union[int, str]
    date: str

    teachers_total: int = Field(ge=0)
    teachers_present: int = Field(ge=0)
    teachers_absent: int = Field(ge=0)

    students_total: int = Field(ge=0)
    students_present: int = Field(ge=0)
    students_absent: int = Field(ge=0)

    advisors_total: int = Field(ge=0)
    advisors_present: int = Field(ge=0)

    teacher_attendance_rate: float = Field(ge=0.0, le=100.0)
    student_attendance_rate: float = Field(ge=0.0, le=100.0)

    @model_validator(mode="after")
    def check_totals(self) -> "AttendanceSnapshot":
        if self.teachers_present + self.teachers_absent != self.teachers_total:
            raise ValueError("teachers_present + teachers_absent must equal teachers_total")
        if self.students_present + self.students_absent != self.students_total:
            raise ValueError("students_present + students_absent must equal students_total")
        if self.advisors_present > self.advisors_total:
            raise ValueError("advisors_present cannot exceed advisors_total")
        return self

    @classmethod
    def from_counts(
        cls,
        school_id: Union[int, str],
        date: str,
        teachers_total: int,
        teachers_present: int,
        students_total: int,
        students_present: int,
        advisors_total: int,
        advisors_present: int,
    ) -> "AttendanceSnapshot":
        """Build a snapshot from head counts, deriving absences and rates."""
        return cls(
            school_id=school_id,
            date=date,
            teachers_total=teachers_total,
            teachers_present=teachers_present,
            teachers_absent=teachers_total - teachers_present,
            students_total=students_total,
            students_present=students_present,
            students_absent=students_total - students_present,
            advisors_total=advisors_total,
            advisors_present=advisors_present,
            teacher_attendance_rate=percentage(teachers_present, teachers_total),
            student_attendance_rate=percentage(students_present, students_total),
        )

    def attendance_context(self) -> dict:
        """Head counts in the shape the regional-insight endpoint expects."""
        return {
            "teachers_total": self.teachers_total,
            "teachers_present": self.teachers_present,
            "teachers_absent": self.teachers_absent,
            "students_total": self.students_total,
            "students_present": self.students_present,
            "students_absent": self.students_absent,
            "advisors_total": self.advisors_total,
            "advisors_present": self.advisors_present,
        }
