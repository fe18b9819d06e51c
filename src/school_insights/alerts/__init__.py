"""Alert classification for attendance snapshots."""

from .classifier import (
    DEFAULT_THRESHOLDS,
    AlertThresholds,
    classify,
    format_number,
    student_teacher_ratio,
)

__all__ = [
    "DEFAULT_THRESHOLDS",
    "AlertThresholds",
    "classify",
    "format_number",
    "student_teacher_ratio",
]
