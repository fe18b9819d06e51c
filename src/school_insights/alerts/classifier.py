"""Classify an attendance snapshot into severity-ranked alerts."""

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from school_insights.i18n import DEFAULT_LOCALE, PhraseTable, get_phrases
from school_insights.models import Alert, AlertSeverity, AttendanceSnapshot
from school_insights.utils.numbers import round_half_up


@dataclass(frozen=True)
class AlertThresholds:
    """
    Policy thresholds for alerts and the "good" benchmarks quoted in text.

    Rates below ``*_critical`` are critical, below ``*_warning`` a warning.
    Ratios above ``ratio_critical`` are critical, above ``ratio_warning`` a
    warning.
    """
    teacher_critical: float = 90.0
    teacher_warning: float = 95.0
    student_critical: float = 85.0
    student_warning: float = 90.0
    ratio_warning: int = 25
    ratio_critical: int = 30

    teacher_benchmark: float = 95.0
    student_benchmark: float = 93.0
    ratio_benchmark: int = 20


DEFAULT_THRESHOLDS = AlertThresholds()


def student_teacher_ratio(snapshot: AttendanceSnapshot) -> int:
    """Students per teacher rounded to the nearest integer; 0 with no teachers."""
    if snapshot.teachers_total <= 0:
        return 0
    return int(round_half_up(Decimal(snapshot.students_total) / snapshot.teachers_total))


def format_number(value: float) -> str:
    """Drop a trailing ``.0`` so 95.0 reads as 95 in alert text."""
    return str(int(value)) if float(value).is_integer() else f"{value:.1f}"


def classify(
    snapshot: AttendanceSnapshot,
    locale: str = DEFAULT_LOCALE,
    thresholds: Optional[AlertThresholds] = None,
) -> List[Alert]:
    """
    Evaluate teacher attendance, student attendance and staffing ratio, in
    that order, and return the triggered alerts in the same order.

    Never returns an empty list: a healthy snapshot yields a single info alert.
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS
    phrases = get_phrases(locale)
    alerts: List[Alert] = []

    teacher_rate = snapshot.teacher_attendance_rate
    if teacher_rate < thresholds.teacher_critical:
        alerts.append(_alert(phrases, "teacher_critical", AlertSeverity.CRITICAL,
                             teacher_rate, thresholds.teacher_benchmark))
    elif teacher_rate < thresholds.teacher_warning:
        alerts.append(_alert(phrases, "teacher_warning", AlertSeverity.WARNING,
                             teacher_rate, thresholds.teacher_benchmark))

    student_rate = snapshot.student_attendance_rate
    if student_rate < thresholds.student_critical:
        alerts.append(_alert(phrases, "student_critical", AlertSeverity.CRITICAL,
                             student_rate, thresholds.student_benchmark))
    elif student_rate < thresholds.student_warning:
        alerts.append(_alert(phrases, "student_warning", AlertSeverity.WARNING,
                             student_rate, thresholds.student_benchmark))

    ratio = student_teacher_ratio(snapshot)
    if ratio > thresholds.ratio_critical:
        alerts.append(_alert(phrases, "ratio_critical", AlertSeverity.CRITICAL,
                             ratio, thresholds.ratio_warning))
    elif ratio > thresholds.ratio_warning:
        alerts.append(_alert(phrases, "ratio_warning", AlertSeverity.WARNING,
                             ratio, thresholds.ratio_warning))

    if not alerts:
        alerts.append(_alert(phrases, "good_performance", AlertSeverity.INFO))

    return alerts


def _alert(
    phrases: PhraseTable,
    key: str,
    severity: AlertSeverity,
    value: Optional[float] = None,
    benchmark: Optional[float] = None,
) -> Alert:
    variables = {}
    if value is not None:
        variables["value"] = format_number(value)
    if benchmark is not None:
        variables["benchmark"] = format_number(benchmark)
    return Alert(
        severity=severity,
        title=phrases.render(f"alerts.{key}.title"),
        description=phrases.render(f"alerts.{key}.description", **variables),
        action=phrases.render(f"alerts.{key}.action"),
    )
