"""
Local narrative composer used when the regional-insight service is unavailable.

Produces the same NarrativeReport shape as the remote service from nothing but
the school record, its snapshot and the classified alerts. No randomness: the
same inputs always compose the same report.
"""

from typing import Dict, List, Optional

from school_insights.alerts.classifier import (
    DEFAULT_THRESHOLDS,
    AlertThresholds,
    format_number,
    student_teacher_ratio,
)
from school_insights.estimation.buckets import SchoolBucket, classify_school_type
from school_insights.i18n import DEFAULT_LOCALE, PhraseTable, get_phrases
from school_insights.models import Alert, AttendanceSnapshot, NarrativeReport, SchoolRecord


STATISTIC_KEYS = (
    "school_code",
    "school_type",
    "teachers",
    "students",
    "ratio",
    "teacher_rate",
    "student_rate",
    "advisors",
)


def display_name(school: SchoolRecord, locale: str) -> str:
    """Prefer the Arabic name for Arabic reports when the directory has one."""
    if locale == "ar" and school.name_ar:
        return school.name_ar
    return school.name or school.name_ar or str(school.id)


def school_type_label(school: SchoolRecord, phrases: PhraseTable) -> str:
    """Localized type label; unrecognized types keep their own wording."""
    bucket = classify_school_type(school.school_type)
    if bucket is SchoolBucket.OTHER and school.school_type:
        return school.school_type.strip()
    return phrases.school_type_label(bucket.value)


def build_context(
    school: SchoolRecord,
    snapshot: AttendanceSnapshot,
    phrases: PhraseTable,
) -> Dict[str, str]:
    """Placeholder values shared by every phrase of the report."""
    return {
        "school_name": display_name(school, phrases.locale),
        "school_code": school.school_code or phrases.unknown,
        "school_type": school_type_label(school, phrases),
        "region": school.region or phrases.unknown,
        "delegation": school.delegation or phrases.unknown,
        "teachers_total": str(snapshot.teachers_total),
        "students_total": str(snapshot.students_total),
        "advisors_total": str(snapshot.advisors_total),
        "ratio": str(student_teacher_ratio(snapshot)),
        "teacher_rate": format_number(snapshot.teacher_attendance_rate),
        "student_rate": format_number(snapshot.student_attendance_rate),
    }


def compose(
    school: SchoolRecord,
    snapshot: AttendanceSnapshot,
    alerts: List[Alert],
    locale: str = DEFAULT_LOCALE,
    thresholds: Optional[AlertThresholds] = None,
) -> NarrativeReport:
    """Compose a localized regional report for one school."""
    thresholds = thresholds or DEFAULT_THRESHOLDS
    phrases = get_phrases(locale)
    context = build_context(school, snapshot, phrases)

    statistics = [
        phrases.render(f"statistics.{key}", **context)
        for key in STATISTIC_KEYS
        if key != "school_code" or school.school_code
    ]

    return NarrativeReport(
        summary=phrases.render("summary", **context),
        statistics=statistics,
        trends=phrases.render_list("trends", **context),
        insights=_insights(snapshot, phrases, context, thresholds),
        alerts=list(alerts),
        sources=phrases.render_list("sources", **context),
    )


def _insights(
    snapshot: AttendanceSnapshot,
    phrases: PhraseTable,
    context: Dict[str, str],
    thresholds: AlertThresholds,
) -> List[str]:
    teacher_key = (
        "teacher_good"
        if snapshot.teacher_attendance_rate >= thresholds.teacher_benchmark
        else "teacher_low"
    )
    student_key = (
        "student_good"
        if snapshot.student_attendance_rate >= thresholds.student_benchmark
        else "student_low"
    )
    ratio_key = (
        "ratio_good"
        if student_teacher_ratio(snapshot) <= thresholds.ratio_benchmark
        else "ratio_high"
    )
    return [
        phrases.render(f"insights.{key}", **context)
        for key in (teacher_key, student_key, ratio_key, "recommendation")
    ]
