"""
Attendance estimator producing a stable daily snapshot per school.

When the directory has no authoritative head counts, plausible ones are drawn
from the school's size bucket, and present/absent figures are derived from
rates drawn from urban or rural bands. Each snapshot is cached per school id
so repeated lookups during a session show the same numbers.
"""

import logging
import random
import threading
from decimal import Decimal
from datetime import date
from typing import Callable, Dict, Optional, Protocol, Union

from school_insights.estimation.buckets import (
    ADVISOR_RATE_BAND,
    STUDENT_RATE_BANDS,
    TEACHER_RATE_BANDS,
    CountRange,
    RateBand,
    classify_school_type,
    BUCKET_PROFILES,
    is_urban_area,
)
from school_insights.i18n import DEFAULT_LOCALE, get_phrases
from school_insights.models import AttendanceSnapshot, SchoolRecord
from school_insights.utils.numbers import round_half_up


logger = logging.getLogger(__name__)

SchoolId = Union[int, str]


class RandomSource(Protocol):
    """Anything offering the two draws the estimator needs; random.Random fits."""

    def randint(self, a: int, b: int) -> int: ...

    def uniform(self, a: float, b: float) -> float: ...


class SnapshotCache:
    """
    Session-scoped snapshot store keyed by school id.

    Entries never expire and are never replaced: the first snapshot stored for
    an id wins, which keeps repeated lookups bit-identical.
    """

    def __init__(self):
        self._snapshots: Dict[SchoolId, AttendanceSnapshot] = {}
        self._lock = threading.Lock()

    def get(self, school_id: SchoolId) -> Optional[AttendanceSnapshot]:
        with self._lock:
            return self._snapshots.get(school_id)

    def set_default(self, school_id: SchoolId, snapshot: AttendanceSnapshot) -> AttendanceSnapshot:
        """Store ``snapshot`` unless one exists already; return the stored one."""
        with self._lock:
            return self._snapshots.setdefault(school_id, snapshot)

    def __contains__(self, school_id: SchoolId) -> bool:
        with self._lock:
            return school_id in self._snapshots

    def __len__(self) -> int:
        with self._lock:
            return len(self._snapshots)

    def clear(self) -> None:
        with self._lock:
            self._snapshots.clear()


class AttendanceEstimator:
    """Estimate today's attendance for a school, memoized per school id."""

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        cache: Optional[SnapshotCache] = None,
        locale: str = DEFAULT_LOCALE,
        today: Optional[Callable[[], date]] = None,
    ):
        self.rng = rng if rng is not None else random.Random()
        self.cache = cache if cache is not None else SnapshotCache()
        self.locale = locale
        self.today = today or date.today

    def estimate(self, school: SchoolRecord) -> AttendanceSnapshot:
        """Return the cached snapshot for ``school.id`` or compute a new one."""
        cached = self.cache.get(school.id)
        if cached is not None:
            logger.debug(f"Snapshot cache hit for school {school.id}")
            return cached

        snapshot = self._build_snapshot(school)
        return self.cache.set_default(school.id, snapshot)

    def _build_snapshot(self, school: SchoolRecord) -> AttendanceSnapshot:
        bucket = classify_school_type(school.school_type)
        profile = BUCKET_PROFILES[bucket]

        teachers_total = self._resolve_count(school.known_count("teachers"), profile.teachers)
        students_total = self._resolve_count(school.known_count("students"), profile.students)
        advisors_total = self._resolve_count(school.known_count("advisors"), profile.advisors)

        urban = is_urban_area(school.delegation, school.region)

        teacher_rate = self._draw_rate(TEACHER_RATE_BANDS[urban])
        student_rate = self._draw_rate(STUDENT_RATE_BANDS[urban])
        advisor_rate = self._draw_rate(ADVISOR_RATE_BAND)

        logger.debug(
            f"Estimating school {school.id}: bucket={bucket.value} urban={urban} "
            f"teachers={teachers_total} students={students_total} advisors={advisors_total}"
        )

        return AttendanceSnapshot.from_counts(
            school_id=school.id,
            date=get_phrases(self.locale).format_date(self.today()),
            teachers_total=teachers_total,
            teachers_present=self._present(teachers_total, teacher_rate),
            students_total=students_total,
            students_present=self._present(students_total, student_rate),
            advisors_total=advisors_total,
            advisors_present=self._present(advisors_total, advisor_rate),
        )

    def _resolve_count(self, known: Optional[int], count_range: CountRange) -> int:
        if known:
            return known
        return self.rng.randint(count_range.low, count_range.high)

    def _draw_rate(self, band: RateBand) -> float:
        rate = self.rng.uniform(band.low, band.high)
        return min(max(round_half_up(rate, 1), 0.0), 100.0)

    @staticmethod
    def _present(total: int, rate: float) -> int:
        return min(int(round_half_up(Decimal(total) * Decimal(str(rate)) / 100)), total)
