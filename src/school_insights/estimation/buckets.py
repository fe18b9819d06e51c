"""
School type and locale classification tables.

Both classifications are plain ordered tables so they can be audited and
tested without running the estimator. The first matching row wins.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple


class SchoolBucket(str, Enum):
    """Size bucket a school falls into based on its free-text type."""
    PRIMARY = "primary"
    PREPARATORY = "preparatory"
    SECONDARY = "secondary"
    OTHER = "other"


@dataclass(frozen=True)
class CountRange:
    """Inclusive integer range for a head count."""
    low: int
    high: int

    def __contains__(self, value: int) -> bool:
        return self.low <= value <= self.high


@dataclass(frozen=True)
class BucketProfile:
    """Staffing ranges used when a school's counts are unknown."""
    bucket: SchoolBucket
    teachers: CountRange
    students: CountRange
    advisors: CountRange


@dataclass(frozen=True)
class RateBand:
    """Uniform attendance-rate band in percent."""
    low: float
    high: float


# Keyword sets are matched against the lower-cased type, Latin and Arabic.
SCHOOL_TYPE_TABLE: Tuple[Tuple[Tuple[str, ...], SchoolBucket], ...] = (
    (("prim", "ابتدائ"), SchoolBucket.PRIMARY),
    (("prep", "prép", "collège", "college", "إعداد"), SchoolBucket.PREPARATORY),
    (("sec", "ثانو", "lycee", "lycée"), SchoolBucket.SECONDARY),
)

BUCKET_PROFILES = {
    SchoolBucket.PRIMARY: BucketProfile(
        SchoolBucket.PRIMARY, CountRange(12, 24), CountRange(180, 430), CountRange(1, 3)
    ),
    SchoolBucket.PREPARATORY: BucketProfile(
        SchoolBucket.PREPARATORY, CountRange(25, 50), CountRange(400, 800), CountRange(2, 5)
    ),
    SchoolBucket.SECONDARY: BucketProfile(
        SchoolBucket.SECONDARY, CountRange(40, 75), CountRange(600, 1200), CountRange(3, 7)
    ),
    SchoolBucket.OTHER: BucketProfile(
        SchoolBucket.OTHER, CountRange(15, 35), CountRange(200, 500), CountRange(1, 4)
    ),
}

URBAN_CITIES: Tuple[str, ...] = (
    "tunis", "sfax", "sousse", "ariana", "ben arous",
    "تونس", "صفاقس", "سوسة", "أريانة", "بن عروس",
)

TEACHER_RATE_BANDS = {True: RateBand(94.0, 98.0), False: RateBand(92.0, 97.0)}
STUDENT_RATE_BANDS = {True: RateBand(90.0, 96.0), False: RateBand(85.0, 93.0)}
ADVISOR_RATE_BAND = RateBand(95.0, 100.0)


def classify_school_type(school_type: Optional[str]) -> SchoolBucket:
    """Map free-text school type onto a size bucket, OTHER when nothing matches."""
    text = (school_type or "").lower()
    if not text:
        return SchoolBucket.OTHER
    for keywords, bucket in SCHOOL_TYPE_TABLE:
        if any(keyword in text for keyword in keywords):
            return bucket
    return SchoolBucket.OTHER


def profile_for(school_type: Optional[str]) -> BucketProfile:
    return BUCKET_PROFILES[classify_school_type(school_type)]


def is_urban_area(*places: Optional[str], cities: Iterable[str] = URBAN_CITIES) -> bool:
    """True when any of the given place names mentions a major city."""
    names = [place.lower() for place in places if place]
    return any(city in name for name in names for city in cities)
