"""Attendance estimation: classification tables, random source and cache."""

from .buckets import (
    BUCKET_PROFILES,
    SCHOOL_TYPE_TABLE,
    URBAN_CITIES,
    BucketProfile,
    CountRange,
    SchoolBucket,
    classify_school_type,
    is_urban_area,
    profile_for,
)
from .estimator import AttendanceEstimator, RandomSource, SnapshotCache

__all__ = [
    "BUCKET_PROFILES",
    "SCHOOL_TYPE_TABLE",
    "URBAN_CITIES",
    "BucketProfile",
    "CountRange",
    "SchoolBucket",
    "classify_school_type",
    "is_urban_area",
    "profile_for",
    "AttendanceEstimator",
    "RandomSource",
    "SnapshotCache",
]
