"""
Core data models for school insights.

This package contains:
- School records from the schools-map listing
- Attendance snapshots
- Alert and narrative report schemas
"""

from .school import SchoolRecord, SchoolDirectoryPage, FilterOptions
from .attendance import AttendanceSnapshot
from .report import Alert, AlertSeverity, NarrativeReport

__all__ = [
    # Input records
    "SchoolRecord",
    "SchoolDirectoryPage",
    "FilterOptions",

    # Computed values
    "AttendanceSnapshot",

    # Report schemas
    "Alert",
    "AlertSeverity",
    "NarrativeReport",
]
