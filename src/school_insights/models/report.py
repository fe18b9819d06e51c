"""
Alert and narrative report schemas.

The same NarrativeReport shape is produced by the remote regional-insight
service and by the local composer, so callers never need to know which path
built it.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict


class AlertSeverity(str, Enum):
    """Severity levels for attendance alerts, most severe first."""
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class Alert(BaseModel):
    """A single classified alert with its recommended action."""
    model_config = ConfigDict(frozen=True)

    severity: AlertSeverity
    title: str
    description: str
    action: str


class NarrativeReport(BaseModel):
    """Regional analysis of a school, remote or locally composed."""
    summary: str
    statistics: List[str] = []
    trends: List[str] = []
    insights: List[str] = []
    alerts: List[Alert] = []
    sources: List[str] = []
