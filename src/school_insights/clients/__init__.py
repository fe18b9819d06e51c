"""HTTP clients for the regional-insight service and the school directory."""

from .base import (
    APIClient,
    DirectoryError,
    InsightResponseError,
    InsightServiceError,
    InsightTransportError,
    SchoolInsightsError,
)
from .directory import SchoolDirectoryClient
from .insight import InsightResult, RegionalInsightClient, ReportFetched, ReportUnavailable

__all__ = [
    "APIClient",
    "DirectoryError",
    "InsightResponseError",
    "InsightServiceError",
    "InsightTransportError",
    "SchoolInsightsError",
    "SchoolDirectoryClient",
    "InsightResult",
    "RegionalInsightClient",
    "ReportFetched",
    "ReportUnavailable",
]
