"""
Regional-insight service client.

Single attempt, no retry. Every failure mode (transport error, timeout,
non-2xx status, malformed body) comes back as ``ReportUnavailable`` so the
caller's fallback is an explicit branch rather than an exception handler.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import aiohttp
from pydantic import ValidationError as PydanticValidationError

from school_insights.clients.base import (
    APIClient,
    InsightResponseError,
    InsightServiceError,
    InsightTransportError,
)
from school_insights.config import InsightServiceConfig
from school_insights.i18n import DEFAULT_LOCALE
from school_insights.models import AttendanceSnapshot, NarrativeReport, SchoolRecord


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportFetched:
    """The service answered with a valid report."""
    report: NarrativeReport
    latency_ms: Optional[float] = None


@dataclass(frozen=True)
class ReportUnavailable:
    """The service could not provide a report; build one locally."""
    reason: str
    status: Optional[int] = None


InsightResult = Union[ReportFetched, ReportUnavailable]


class RegionalInsightClient(APIClient):
    """Async client for the regional education search endpoint."""

    def __init__(
        self,
        search_url: str,
        api_token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        super().__init__(api_token=api_token, timeout=timeout, session=session)
        self.search_url = search_url

    @classmethod
    def from_config(
        cls,
        config: InsightServiceConfig,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> "RegionalInsightClient":
        return cls(
            search_url=config.search_url,
            api_token=config.api_token,
            timeout=config.request_timeout,
            session=session,
        )

    @staticmethod
    def build_payload(
        school: SchoolRecord,
        snapshot: Optional[AttendanceSnapshot],
        locale: str,
    ) -> Dict[str, Any]:
        """JSON body: school identity, language and the snapshot's head counts."""
        return {
            "region": school.region,
            "delegation": school.delegation,
            "school_type": school.school_type,
            "school_name": school.name,
            "school_name_ar": school.name_ar,
            "school_code": school.school_code,
            "language": locale,
            "attendance_context": snapshot.attendance_context() if snapshot else None,
        }

    async def request(
        self,
        school: SchoolRecord,
        snapshot: Optional[AttendanceSnapshot],
        locale: str = DEFAULT_LOCALE,
        token: Optional[str] = None,
    ) -> InsightResult:
        """Ask the service for a report; never raises for service failures."""
        payload = self.build_payload(school, snapshot, locale)
        start_time = time.time()

        try:
            report = await self._post(payload, token)
        except InsightServiceError as e:
            logger.warning(
                f"Regional insight unavailable for school {school.id}: {e}",
                extra={"school_id": school.id, "status": e.status, "error_type": type(e).__name__}
            )
            return ReportUnavailable(reason=str(e), status=e.status)

        latency_ms = (time.time() - start_time) * 1000
        logger.info(
            "Regional insight request completed",
            extra={
                "school_id": school.id,
                "latency_ms": latency_ms,
                "alerts": len(report.alerts),
                "language": locale,
            }
        )
        return ReportFetched(report=report, latency_ms=latency_ms)

    async def _post(self, payload: Dict[str, Any], token: Optional[str]) -> NarrativeReport:
        try:
            async with self.session() as session:
                async with session.post(
                    self.search_url,
                    json=payload,
                    headers=self.headers(token),
                    **self.request_options()
                ) as response:
                    if not 200 <= response.status < 300:
                        error_text = await response.text(errors="replace")
                        raise InsightResponseError(
                            f"API error {response.status}: {error_text[:200]}",
                            status=response.status,
                        )
                    try:
                        data = await response.json(content_type=None)
                    except ValueError as e:
                        raise InsightResponseError(
                            f"Response body is not JSON: {e}", status=response.status
                        )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise InsightTransportError(f"Request to {self.search_url} failed: {e!r}")

        try:
            return NarrativeReport.model_validate(data)
        except PydanticValidationError as e:
            raise InsightResponseError(f"Failed to parse regional report: {e}")
