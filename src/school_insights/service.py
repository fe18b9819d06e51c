"""
School insight service: estimate, ask the regional-insight service, and fall
back to local classification and composition when it is unavailable.
"""

import asyncio
import logging
from enum import Enum
from typing import List, Optional, Sequence

import aiohttp
from pydantic import BaseModel

from school_insights.alerts import DEFAULT_THRESHOLDS, AlertThresholds, classify
from school_insights.clients import RegionalInsightClient, ReportFetched, ReportUnavailable
from school_insights.config import Settings
from school_insights.estimation import AttendanceEstimator, RandomSource, SnapshotCache
from school_insights.i18n import DEFAULT_LOCALE, resolve_locale
from school_insights.models import AttendanceSnapshot, NarrativeReport, SchoolRecord
from school_insights.narrative import compose


logger = logging.getLogger(__name__)


class ReportSource(str, Enum):
    """Which path produced a report."""
    REMOTE = "remote"
    LOCAL = "local"


class SchoolAnalysis(BaseModel):
    """Everything the map's school dialog renders for one school."""
    school: SchoolRecord
    snapshot: AttendanceSnapshot
    report: NarrativeReport
    source: ReportSource
    fallback_reason: Optional[str] = None


class SchoolInsightService:
    """Facade over the estimator, the remote client and the local fallback."""

    def __init__(
        self,
        estimator: Optional[AttendanceEstimator] = None,
        insight_client: Optional[RegionalInsightClient] = None,
        thresholds: Optional[AlertThresholds] = None,
        default_locale: str = DEFAULT_LOCALE,
    ):
        self.estimator = estimator or AttendanceEstimator(locale=default_locale)
        self.insight_client = insight_client
        self.thresholds = thresholds or DEFAULT_THRESHOLDS
        self.default_locale = resolve_locale(default_locale)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        rng: Optional[RandomSource] = None,
        cache: Optional[SnapshotCache] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> "SchoolInsightService":
        """Wire a service from configuration; the remote client only when enabled."""
        settings = settings or Settings.load()
        locale = settings.app.default_locale
        insight_client = None
        if settings.insight.enabled:
            insight_client = RegionalInsightClient.from_config(settings.insight, session=session)
        return cls(
            estimator=AttendanceEstimator(rng=rng, cache=cache, locale=locale),
            insight_client=insight_client,
            thresholds=settings.thresholds.to_thresholds(),
            default_locale=locale,
        )

    def snapshot_for(self, school: SchoolRecord) -> AttendanceSnapshot:
        return self.estimator.estimate(school)

    def build_local_report(
        self,
        school: SchoolRecord,
        snapshot: AttendanceSnapshot,
        locale: Optional[str] = None,
    ) -> NarrativeReport:
        """Classify and compose locally; same shape as a remote report."""
        locale = resolve_locale(locale, self.default_locale)
        alerts = classify(snapshot, locale=locale, thresholds=self.thresholds)
        return compose(school, snapshot, alerts, locale=locale, thresholds=self.thresholds)

    async def analyze(
        self,
        school: SchoolRecord,
        locale: Optional[str] = None,
        offline: bool = False,
        token: Optional[str] = None,
    ) -> SchoolAnalysis:
        """
        Build the full analysis for one school.

        The snapshot is computed before any network activity, so abandoning
        the remote request leaves the cache exactly as it would be otherwise.
        """
        locale = resolve_locale(locale, self.default_locale)
        snapshot = self.snapshot_for(school)

        if offline or self.insight_client is None:
            return self._local_analysis(school, snapshot, locale, reason="remote analysis disabled")

        result = await self.insight_client.request(school, snapshot, locale=locale, token=token)

        if isinstance(result, ReportFetched):
            report = result.report
            if not report.alerts:
                alerts = classify(snapshot, locale=locale, thresholds=self.thresholds)
                report = report.model_copy(update={"alerts": alerts})
            return SchoolAnalysis(
                school=school, snapshot=snapshot, report=report, source=ReportSource.REMOTE
            )

        if isinstance(result, ReportUnavailable):
            logger.warning(f"Regional search failed for school {school.id}, composing locally: {result.reason}")
            return self._local_analysis(school, snapshot, locale, reason=result.reason)

        raise TypeError(f"Unexpected insight result: {result!r}")

    async def analyze_many(
        self,
        schools: Sequence[SchoolRecord],
        locale: Optional[str] = None,
        offline: bool = False,
        token: Optional[str] = None,
    ) -> List[SchoolAnalysis]:
        """Analyze several schools concurrently, preserving input order."""
        tasks = [self.analyze(school, locale=locale, offline=offline, token=token) for school in schools]
        results = await asyncio.gather(*tasks)

        local_count = sum(1 for r in results if r.source is ReportSource.LOCAL)
        logger.info(
            "Batch school analysis completed",
            extra={"total_schools": len(results), "local_fallbacks": local_count}
        )
        return list(results)

    def _local_analysis(
        self,
        school: SchoolRecord,
        snapshot: AttendanceSnapshot,
        locale: str,
        reason: str,
    ) -> SchoolAnalysis:
        return SchoolAnalysis(
            school=school,
            snapshot=snapshot,
            report=self.build_local_report(school, snapshot, locale),
            source=ReportSource.LOCAL,
            fallback_reason=reason,
        )
