"""Tests for the regional-insight client."""

import asyncio
from contextlib import asynccontextmanager
from unittest.mock import Mock

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from school_insights.clients import (
    RegionalInsightClient,
    ReportFetched,
    ReportUnavailable,
)
from school_insights.config import InsightServiceConfig
from school_insights.models import AlertSeverity, AttendanceSnapshot

SEARCH_PATH = "/api/regional-education-search/"

REMOTE_REPORT = {
    "summary": "Remote summary",
    "statistics": ["School Code: TN-0101"],
    "trends": ["Stable attendance"],
    "insights": ["Strong staffing"],
    "alerts": [
        {
            "severity": "warning",
            "title": "Teacher Attendance Needs Attention",
            "description": "Teacher attendance (88%) is below national average (95%).",
            "action": "Review attendance records",
        }
    ],
    "sources": ["Ministry of Education Tunisia - School Registry"],
}


@asynccontextmanager
async def serve(handler):
    """Run ``handler`` behind the search path on a local test server."""
    app = web.Application()
    app.router.add_post(SEARCH_PATH, handler)
    server = TestServer(app)
    await server.start_server()
    try:
        yield str(server.make_url(SEARCH_PATH))
    finally:
        await server.close()


@pytest.fixture
def snapshot():
    return AttendanceSnapshot.from_counts(
        school_id=101, date="Monday, October 19, 2026",
        teachers_total=50, teachers_present=44,
        students_total=1000, students_present=950,
        advisors_total=5, advisors_present=5,
    )


class TestBuildPayload:

    def test_payload_fields(self, tunis_lycee, snapshot):
        payload = RegionalInsightClient.build_payload(tunis_lycee, snapshot, "ar")

        assert payload == {
            "region": "Tunis 1",
            "delegation": "Tunis",
            "school_type": "Lycée",
            "school_name": "Lycée Pilote de Tunis",
            "school_name_ar": "المعهد النموذجي بتونس",
            "school_code": "TN-0101",
            "language": "ar",
            "attendance_context": snapshot.attendance_context(),
        }

    def test_payload_without_snapshot(self, rural_primary):
        payload = RegionalInsightClient.build_payload(rural_primary, None, "en")
        assert payload["attendance_context"] is None
        assert payload["school_name_ar"] is None

    def test_from_config(self):
        config = InsightServiceConfig(base_url="https://edu.example.tn", api_token="abc", request_timeout=5)
        client = RegionalInsightClient.from_config(config)

        assert client.search_url == "https://edu.example.tn/api/regional-education-search/"
        assert client.headers()["Authorization"] == "Bearer abc"
        assert client.request_options()["timeout"].total == 5

    def test_no_token_no_authorization(self):
        client = RegionalInsightClient("http://localhost/search/")
        assert "Authorization" not in client.headers()
        assert client.request_options() == {}


class TestRequest:

    @pytest.mark.asyncio
    async def test_success(self, tunis_lycee, snapshot):
        """Test a valid report is returned with the request payload and token."""
        received = {}

        async def handler(request):
            received["body"] = await request.json()
            received["authorization"] = request.headers.get("Authorization")
            return web.json_response(REMOTE_REPORT)

        async with serve(handler) as url:
            client = RegionalInsightClient(url, api_token="configured")
            result = await client.request(tunis_lycee, snapshot, locale="en")

        assert isinstance(result, ReportFetched)
        assert result.report.summary == "Remote summary"
        assert result.report.alerts[0].severity == AlertSeverity.WARNING
        assert result.latency_ms is not None
        assert received["body"] == RegionalInsightClient.build_payload(tunis_lycee, snapshot, "en")
        assert received["authorization"] == "Bearer configured"

    @pytest.mark.asyncio
    async def test_token_override(self, tunis_lycee, snapshot):
        received = {}

        async def handler(request):
            received["authorization"] = request.headers.get("Authorization")
            return web.json_response(REMOTE_REPORT)

        async with serve(handler) as url:
            client = RegionalInsightClient(url, api_token="configured")
            await client.request(tunis_lycee, snapshot, token="user-token")

        assert received["authorization"] == "Bearer user-token"

    @pytest.mark.asyncio
    async def test_shared_session(self, tunis_lycee, snapshot):
        async def handler(request):
            return web.json_response(REMOTE_REPORT)

        async with serve(handler) as url:
            async with aiohttp.ClientSession() as session:
                client = RegionalInsightClient(url, session=session)
                first = await client.request(tunis_lycee, snapshot)
                second = await client.request(tunis_lycee, snapshot)
                assert not session.closed

        assert isinstance(first, ReportFetched)
        assert isinstance(second, ReportFetched)

    @pytest.mark.asyncio
    async def test_server_error(self, tunis_lycee, snapshot):
        """Test non-2xx status is reported as unavailable."""
        async def handler(request):
            return web.Response(status=500, text="Internal Server Error")

        async with serve(handler) as url:
            result = await RegionalInsightClient(url).request(tunis_lycee, snapshot)

        assert isinstance(result, ReportUnavailable)
        assert result.status == 500
        assert "500" in result.reason

    @pytest.mark.asyncio
    async def test_server_error_with_undecodable_body(self, tunis_lycee, snapshot):
        """Test an error body that is not valid UTF-8 still yields unavailable."""
        async def handler(request):
            return web.Response(status=502, body=b"\xff\xfe", content_type="text/plain", charset="utf-8")

        async with serve(handler) as url:
            result = await RegionalInsightClient(url).request(tunis_lycee, snapshot)

        assert isinstance(result, ReportUnavailable)
        assert result.status == 502
        assert "502" in result.reason

    @pytest.mark.asyncio
    async def test_unauthorized(self, tunis_lycee, snapshot):
        async def handler(request):
            return web.json_response({"detail": "Authentication required"}, status=401)

        async with serve(handler) as url:
            result = await RegionalInsightClient(url).request(tunis_lycee, snapshot)

        assert isinstance(result, ReportUnavailable)
        assert result.status == 401

    @pytest.mark.asyncio
    async def test_body_not_json(self, tunis_lycee, snapshot):
        async def handler(request):
            return web.Response(text="<html>maintenance</html>", content_type="text/html")

        async with serve(handler) as url:
            result = await RegionalInsightClient(url).request(tunis_lycee, snapshot)

        assert isinstance(result, ReportUnavailable)
        assert "not JSON" in result.reason

    @pytest.mark.asyncio
    async def test_body_not_a_report(self, tunis_lycee, snapshot):
        async def handler(request):
            return web.json_response({"statistics": ["no summary"]})

        async with serve(handler) as url:
            result = await RegionalInsightClient(url).request(tunis_lycee, snapshot)

        assert isinstance(result, ReportUnavailable)
        assert "Failed to parse regional report" in result.reason

    @pytest.mark.asyncio
    async def test_connection_error(self, tunis_lycee, snapshot):
        """Test transport errors are reported as unavailable."""
        session = Mock()
        session.post = Mock(side_effect=aiohttp.ClientConnectionError("Connection refused"))

        client = RegionalInsightClient("http://insight.invalid/search/", session=session)
        result = await client.request(tunis_lycee, snapshot)

        assert isinstance(result, ReportUnavailable)
        assert result.status is None
        assert "Connection refused" in result.reason

    @pytest.mark.asyncio
    async def test_timeout(self, tunis_lycee, snapshot):
        session = Mock()
        session.post = Mock(side_effect=asyncio.TimeoutError())

        client = RegionalInsightClient("http://insight.invalid/search/", timeout=0.1, session=session)
        result = await client.request(tunis_lycee, snapshot)

        assert isinstance(result, ReportUnavailable)
        assert result.status is None
        assert session.post.call_args.kwargs["timeout"].total == 0.1
