"""Shared plumbing for the aiohttp-based API clients."""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import aiohttp


class SchoolInsightsError(Exception):
    """Base exception for school insights errors."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class InsightServiceError(SchoolInsightsError):
    """Base exception for regional-insight service failures."""
    pass


class InsightTransportError(InsightServiceError):
    """Raised when the request never produced an HTTP response."""
    pass


class InsightResponseError(InsightServiceError):
    """Raised for non-2xx responses and bodies that are not a valid report."""
    pass


class DirectoryError(SchoolInsightsError):
    """Raised when the school directory listing cannot be fetched."""
    pass


class APIClient:
    """Bearer-token aware client that can reuse a caller-owned session."""

    def __init__(
        self,
        api_token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.api_token = api_token
        self.timeout = timeout
        self._session = session

    def headers(self, token: Optional[str] = None) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = token or self.api_token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request_options(self) -> Dict[str, Any]:
        """Per-request options; the transport default timeout applies unless configured."""
        if self.timeout is None:
            return {}
        return {"timeout": aiohttp.ClientTimeout(total=self.timeout)}

    @asynccontextmanager
    async def session(self) -> AsyncIterator[aiohttp.ClientSession]:
        """Yield the shared session if one was given, else a short-lived one."""
        if self._session is not None:
            yield self._session
        else:
            async with aiohttp.ClientSession() as session:
                yield session
