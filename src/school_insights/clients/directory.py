"""School directory client for the schools-map listing endpoint."""

import asyncio
import logging
from typing import Dict, Optional

import aiohttp
from pydantic import ValidationError as PydanticValidationError

from school_insights.clients.base import APIClient, DirectoryError
from school_insights.config import InsightServiceConfig
from school_insights.models import SchoolDirectoryPage


logger = logging.getLogger(__name__)


class SchoolDirectoryClient(APIClient):
    """Fetch school records with the map view's filters."""

    def __init__(
        self,
        directory_url: str,
        api_token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        super().__init__(api_token=api_token, timeout=timeout, session=session)
        self.directory_url = directory_url

    @classmethod
    def from_config(
        cls,
        config: InsightServiceConfig,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> "SchoolDirectoryClient":
        return cls(
            directory_url=config.directory_url,
            api_token=config.api_token,
            timeout=config.request_timeout,
            session=session,
        )

    @staticmethod
    def build_params(
        school_type: Optional[str] = None,
        delegation: Optional[str] = None,
        cre: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Dict[str, str]:
        """Only filters that are set; ``all`` means no filter."""
        params = {"type": school_type, "delegation": delegation, "cre": cre, "search": search}
        return {key: value for key, value in params.items() if value and value != "all"}

    async def fetch_schools(
        self,
        school_type: Optional[str] = None,
        delegation: Optional[str] = None,
        cre: Optional[str] = None,
        search: Optional[str] = None,
    ) -> SchoolDirectoryPage:
        """Fetch one page of school records; raises DirectoryError on failure."""
        params = self.build_params(school_type, delegation, cre, search)

        try:
            async with self.session() as session:
                async with session.get(
                    self.directory_url,
                    params=params,
                    headers=self.headers(),
                    **self.request_options()
                ) as response:
                    if response.status >= 400:
                        error_text = await response.text(errors="replace")
                        raise DirectoryError(
                            f"API error {response.status}: {error_text[:200]}",
                            status=response.status,
                        )
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DirectoryError(f"Failed to load school map data: {e!r}")
        except ValueError as e:
            raise DirectoryError(f"School map response is not JSON: {e}")

        try:
            page = SchoolDirectoryPage.model_validate(data)
        except PydanticValidationError as e:
            raise DirectoryError(f"Unexpected school map payload: {e}")

        logger.info(
            "Schools map data received",
            extra={
                "schools_count": len(page.schools),
                "filters": params,
                "types": len(page.filter_options.types),
                "delegations": len(page.filter_options.delegations),
                "cres": len(page.filter_options.cres),
            }
        )
        return page
