"""School records as returned by the schools-map listing endpoint."""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SchoolRecord(BaseModel):
    """Minimal school descriptor consumed by the attendance engine.

    Counts are authoritative only when positive; anything else (missing,
    negative, non-numeric) is treated as unknown and estimated.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Union[int, str]
    name: str = ""
    name_ar: Optional[str] = None
    school_code: Optional[str] = None
    school_type: Optional[str] = None
    delegation: Optional[str] = None
    region: Optional[str] = Field(None, alias="cre")

    teachers: Optional[int] = None
    students: Optional[int] = None
    advisors: Optional[int] = None

    # Listing metadata, unused by the estimator
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    total_users: Optional[int] = None

    @field_validator("teachers", "students", "advisors", "total_users", mode="before")
    @classmethod
    def coerce_count(cls, v: Any) -> Optional[int]:
        """Degrade malformed counts to unknown instead of rejecting the record."""
        if v is None or isinstance(v, bool):
            return None
        try:
            count = int(v)
        except (TypeError, ValueError):
            return None
        return count if count >= 0 else None

    @field_validator("school_code", mode="before")
    @classmethod
    def stringify_code(cls, v: Any) -> Optional[str]:
        if v is None or v == "":
            return None
        return str(v)

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def coerce_coordinate(cls, v: Any) -> Optional[float]:
        try:
            return float(v) if v is not None else None
        except (TypeError, ValueError):
            return None

    def known_count(self, field_name: str) -> Optional[int]:
        """Return a count only when it can be trusted (present and positive)."""
        value = getattr(self, field_name)
        return value if value else None


class FilterOptions(BaseModel):
    """Distinct filter values offered by the listing endpoint."""
    types: List[str] = []
    delegations: List[str] = []
    cres: List[str] = []


class SchoolDirectoryPage(BaseModel):
    """One response of the schools-map listing endpoint."""
    schools: List[SchoolRecord] = []
    filter_options: FilterOptions = Field(default_factory=FilterOptions)
    total_count: int = 0
