"""Pydantic v2 schemas for ward lookup operations."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ward_locator.lib.resolver import WardInfo


class LocateRequest(BaseModel):
    """Request body for POST /geo/locate.

    Values must be JSON numbers; range checks happen in the lookup service.
    """

    model_config = ConfigDict(strict=True)

    lat: float = Field(..., description="WGS84 latitude")
    lng: float = Field(..., description="WGS84 longitude")


class WardInfoResponse(BaseModel):
    """The ward containing a point, as the flat ``{wardNumber, wardName, ...properties}`` record.

    Feature properties from the boundary dataset are passed through as extra keys.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    ward_number: int = Field(..., alias="wardNumber")
    ward_name: str | None = Field(None, alias="wardName")

    @classmethod
    def from_ward_info(cls, ward: WardInfo) -> "WardInfoResponse":
        return cls.model_validate(ward.as_record())


class ReportLocationResponse(BaseModel):
    """Response for POST /geo/report-location."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    source: Literal["exif", "form"]
    ward: WardInfoResponse


class ErrorResponse(BaseModel):
    """Error payload."""

    detail: str
