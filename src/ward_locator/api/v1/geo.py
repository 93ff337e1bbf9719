"""Geo API endpoints: ward lookup, report location resolution, and ward reference data."""

import math

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse

from ward_locator.core.config import Settings, get_settings
from ward_locator.core.dependencies import get_ward_lookup_service
from ward_locator.core.logging import event_logger
from ward_locator.schemas.geo import ErrorResponse, LocateRequest, ReportLocationResponse, WardInfoResponse
from ward_locator.services.ward_lookup_service import (
    InvalidCoordinateError,
    MissingLocationError,
    WardLookupService,
)

geo_router = APIRouter(prefix="/geo", tags=["geo"])

_STATIC_CACHE_HEADERS = {"Cache-Control": "public, max-age=86400, immutable"}


def _parse_form_number(value: str | None) -> float | None:
    """Parse an optional numeric form field; blank or non-numeric input becomes None."""
    if value is None or not value.strip():
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


@geo_router.post(
    "/locate",
    response_model=WardInfoResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def locate_ward(
    request: LocateRequest,
    service: WardLookupService = Depends(get_ward_lookup_service),  # noqa: B008
) -> WardInfoResponse:
    """Find the ward containing a latitude/longitude."""
    try:
        ward = service.locate_ward(request.lat, request.lng)
    except InvalidCoordinateError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    if ward is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found in any ward")

    return WardInfoResponse.from_ward_info(ward)


@geo_router.post(
    "/report-location",
    response_model=ReportLocationResponse,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}},
)
async def resolve_report_location(
    photo: UploadFile | None = File(None, description="Photo whose EXIF GPS data locates the report"),  # noqa: B008
    lat: str | None = Form(None, description="Fallback WGS84 latitude"),  # noqa: B008
    lng: str | None = Form(None, description="Fallback WGS84 longitude"),  # noqa: B008
    service: WardLookupService = Depends(get_ward_lookup_service),  # noqa: B008
    settings: Settings = Depends(get_settings),  # noqa: B008
) -> ReportLocationResponse:
    """Resolve where a report was made from its photo, falling back to form coordinates."""
    image_bytes: bytes | None = None
    if photo is not None:
        image_bytes = await photo.read(settings.max_photo_size_bytes + 1)
        if len(image_bytes) > settings.max_photo_size_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"Photo exceeds maximum size of {settings.max_photo_size_mb} MB",
            )

    try:
        location = service.resolve_report_location(
            _parse_form_number(lat),
            _parse_form_number(lng),
            image_bytes,
        )
    except MissingLocationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    if location.ward is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Location outside supported area")

    event_logger(
        event="report_located",
        ward_number=location.ward.ward_number,
        source=location.source.value,
        latitude=location.coordinate.latitude,
        longitude=location.coordinate.longitude,
    ).info(f"Report located in ward {location.ward.ward_number} via {location.source}")
    return ReportLocationResponse(
        latitude=location.coordinate.latitude,
        longitude=location.coordinate.longitude,
        source=location.source.value,
        ward=WardInfoResponse.from_ward_info(location.ward),
    )


@geo_router.get("/divisions")
async def get_divisions(
    service: WardLookupService = Depends(get_ward_lookup_service),  # noqa: B008
) -> JSONResponse:
    """Return the loaded ward boundaries as a GeoJSON FeatureCollection."""
    return JSONResponse(
        content=service.dataset.to_feature_collection(),
        media_type="application/geo+json",
        headers=_STATIC_CACHE_HEADERS,
    )


@geo_router.get("/ward-zones")
async def get_ward_zones(
    service: WardLookupService = Depends(get_ward_lookup_service),  # noqa: B008
) -> JSONResponse:
    """Return the ward-name table (ward N at index N-1)."""
    return JSONResponse(
        content=list(service.dataset.zone_table),
        headers=_STATIC_CACHE_HEADERS,
    )
