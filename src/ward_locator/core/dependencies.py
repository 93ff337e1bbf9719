"""FastAPI dependency injection for the shared ward lookup service."""

from fastapi import HTTPException, Request, status

from ward_locator.services.ward_lookup_service import WardLookupService


def get_ward_lookup_service(request: Request) -> WardLookupService:
    """Return the ward lookup service loaded during application startup.

    Raises:
        HTTPException: 503 if the service has not been initialized.
    """
    service = getattr(request.app.state, "ward_lookup_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Ward dataset is not loaded.",
        )
    return service
