"""/v1/profile - the customer's personal data (singleton)"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from customer_portal.api.dependencies import get_profile_service, get_request_id
from customer_portal.api.routing import PortalRoute
from customer_portal.domain.exceptions import RecordConflictError, RecordNotFoundError
from customer_portal.domain.models import Profile
from customer_portal.domain.profile import ProfileService
from customer_portal.infrastructure.observability.logging import log_mutation
from customer_portal.infrastructure.observability.metrics import record_mutation

router = APIRouter(route_class=PortalRoute)

COLLECTION = "profile"


@router.get("/profile", response_model=Profile)
def get_profile(service: ProfileService = Depends(get_profile_service)):
    try:
        return service.get()
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Profile not found")


@router.post("/profile", response_model=Profile, status_code=status.HTTP_201_CREATED)
def create_profile(
    profile: Profile,
    request: Request,
    response: Response,
    service: ProfileService = Depends(get_profile_service),
):
    """Set the profile for the first time. Fails if one already exists."""
    try:
        created = service.create(profile)
    except RecordConflictError as e:
        logging.warning(f"Profile conflict: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=409, detail=str(e))

    record_mutation(COLLECTION, "create")
    log_mutation(get_request_id(request), COLLECTION, "create")
    response.headers["Location"] = "/v1/profile"
    return created


@router.put("/profile", status_code=status.HTTP_204_NO_CONTENT)
def upsert_profile(
    profile: Profile,
    request: Request,
    service: ProfileService = Depends(get_profile_service),
):
    """Create or overwrite the profile"""
    service.upsert(profile)

    record_mutation(COLLECTION, "upsert")
    log_mutation(get_request_id(request), COLLECTION, "upsert")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/profile", status_code=status.HTTP_204_NO_CONTENT)
def delete_profile(request: Request, service: ProfileService = Depends(get_profile_service)):
    try:
        service.delete()
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Profile not found")

    record_mutation(COLLECTION, "delete")
    log_mutation(get_request_id(request), COLLECTION, "delete")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
