# File: app/api/routes/routes_places.py

from fastapi import APIRouter, Depends, status

from app.api.deps import (
    AuthContext,
    DbDep,
    GeocoderDep,
    place_create_form,
    place_update_body,
    require_auth,
    stored_image,
)
from app.core.errors import unwrap
from app.schemas.place import (
    MessageResponse,
    PlaceCreate,
    PlaceListResponse,
    PlaceRead,
    PlaceResponse,
    PlaceUpdate,
)
from app.services import place_service

router = APIRouter()


@router.get(
    "/user/{uid}",
    response_model=PlaceListResponse,
    summary="List a user's places",
)
def get_places_by_user_id(uid: str, db: DbDep):
    places = unwrap(place_service.get_places_by_user_id(db, uid))
    return PlaceListResponse(places=[PlaceRead.model_validate(p) for p in places])


@router.get(
    "/{pid}",
    response_model=PlaceResponse,
    summary="Get a place",
)
def get_place_by_id(pid: str, db: DbDep):
    place = unwrap(place_service.get_place_by_id(db, pid))
    return PlaceResponse(place=PlaceRead.model_validate(place))


# Routes below require a bearer token. `require_auth` is always the first
# dependency so unauthenticated requests stop before any upload or lookup.

@router.post(
    "",
    response_model=PlaceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a place",
)
def create_place(
    db: DbDep,
    geocoder: GeocoderDep,
    auth: AuthContext = Depends(require_auth),
    image: str = Depends(stored_image),
    payload: PlaceCreate = Depends(place_create_form),
):
    """
    Multipart form: title, description, address, image.

    The address is geocoded and the place is added to the caller's list.
    """
    place = unwrap(
        place_service.create_place(
            db, geocoder, payload, image=image, creator_id=auth.user_id
        )
    )
    return PlaceResponse(place=PlaceRead.model_validate(place))


@router.patch(
    "/{pid}",
    response_model=PlaceResponse,
    summary="Update a place (creator only)",
)
def update_place(
    pid: str,
    db: DbDep,
    auth: AuthContext = Depends(require_auth),
    payload: PlaceUpdate = Depends(place_update_body),
):
    place = unwrap(
        place_service.update_place(db, pid, payload, caller_id=auth.user_id)
    )
    return PlaceResponse(place=PlaceRead.model_validate(place))


@router.delete(
    "/{pid}",
    response_model=MessageResponse,
    summary="Delete a place (creator only)",
)
def delete_place(
    pid: str,
    db: DbDep,
    auth: AuthContext = Depends(require_auth),
):
    message = unwrap(place_service.delete_place(db, pid, caller_id=auth.user_id))
    return MessageResponse(message=message)
