# File: app/services/place_service.py

"""
Place workflows.

Creating and deleting a place each touch two records: the place row and
the creator's `places` list. Both writes go through one unit of work so
they commit or roll back together. Geocoding and image storage happen
outside that transaction and are not undone if it aborts.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.core.errors import (
    ApiResult,
    auth_error,
    internal_error,
    not_found_error,
)
from app.core.result import Err, Ok
from app.db.unit_of_work import UnitOfWork, unit_of_work
from app.models.place import Place
from app.models.user import User
from app.schemas.place import PlaceCreate, PlaceUpdate
from app.services.geocoding import GeocodingClient
from app.services.uploads import discard_file

logger = logging.getLogger(__name__)


# ----------------------------------------------------
# Writes that run inside a unit of work
# ----------------------------------------------------

def _insert_place(uow: UnitOfWork, place: Place) -> None:
    uow.session.add(place)


def _attach_to_creator(uow: UnitOfWork, creator: User, place: Place) -> None:
    creator.places.append(place)
    uow.session.flush()


def _remove_place(uow: UnitOfWork, place: Place) -> None:
    uow.session.delete(place)


def _detach_from_creator(uow: UnitOfWork, creator: User, place: Place) -> None:
    creator.places.remove(place)
    uow.session.flush()


# ----------------------------------------------------
# Workflows
# ----------------------------------------------------

def get_place_by_id(db: Session, place_id: str) -> ApiResult[Place]:
    try:
        place = db.get(Place, place_id)
    except SQLAlchemyError as exc:
        logger.error(f"Loading place {place_id} failed: {exc}")
        return Err(internal_error("Something went wrong, could not find a place."))

    if place is None:
        return Err(not_found_error("Could not find a place for the provided id."))
    return Ok(place)


def get_places_by_user_id(db: Session, user_id: str) -> ApiResult[list[Place]]:
    """
    A user that does not exist and a user without places are both 404.
    """
    try:
        user = db.execute(
            select(User).options(selectinload(User.places)).where(User.id == user_id)
        ).scalar_one_or_none()
    except SQLAlchemyError as exc:
        logger.error(f"Loading places for user {user_id} failed: {exc}")
        return Err(internal_error("Fetching places failed, please try again later."))

    if user is None or not user.places:
        return Err(not_found_error("Could not find places for the provided user id."))
    return Ok(list(user.places))


def create_place(
    db: Session,
    geocoder: GeocodingClient,
    payload: PlaceCreate,
    *,
    image: str,
    creator_id: str,
) -> ApiResult[Place]:
    match geocoder.geocode(payload.address):
        case Ok(value=location):
            pass
        case Err() as failed:
            return failed

    place = Place(
        title=payload.title,
        description=payload.description,
        address=payload.address,
        lat=location.lat,
        lng=location.lng,
        image=image,
        creator_id=creator_id,
    )

    try:
        creator = db.get(User, creator_id)
    except SQLAlchemyError as exc:
        logger.error(f"Loading creator {creator_id} failed: {exc}")
        return Err(internal_error("Creating place failed, please try again."))

    if creator is None:
        return Err(not_found_error("Could not find user in database"))

    try:
        with unit_of_work(db) as uow:
            _insert_place(uow, place)
            _attach_to_creator(uow, creator, place)
    except SQLAlchemyError as exc:
        logger.error(f"Creating place for user {creator_id} failed: {exc}")
        return Err(internal_error("Creating place failed, please try again."))

    logger.info(f"Created place {place.id} for user {creator_id}")
    return Ok(place)


def update_place(
    db: Session,
    place_id: str,
    payload: PlaceUpdate,
    *,
    caller_id: str,
) -> ApiResult[Place]:
    match get_place_by_id(db, place_id):
        case Ok(value=place):
            pass
        case Err() as failed:
            return failed

    if place.creator_id != caller_id:
        return Err(auth_error("You are not allowed to edit this place."))

    place.title = payload.title
    place.description = payload.description

    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Updating place {place_id} failed: {exc}")
        return Err(internal_error("Something went wrong, could not update place."))

    return Ok(place)


def delete_place(db: Session, place_id: str, *, caller_id: str) -> ApiResult[str]:
    try:
        place = db.execute(
            select(Place).options(selectinload(Place.creator)).where(Place.id == place_id)
        ).scalar_one_or_none()
    except SQLAlchemyError as exc:
        logger.error(f"Loading place {place_id} for deletion failed: {exc}")
        return Err(internal_error("Something went wrong, could not delete place."))

    if place is None:
        return Err(not_found_error("Could not find this place to delete"))

    creator = place.creator
    if creator.id != caller_id:
        return Err(auth_error("You are not allowed to delete this place."))

    image_path = place.image

    try:
        with unit_of_work(db) as uow:
            _remove_place(uow, place)
            _detach_from_creator(uow, creator, place)
    except SQLAlchemyError as exc:
        logger.error(f"Deleting place {place_id} failed: {exc}")
        return Err(internal_error("Could not delete place in database"))

    discard_file(image_path)
    logger.info(f"Deleted place {place_id}")
    return Ok("Deleted place.")
