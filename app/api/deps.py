# File: app/api/deps.py

"""
Request pipeline steps, used as FastAPI dependencies.

A route lists its steps in order (auth, then upload, then form); each step
either returns the value the next one needs or raises ApiErrorException,
which skips everything after it and goes straight to the error handler.
"""

import logging
from collections.abc import Generator
from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import Body, Depends, File, Form, Header, Request, UploadFile
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.errors import ApiErrorException, auth_error, unwrap, validation_error
from app.core.security import TokenError, decode_access_token
from app.schemas.place import PlaceCreate, PlaceUpdate
from app.schemas.user import UserCreate
from app.services.geocoding import GeocodingClient
from app.services.uploads import store_image

logger = logging.getLogger(__name__)

TOKEN_FAILED_MESSAGE = "Token authentication failed."


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_geocoder(request: Request) -> GeocodingClient:
    return request.app.state.geocoder


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
DbDep = Annotated[Session, Depends(get_db)]
GeocoderDep = Annotated[GeocodingClient, Depends(get_geocoder)]


# ----------------------------------------------------
# Auth
# ----------------------------------------------------

@dataclass(slots=True, frozen=True)
class AuthContext:
    user_id: str


def require_auth(
    settings: SettingsDep,
    authorization: Annotated[str | None, Header()] = None,
) -> AuthContext:
    """
    Accept `Authorization: Bearer <token>` only. Missing, malformed, badly
    signed and expired tokens are all rejected with 403.
    """
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise ApiErrorException(auth_error(TOKEN_FAILED_MESSAGE, status_code=403))

    try:
        payload = decode_access_token(settings, token.strip())
    except TokenError as exc:
        logger.debug(f"Rejected bearer token: {exc}")
        raise ApiErrorException(auth_error(TOKEN_FAILED_MESSAGE, status_code=403))

    return AuthContext(user_id=str(payload["userId"]))


# ----------------------------------------------------
# Upload
# ----------------------------------------------------

def stored_image(
    request: Request,
    settings: SettingsDep,
    image: Annotated[UploadFile | None, File()] = None,
) -> str:
    """
    Store the `image` form file and return its path.

    The path is also recorded on `request.state` so the error handler can
    remove the file if a later step fails.
    """
    if image is None:
        raise ApiErrorException(validation_error("An image is required."))

    path = unwrap(
        store_image(
            image.file,
            image.content_type,
            upload_dir=settings.UPLOAD_DIR,
            max_size=settings.MAX_UPLOAD_SIZE_BYTES,
        )
    )
    request.state.uploaded_file = path
    return path


# ----------------------------------------------------
# Forms / bodies
# ----------------------------------------------------

def signup_form(
    name: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> UserCreate:
    try:
        return UserCreate(name=name, email=email, password=password)
    except ValidationError:
        raise ApiErrorException(
            validation_error("Invalid inputs passed, please check your data.")
        )


def place_create_form(
    title: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
    address: Annotated[str, Form()] = "",
) -> PlaceCreate:
    try:
        return PlaceCreate(title=title, description=description, address=address)
    except ValidationError:
        raise ApiErrorException(
            validation_error("Invalid inputs passed. Cannot create a new place.")
        )


def place_update_body(body: Annotated[Any, Body()] = None) -> PlaceUpdate:
    try:
        return PlaceUpdate.model_validate(body)
    except ValidationError:
        raise ApiErrorException(
            validation_error("Invalid inputs passed. Cannot update place.")
        )
