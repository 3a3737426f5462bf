# File: app/services/user_service.py

"""
User workflows: list, signup, login.

Each function returns a Result; database and crypto failures are turned
into internal errors here so routes never see a raw exception.
"""

import logging

from jose import JWTError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.core.config import Settings
from app.core.errors import ApiResult, auth_error, internal_error, validation_error
from app.core.result import Err, Ok
from app.core.security import create_access_token, hash_password, verify_password
from app.models.user import User
from app.schemas.user import AuthResponse, UserCreate

logger = logging.getLogger(__name__)

USER_EXISTS_MESSAGE = "User exists already, please login instead."


def _find_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()


def _issue_token(settings: Settings, user: User) -> ApiResult[AuthResponse]:
    try:
        token = create_access_token(settings, user_id=user.id, email=user.email)
    except JWTError as exc:
        logger.error(f"Token signing failed for user {user.id}: {exc}")
        return Err(internal_error("Creating jwt token failed."))
    return Ok(AuthResponse(userId=user.id, email=user.email, token=token))


def list_users(db: Session) -> ApiResult[list[User]]:
    try:
        users = db.execute(
            select(User).options(selectinload(User.places)).order_by(User.created_at)
        ).scalars().all()
    except SQLAlchemyError as exc:
        logger.error(f"Listing users failed: {exc}")
        return Err(internal_error("Cannot get user data from database"))
    return Ok(list(users))


def signup(
    db: Session,
    settings: Settings,
    payload: UserCreate,
    *,
    image: str,
) -> ApiResult[AuthResponse]:
    try:
        existing = _find_by_email(db, payload.email)
    except SQLAlchemyError as exc:
        logger.error(f"Email lookup failed during signup: {exc}")
        return Err(internal_error("Signing up failed, please try again later."))

    if existing is not None:
        return Err(validation_error(USER_EXISTS_MESSAGE))

    try:
        hashed_password = hash_password(payload.password, settings.BCRYPT_ROUNDS)
    except ValueError as exc:
        logger.error(f"Password hashing failed: {exc}")
        return Err(internal_error("Could not create user, please try again."))

    user = User(
        name=payload.name,
        email=payload.email,
        password=hashed_password,
        image=image,
        places=[],
    )

    try:
        db.add(user)
        db.commit()
    except IntegrityError:
        # lost a race with another signup for the same email
        db.rollback()
        return Err(validation_error(USER_EXISTS_MESSAGE))
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Saving new user failed: {exc}")
        return Err(internal_error("Signing up failed, please try again later."))

    logger.info(f"Created user {user.id}")
    return _issue_token(settings, user)


def login(db: Session, settings: Settings, *, email: str, password: str) -> ApiResult[AuthResponse]:
    try:
        user = _find_by_email(db, email.strip().lower())
    except SQLAlchemyError as exc:
        logger.error(f"Email lookup failed during login: {exc}")
        return Err(internal_error("Logging in failed, please try again later."))

    if user is None:
        return Err(auth_error("Email does not exist."))

    try:
        is_valid_password = verify_password(password, user.password)
    except ValueError as exc:
        logger.error(f"Password check failed for user {user.id}: {exc}")
        return Err(internal_error("Validating password process failed."))

    if not is_valid_password:
        return Err(auth_error("Invalid password.", status_code=403))

    return _issue_token(settings, user)
