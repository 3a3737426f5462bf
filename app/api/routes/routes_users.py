# File: app/api/routes/routes_users.py

from fastapi import APIRouter, Depends, status

from app.api.deps import DbDep, SettingsDep, signup_form, stored_image
from app.core.errors import unwrap
from app.schemas.user import (
    AuthResponse,
    LoginRequest,
    UserCreate,
    UserListResponse,
    UserRead,
)
from app.services import user_service

router = APIRouter()


@router.get(
    "",
    response_model=UserListResponse,
    summary="List users",
)
def list_users(db: DbDep):
    """
    All registered users, without password hashes.
    """
    users = unwrap(user_service.list_users(db))
    return UserListResponse(users=[UserRead.model_validate(u) for u in users])


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
)
def signup(
    db: DbDep,
    settings: SettingsDep,
    image: str = Depends(stored_image),
    payload: UserCreate = Depends(signup_form),
):
    """
    Multipart form: name, email, password, image.

    Returns the new user's id, email and a 1 hour access token.
    """
    return unwrap(user_service.signup(db, settings, payload, image=image))


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in",
)
def login(payload: LoginRequest, db: DbDep, settings: SettingsDep):
    return unwrap(
        user_service.login(db, settings, email=payload.email, password=payload.password)
    )
