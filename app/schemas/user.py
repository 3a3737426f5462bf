# File: app/schemas/user.py

from pydantic import AliasChoices, BaseModel, EmailStr, Field, field_validator


class UserBase(BaseModel):
    email: EmailStr


class UserCreate(UserBase):
    name: str = Field(min_length=1)
    password: str = Field(min_length=6)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class LoginRequest(BaseModel):
    email: str
    password: str


class UserRead(BaseModel):
    id: str
    name: str
    email: str
    image: str
    places: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("place_ids", "places"),
    )

    class Config:
        from_attributes = True  # Pydantic v2: replaces orm_mode


class UserListResponse(BaseModel):
    users: list[UserRead]


class AuthResponse(BaseModel):
    userId: str
    email: str
    token: str
