# File: app/schemas/place.py

from pydantic import AliasChoices, BaseModel, Field, field_validator


class Location(BaseModel):
    lat: float
    lng: float


class PlaceUpdate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=5)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v


class PlaceCreate(PlaceUpdate):
    address: str = Field(min_length=1)

    @field_validator("address", mode="before")
    @classmethod
    def strip_address(cls, v):
        return v.strip() if isinstance(v, str) else v


class PlaceRead(BaseModel):
    id: str
    title: str
    description: str
    image: str
    address: str
    location: Location
    # ORM objects expose creator_id; dumped responses use "creator"
    creator: str = Field(validation_alias=AliasChoices("creator_id", "creator"))

    class Config:
        from_attributes = True


class PlaceResponse(BaseModel):
    place: PlaceRead


class PlaceListResponse(BaseModel):
    places: list[PlaceRead]


class MessageResponse(BaseModel):
    message: str
