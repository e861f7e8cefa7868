from pydantic import BaseModel, ConfigDict, Field, field_validator


def _not_blank(v: str | None) -> str | None:
    if v is not None and not v.strip():
        raise ValueError("must not be blank")
    return v


class Venue(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    location: str
    capacity: int
    image_key: str
    image_url: str


class VenueSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    location: str
    capacity: int


class VenueCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    location: str = Field(..., min_length=1, max_length=200)
    capacity: int = Field(..., gt=0, description="Capacity must be a positive number")

    @field_validator("name", "location")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        return _not_blank(v)


class VenueUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    location: str | None = Field(None, min_length=1, max_length=200)
    capacity: int | None = Field(None, gt=0, description="Capacity must be a positive number")

    @field_validator("name", "location")
    @classmethod
    def validate_not_blank(cls, v: str | None) -> str | None:
        return _not_blank(v)
