from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Event(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    event_date: date
    description: str


class EventCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    event_date: date
    description: str = Field(..., min_length=1, max_length=500)

    @field_validator("name", "description")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class EventUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    event_date: date | None = None
    description: str | None = Field(None, min_length=1, max_length=500)

    @field_validator("name", "description")
    @classmethod
    def validate_not_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("must not be blank")
        return v
