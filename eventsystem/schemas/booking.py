from datetime import date

from pydantic import BaseModel, ConfigDict

from eventsystem.schemas.event import Event
from eventsystem.schemas.venue import VenueSummary


class Booking(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    venue_id: int
    event_id: int
    booking_date: date
    venue: VenueSummary | None = None
    event: Event | None = None


class BookingCreate(BaseModel):
    venue_id: int
    event_id: int
    booking_date: date


class BookingUpdate(BaseModel):
    venue_id: int | None = None
    event_id: int | None = None
    booking_date: date | None = None


class BookingView(BaseModel):
    """Flattened booking row used for listing and search."""

    model_config = ConfigDict(from_attributes=True)

    booking_id: int
    venue_name: str
    location: str
    event_name: str
    event_date: date
    booking_date: date
