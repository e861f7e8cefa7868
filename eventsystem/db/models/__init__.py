from eventsystem.db.models.venue import Venue
from eventsystem.db.models.event import Event
from eventsystem.db.models.booking import Booking
from eventsystem.db.models.booking_view import booking_view

__all__ = ["Venue", "Event", "Booking", "booking_view"]
