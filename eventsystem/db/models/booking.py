from sqlalchemy import Column, Integer, Date, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from eventsystem.db.base import Base


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        # Authoritative double-booking guard; the policy check runs before it.
        UniqueConstraint("venue_id", "booking_date", name="uq_bookings_venue_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    venue_id = Column(Integer, ForeignKey("venues.id"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    booking_date = Column(Date, nullable=False)

    # Many-to-one only: bookings of a venue/event are queried by foreign id.
    venue = relationship("Venue")
    event = relationship("Event")
