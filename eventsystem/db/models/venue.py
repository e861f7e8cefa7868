from sqlalchemy import Column, Integer, String, CheckConstraint

from eventsystem.db.base import Base


class Venue(Base):
    __tablename__ = "venues"
    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_venues_capacity_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    location = Column(String(200), nullable=False)
    capacity = Column(Integer, nullable=False)
    image_key = Column(String(255), nullable=False)
