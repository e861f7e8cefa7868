from sqlalchemy import Column, Integer, Date, String

from eventsystem.db.base import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    event_date = Column(Date, nullable=False)
    description = Column(String(500), nullable=False)
