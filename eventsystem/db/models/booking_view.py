"""Read-only projection joining bookings with their venue and event.

The ``booking_view`` database view is created by migration 004. It lives on its
own ``MetaData`` so Alembic autogenerate never tries to create it as a table.
"""

from sqlalchemy import Column, Date, Integer, MetaData, String, Table

view_metadata = MetaData()

booking_view = Table(
    "booking_view",
    view_metadata,
    Column("booking_id", Integer, primary_key=True),
    Column("venue_name", String(100), nullable=False),
    Column("location", String(200), nullable=False),
    Column("event_name", String(100), nullable=False),
    Column("event_date", Date, nullable=False),
    Column("booking_date", Date, nullable=False),
)
