from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

VENUE_HAS_BOOKINGS = "Cannot delete this venue because it has associated bookings."
EVENT_HAS_BOOKINGS = "Cannot delete this event because it has associated bookings."


class BookingReferences(Protocol):
    """Read access to the bookings that reference a parent row."""

    def venue_has_bookings(self, venue_id: int) -> bool: ...

    def event_has_bookings(self, event_id: int) -> bool: ...


@dataclass(frozen=True, slots=True)
class DependencyGuard:
    """A venue or event may be deleted only while no booking references it.

    There is no cascade: bookings must be removed first. Deleting a booking
    itself is never guarded.
    """

    references: BookingReferences

    def can_delete_venue(self, venue_id: int) -> bool:
        return not self.references.venue_has_bookings(venue_id)

    def can_delete_event(self, event_id: int) -> bool:
        return not self.references.event_has_bookings(event_id)
