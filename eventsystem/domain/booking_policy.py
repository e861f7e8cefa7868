from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Protocol

VENUE_ALREADY_BOOKED = "venue already booked on this date"


class BookingLike(Protocol):
    id: int | None
    venue_id: int | None
    booking_date: date


@dataclass(frozen=True, slots=True)
class BookingCandidate:
    """A booking as proposed by a create or edit request.

    ``id`` is None for a new booking and the booking's own id for an edit.
    """

    venue_id: int | None
    event_id: int | None
    booking_date: date
    id: int | None = None


@dataclass(frozen=True, slots=True)
class Verdict:
    """Outcome of validating a candidate booking."""

    is_accepted: bool
    reason: str | None = None

    @classmethod
    def accepted(cls) -> Verdict:
        return cls(is_accepted=True)

    @classmethod
    def rejected(cls, reason: str) -> Verdict:
        return cls(is_accepted=False, reason=reason)

    @property
    def is_rejected(self) -> bool:
        return not self.is_accepted


@dataclass(frozen=True, slots=True)
class BookingPolicy:
    """Defines when a booking would double-book its venue.

    Semantics (intentionally centralized):
    - A candidate conflicts with an existing booking if both have the same
      venue_id AND the same booking_date AND different ids.
    - A candidate without a venue never conflicts.
    - Bookings are compared by identity, so an edit never conflicts with the
      stored version of itself.
    """

    def conflicts_with(self, candidate: BookingLike, existing: BookingLike) -> bool:
        if candidate.venue_id is None:
            return False
        return (
            existing.venue_id == candidate.venue_id
            and existing.booking_date == candidate.booking_date
            and existing.id != candidate.id
        )

    def find_conflict(
        self, candidate: BookingLike, existing: Iterable[BookingLike]
    ) -> BookingLike | None:
        """Return the first existing booking the candidate conflicts with."""
        if candidate.venue_id is None:
            return None
        for booking in existing:
            if self.conflicts_with(candidate, booking):
                return booking
        return None

    def validate(
        self, candidate: BookingLike, existing: Iterable[BookingLike]
    ) -> Verdict:
        if self.find_conflict(candidate, existing) is not None:
            return Verdict.rejected(VENUE_ALREADY_BOOKED)
        return Verdict.accepted()

    def sqlalchemy_conflict_predicate(
        self, candidate: BookingLike, *, id_col, venue_col, date_col
    ):
        """Build a SQLAlchemy predicate selecting the rows the candidate conflicts with.

        Kept here so repositories can narrow the scan in SQL without
        redefining the matching rule.
        """
        from sqlalchemy import and_, false

        if candidate.venue_id is None:
            return false()
        clauses = [
            venue_col == candidate.venue_id,
            date_col == candidate.booking_date,
        ]
        if candidate.id is not None:
            clauses.append(id_col != candidate.id)
        return and_(*clauses)
