from eventsystem.domain.dependency_guard import DependencyGuard


class FakeReferences:
    def __init__(self, bookings):
        # (venue_id, event_id) pairs
        self.bookings = bookings

    def venue_has_bookings(self, venue_id: int) -> bool:
        return any(v == venue_id for v, _ in self.bookings)

    def event_has_bookings(self, event_id: int) -> bool:
        return any(e == event_id for _, e in self.bookings)


def test_venue_with_booking_cannot_be_deleted():
    guard = DependencyGuard(FakeReferences([(1, 10)]))

    assert guard.can_delete_venue(1) is False


def test_venue_without_booking_can_be_deleted():
    guard = DependencyGuard(FakeReferences([(1, 10)]))

    assert guard.can_delete_venue(2) is True


def test_event_with_booking_cannot_be_deleted():
    guard = DependencyGuard(FakeReferences([(1, 10)]))

    assert guard.can_delete_event(10) is False


def test_event_without_booking_can_be_deleted():
    guard = DependencyGuard(FakeReferences([(1, 10)]))

    assert guard.can_delete_event(11) is True


def test_nothing_booked_allows_every_delete():
    guard = DependencyGuard(FakeReferences([]))

    assert guard.can_delete_venue(1)
    assert guard.can_delete_event(10)


def test_venue_and_event_ids_are_not_confused():
    # venue 10 is free even though event 10 is booked
    guard = DependencyGuard(FakeReferences([(1, 10)]))

    assert guard.can_delete_venue(10) is True
    assert guard.can_delete_event(1) is True
