from datetime import date

import pytest
from sqlalchemy import delete
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from eventsystem.db.models.event import Event as EventModel
from eventsystem.domain.dependency_guard import DependencyGuard


# ============================================================================
# CREATE EVENT TESTS
# ============================================================================


def test_create_event_success(client, db: Session):
    response = client.post(
        "/api/v1/events",
        json={
            "name": "Gala",
            "event_date": "2025-06-01",
            "description": "Annual gala dinner",
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Gala"
    assert data["event_date"] == "2025-06-01"
    assert data["description"] == "Annual gala dinner"
    assert "id" in data


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "", "event_date": "2025-06-01", "description": "x"},
        {"name": "   ", "event_date": "2025-06-01", "description": "x"},
        {"name": "n" * 101, "event_date": "2025-06-01", "description": "x"},
        {"name": "Gala", "event_date": "2025-06-01", "description": "d" * 501},
        {"name": "Gala", "event_date": "not-a-date", "description": "x"},
        {"name": "Gala", "description": "x"},
    ],
)
def test_create_event_invalid_payload(client, db: Session, payload):
    """Test malformed events are rejected before reaching the database."""
    response = client.post("/api/v1/events", json=payload)
    assert response.status_code == 422
    assert db.query(EventModel).count() == 0


def test_create_event_same_name_allowed(client, db: Session, gala):
    """Test event names are not unique."""
    response = client.post(
        "/api/v1/events",
        json={"name": "Gala", "event_date": "2026-06-01", "description": "Next year"},
    )
    assert response.status_code == 201


# ============================================================================
# GET EVENT TESTS
# ============================================================================


def test_get_all_events_soonest_first(client, db: Session, gala):
    client.post(
        "/api/v1/events",
        json={"name": "Launch", "event_date": "2025-01-15", "description": "Launch"},
    )

    response = client.get("/api/v1/events")
    assert response.status_code == 200
    assert [e["name"] for e in response.json()] == ["Launch", "Gala"]


def test_get_event_by_id(client, db: Session, gala):
    response = client.get(f"/api/v1/events/{gala.id}")
    assert response.status_code == 200
    assert response.json()["name"] == "Gala"


def test_get_event_not_found(client, db: Session):
    response = client.get("/api/v1/events/99999")
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


# ============================================================================
# UPDATE EVENT TESTS
# ============================================================================


def test_update_event_partial(client, db: Session, gala):
    """Test only the provided fields change."""
    response = client.put(
        f"/api/v1/events/{gala.id}", json={"description": "Black tie"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["description"] == "Black tie"
    assert data["name"] == "Gala"
    assert data["event_date"] == "2025-06-01"


def test_update_event_blank_name_rejected(client, db: Session, gala):
    response = client.put(f"/api/v1/events/{gala.id}", json={"name": "  "})
    assert response.status_code == 422


@pytest.mark.parametrize("field", ["name", "event_date", "description"])
def test_update_event_explicit_null_rejected(client, db: Session, gala, field):
    """Test a required field cannot be cleared with an explicit null."""
    response = client.put(f"/api/v1/events/{gala.id}", json={field: None})
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert field in response.json()["detail"]


def test_update_event_not_found(client, db: Session):
    response = client.put("/api/v1/events/99999", json={"name": "Ghost"})
    assert response.status_code == 404


def test_update_event_deleted_concurrently(client, db: Session, gala, monkeypatch):
    """Test an update that loses the row to a concurrent delete reports 404."""
    import eventsystem.repositories.event as event_repo

    def racing_update(db, event_id, **kwargs):
        db.query(EventModel).filter(EventModel.id == event_id).delete()
        db.commit()
        raise StaleDataError("UPDATE statement on table 'events' matched 0 rows")

    monkeypatch.setattr(event_repo, "update_event", racing_update)

    response = client.put(f"/api/v1/events/{gala.id}", json={"name": "Renamed"})
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_update_event_stale_row_still_present(client, db: Session, gala, monkeypatch):
    """Test a stale write on a row that still exists is a storage fault."""
    import eventsystem.repositories.event as event_repo

    def stale_update(db, event_id, **kwargs):
        raise StaleDataError("UPDATE statement on table 'events' matched 0 rows")

    monkeypatch.setattr(event_repo, "update_event", stale_update)

    response = client.put(f"/api/v1/events/{gala.id}", json={"name": "Renamed"})
    assert response.status_code == 503
    assert response.json()["code"] == "STORAGE_UNAVAILABLE"


# ============================================================================
# DELETE EVENT TESTS
# ============================================================================


def test_delete_event_without_bookings(client, db: Session, gala):
    response = client.delete(f"/api/v1/events/{gala.id}")
    assert response.status_code == 204
    assert db.query(EventModel).filter(EventModel.id == gala.id).first() is None


def test_delete_event_with_bookings_fails(client, db: Session, gala, gala_booking):
    """Test an event referenced by a booking is refused and left unchanged."""
    response = client.delete(f"/api/v1/events/{gala.id}")
    assert response.status_code == 409
    data = response.json()
    assert data["code"] == "HAS_DEPENDENCIES"
    assert data["detail"] == (
        "Cannot delete this event because it has associated bookings."
    )

    db.expire_all()
    event = db.query(EventModel).filter(EventModel.id == gala.id).first()
    assert event is not None
    assert event.name == "Gala"
    assert event.event_date == date(2025, 6, 1)


def test_delete_event_not_found(client, db: Session):
    response = client.delete("/api/v1/events/99999")
    assert response.status_code == 404


def test_delete_event_removed_after_guard_check(client, db: Session, gala, monkeypatch):
    """Test an event removed by another request mid-delete reports 404."""
    import eventsystem.services.event as event_service

    class VanishingGuard(DependencyGuard):
        def can_delete_event(self, event_id):
            db.execute(delete(EventModel).where(EventModel.id == event_id))
            db.commit()
            return True

    monkeypatch.setattr(event_service, "DependencyGuard", VanishingGuard)

    response = client.delete(f"/api/v1/events/{gala.id}")
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_delete_event_booked_after_guard_check(
    client, db: Session, gala, gala_booking, monkeypatch
):
    """Test the foreign key refusing the delete is reported as HAS_DEPENDENCIES."""
    import eventsystem.services.event as event_service

    checks = []

    class LateGuard(DependencyGuard):
        def can_delete_event(self, event_id):
            checks.append(event_id)
            if len(checks) == 1:
                return True
            return super().can_delete_event(event_id)

    monkeypatch.setattr(event_service, "DependencyGuard", LateGuard)

    response = client.delete(f"/api/v1/events/{gala.id}")
    assert response.status_code == 409
    assert response.json()["code"] == "HAS_DEPENDENCIES"
    assert len(checks) == 2
    assert db.query(EventModel).filter(EventModel.id == gala.id).first() is not None
