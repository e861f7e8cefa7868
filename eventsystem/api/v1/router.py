from fastapi import APIRouter

from eventsystem.api.routers import bookings, events, venues

api_router = APIRouter()

api_router.include_router(venues.router)
api_router.include_router(events.router)
api_router.include_router(bookings.router)
