"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
"""

from fastapi import APIRouter

from .endpoints import attendees, auth, events

router = APIRouter()

router.include_router(auth.router, tags=["auth"])
router.include_router(events.router, prefix="/events", tags=["events"])
# The attendee router spans /events/{id}/attendees and /attendees/{id}/events,
# so it defines full paths itself.
router.include_router(attendees.router, tags=["attendees"])
