"""API route aggregation.

All routers registered here get mounted in main.py under /api.
Health and auth routes are open; note routes resolve the bearer token
themselves because they need the identity value, not just a gate.
"""

from fastapi import APIRouter

from notekeep.api.auth import router as auth_router
from notekeep.api.health import router as health_router
from notekeep.api.notes import router as notes_router

api_router = APIRouter(prefix="/api")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(notes_router, tags=["notes"])
