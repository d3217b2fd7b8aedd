"""
Aggregate all v1 endpoint routers under the /v1 prefix.
"""

from fastapi import APIRouter

from timeline_api.api.v1.endpoints.events import router as events_router

v1_router = APIRouter(prefix="/v1")
v1_router.include_router(events_router)
