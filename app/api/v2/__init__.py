"""API v2 router initialization."""

from fastapi import APIRouter

from app.api.v2.events import router as events_router
from app.api.v2.notices import router as notices_router
from app.api.v2.series import router as series_router
from app.api.v2.timeline import router as timeline_router
from app.api.v2.users import router as users_router

router = APIRouter()

router.include_router(users_router, prefix="/users", tags=["Users"])
router.include_router(events_router, prefix="/events", tags=["Events"])
router.include_router(series_router, prefix="/series", tags=["Series"])
router.include_router(notices_router, prefix="/notices", tags=["Notices"])
router.include_router(timeline_router, prefix="/timeline", tags=["Timeline"])
