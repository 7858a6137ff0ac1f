"""Top-level API router; every resource is served under ``/api/v2``."""

from fastapi import APIRouter

from app.api.v2 import router as v2_router

API_PREFIX = "/api/v2"

router = APIRouter()
router.include_router(v2_router, prefix=API_PREFIX)
