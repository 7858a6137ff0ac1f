"""
Regatta Club API - FastAPI Application

Main entry point for the FastAPI application: club profiles, events, series,
notice boards and the moderated per-event race timeline.
"""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from app.api import router as api_router
from app.core.config import get_settings
from app.core.errors import AppError
from app.core.logging import RequestLoggingMiddleware, setup_logging
from app.db.base import Base
from app.db import models_registry  # noqa: F401 - Import to register models
from app.db.session import engine

settings = get_settings()
setup_logging()


async def init_database() -> None:
    """Initialize database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting Regatta Club API...")

    # Ensure data directory exists
    data_path = Path(settings.data_save_folder)
    data_path.mkdir(parents=True, exist_ok=True)

    await init_database()

    logger.info(f"Regatta Club API started on port {settings.port}")

    yield

    # Shutdown
    logger.info("Shutting down Regatta Club API...")
    await engine.dispose()
    logger.info("Regatta Club API stopped")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Regatta Club API - events, notices and race timelines",
    lifespan=lifespan,
    docs_url="/swagger" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

app.add_middleware(RequestLoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Structured response for service-level errors."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    else:
        logger.debug(f"{request.method} {request.url.path}: {exc.kind} {exc.message}")

    headers = {"WWW-Authenticate": "Bearer"} if exc.kind == "Unauthorized" else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request validation failures are InvalidInput."""
    return JSONResponse(
        status_code=422,
        content={
            "Code": 422,
            "Kind": "InvalidInput",
            "Message": "Request validation failed",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


# Exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"Code": 500, "Kind": "Internal", "Message": str(exc)},
    )


@app.get("/healthz")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


# Include API router
app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.workers,
    )
