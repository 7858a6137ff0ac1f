"""Logging setup and request logging middleware."""

import sys
import time
from typing import Callable

from fastapi import Request
from loguru import logger

from app.core.config import get_settings


def setup_logging() -> None:
    """Replace loguru's default sink with one at the configured level."""
    settings = get_settings()
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
        ),
        backtrace=settings.debug,
        diagnose=settings.debug,
    )


class RequestLoggingMiddleware:
    """Log method, path, status and duration of each HTTP request."""

    def __init__(self, app: Callable) -> None:
        self.app = app

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        request = Request(scope, receive=receive)

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                elapsed_ms = (time.perf_counter() - start) * 1000
                logger.info(
                    f"{request.method} {request.url.path} "
                    f"-> {message['status']} ({elapsed_ms:.1f}ms)"
                )
            await send(message)

        await self.app(scope, receive, send_wrapper)
