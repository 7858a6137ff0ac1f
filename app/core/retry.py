"""Bounded retry for database operations that hit transient connection errors."""

from typing import Awaitable, Callable, TypeVar

from loguru import logger
from sqlalchemy.exc import DisconnectionError, OperationalError
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

from app.core.config import get_settings

T = TypeVar("T")

TRANSIENT_ERRORS = (OperationalError, DisconnectionError)


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        f"Database operation attempt {retry_state.attempt_number} failed: {exc}"
    )


async def with_db_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    attempts: int | None = None,
    delay: float | None = None,
    max_delay: float | None = None,
) -> T:
    """Run ``operation``, retrying transient connection errors.

    The wait grows linearly (``delay * attempt``) and is capped at
    ``max_delay``. Any other exception propagates immediately; once attempts
    run out the last transient error is re-raised.
    """
    settings = get_settings()
    if attempts is None:
        attempts = settings.db_retry_attempts
    if delay is None:
        delay = settings.db_retry_delay
    if max_delay is None:
        max_delay = settings.db_retry_max_delay

    retrying = AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_incrementing(start=delay, increment=delay, max=max_delay),
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        before_sleep=_log_retry,
        reraise=True,
    )

    async for attempt in retrying:
        with attempt:
            result = await operation()
    return result
