"""Retry utilities using tenacity."""
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_incrementing,
    wait_random,
)

from deepseek_sdk.core.errors import APIConnectionError, APIStatusError, APITimeoutError
from .logging import get_logger

logger = get_logger(__name__)


def jittered_backoff(backoff: float):
    """Linear backoff (``backoff`` x attempt) plus up to ``backoff`` of random jitter."""
    return wait_incrementing(start=backoff, increment=backoff) + wait_random(0, backoff)


def is_retryable(exc: BaseException) -> bool:
    """Transient failures: connection errors other than timeouts, plus 429 and 5xx."""
    if isinstance(exc, APITimeoutError):
        return False
    if isinstance(exc, APIConnectionError):
        return True
    return isinstance(exc, APIStatusError) and exc.retryable


def _log_retry(max_retries: int):
    def before_sleep(retry_state) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "retrying_request",
            attempt=retry_state.attempt_number,
            max_retries=max_retries,
            status=getattr(exc, "status_code", None),
            error=type(exc).__name__ if exc else None,
        )

    return before_sleep


def create_retry_decorator(max_retries: int = 3, backoff: float = 1.0):
    """Create a retry decorator for HTTP calls.

    Up to ``max_retries`` further attempts are made after a transient
    failure (see :func:`is_retryable`).
    """
    return retry(
        stop=stop_after_attempt(max_retries + 1),
        wait=jittered_backoff(backoff),
        retry=retry_if_exception(is_retryable),
        before_sleep=_log_retry(max_retries),
        reraise=True,
    )
