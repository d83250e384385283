"""Retry policy for calls to external HTTP services."""

from collections.abc import Awaitable, Callable
from logging import getLogger
from typing import Any, ParamSpec, TypeVar

from httpx import Response, TransportError
from starlette.status import (
    HTTP_429_TOO_MANY_REQUESTS,
    HTTP_502_BAD_GATEWAY,
    HTTP_503_SERVICE_UNAVAILABLE,
    HTTP_504_GATEWAY_TIMEOUT,
)
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from cms.configs import file_logger

logger = file_logger(getLogger(__name__))

P = ParamSpec("P")
T = TypeVar("T")

RETRIABLE_EXCEPTIONS = (TransportError, ConnectionError, TimeoutError)
# Upstream answers worth another attempt
RETRIABLE_STATUS = frozenset(
    {
        HTTP_429_TOO_MANY_REQUESTS,
        HTTP_502_BAD_GATEWAY,
        HTTP_503_SERVICE_UNAVAILABLE,
        HTTP_504_GATEWAY_TIMEOUT,
    },
)


def is_retriable_response(result: Any) -> bool:
    """Check whether a call returned a transient upstream failure."""
    return isinstance(result, Response) and result.status_code in RETRIABLE_STATUS


def _log_before_sleep(max_retries: int) -> Callable[[RetryCallState], None]:
    def before_sleep_callback(retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        if outcome is not None and outcome.failed:
            reason = f"exception: {outcome.exception()}"
        elif outcome is not None:
            reason = f"status: {outcome.result().status_code}"
        else:
            reason = "unknown"
        sleep_duration = retry_state.next_action.sleep if retry_state.next_action else 0
        func_name = retry_state.fn.__name__ if retry_state.fn else "unknown"

        logger.warning(
            "Retry %d/%d for %s after %.2fs delay, %s",
            retry_state.attempt_number,
            max_retries,
            func_name,
            sleep_duration,
            reason,
        )

    return before_sleep_callback


def _last_outcome(retry_state: RetryCallState) -> Any:
    # Hand back the final response, or re-raise the final exception
    return retry_state.outcome.result() if retry_state.outcome else None


def with_retry(
    max_retries: int = 3,
    base_delay: float = 0.1,
    max_delay: float = 2.0,
    exec_retry: tuple[type[Exception], ...] = RETRIABLE_EXCEPTIONS,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Retry an async call with exponential backoff using Tenacity.

    Transport errors and transient upstream statuses (429, 502, 503, 504)
    are retried. Once attempts run out the last response is returned, or the
    last exception re-raised, so callers map it like any other outcome.

    Args:
        max_retries: Maximum number of attempts.
        base_delay: Initial delay between retries in seconds.
        max_delay: Maximum delay between retries in seconds.
        exec_retry: Exception types to retry on.

    Returns:
        Decorated function with retry logic.
    """
    return retry(
        stop=stop_after_attempt(max_retries),
        wait=wait_exponential(multiplier=base_delay, min=base_delay, max=max_delay),
        retry=retry_if_exception_type(exec_retry) | retry_if_result(is_retriable_response),
        before_sleep=_log_before_sleep(max_retries),
        retry_error_callback=_last_outcome,
    )
