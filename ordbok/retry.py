import asyncio
from http import HTTPStatus
from typing import Awaitable, Callable, TypeVar

from ordbok.exception import EmptyResponseException, MalformedResponseException
from ordbok.log import logger

T = TypeVar("T")


def is_rate_limit_error(error: BaseException) -> bool:
    """
    Returns True if an error signals a rate-limit or quota condition. Transports report these
    either through a 429 status code (in the message or on a `status_code` attribute) or through a
    message mentioning the quota.
    """
    if isinstance(error, (MalformedResponseException, EmptyResponseException)):
        return False
    if getattr(error, "status_code", None) == HTTPStatus.TOO_MANY_REQUESTS:
        return True
    message = str(error)
    return str(HTTPStatus.TOO_MANY_REQUESTS.value) in message or "quota" in message.lower()


async def with_retry(
    operation: Callable[[], Awaitable[T]], max_attempts: int = 2, initial_delay: float = 0.5
) -> T:
    """
    Awaits `operation`, retrying it with exponential backoff while it fails with a rate-limit
    error. Any other error is raised straight away, and the last rate-limit error is raised once
    all attempts have been used up.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    for attempt in range(max_attempts):
        try:
            return await operation()
        except Exception as e:
            if not is_rate_limit_error(e) or attempt == max_attempts - 1:
                raise
            delay = initial_delay * 2**attempt
            logger.warning(
                f"Rate limit hit (attempt {attempt + 1}/{max_attempts}). Retrying in {delay:g} seconds..."  # noqa: E501
            )
            await asyncio.sleep(delay)
    raise AssertionError("unreachable")


__all__ = ["is_rate_limit_error", "with_retry"]
