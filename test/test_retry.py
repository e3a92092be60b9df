from unittest.mock import AsyncMock, patch

import pytest

from ordbok.exception import EmptyResponseException, MalformedResponseException
from ordbok.retry import is_rate_limit_error, with_retry


class StatusError(Exception):
    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


def test_is_rate_limit_error() -> None:
    assert is_rate_limit_error(Exception("Error code: 429 - Too Many Requests"))
    assert is_rate_limit_error(Exception("You exceeded your current QUOTA"))
    assert is_rate_limit_error(StatusError("slow down", 429))
    assert not is_rate_limit_error(Exception("Error code: 500"))
    assert not is_rate_limit_error(ValueError("Expecting value: line 1 column 1"))
    assert not is_rate_limit_error(MalformedResponseException("Expecting property name: line 1 column 429"))  # noqa: E501
    assert not is_rate_limit_error(EmptyResponseException("quota of text was empty"))


@pytest.mark.asyncio
async def test_with_retry_returns_first_success() -> None:
    operation = AsyncMock(return_value="ok")
    assert await with_retry(operation, max_attempts=3, initial_delay=0.5) == "ok"
    assert operation.await_count == 1


@pytest.mark.asyncio
async def test_with_retry_exhausts_attempts_on_quota_errors() -> None:
    error = Exception("429 quota exceeded")
    operation = AsyncMock(side_effect=error)
    with patch("ordbok.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
        with pytest.raises(Exception) as exc_info:
            await with_retry(operation, max_attempts=4, initial_delay=0.5)
    assert exc_info.value is error
    assert operation.await_count == 4
    assert [call.args[0] for call in sleep.await_args_list] == [0.5, 1.0, 2.0]


@pytest.mark.asyncio
async def test_with_retry_does_not_retry_other_errors() -> None:
    operation = AsyncMock(side_effect=ValueError("bad json"))
    with patch("ordbok.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
        with pytest.raises(ValueError):
            await with_retry(operation, max_attempts=4, initial_delay=0.5)
    assert operation.await_count == 1
    sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_with_retry_recovers_after_rate_limit() -> None:
    operation = AsyncMock(side_effect=[Exception("quota"), "ok"])
    with patch("ordbok.retry.asyncio.sleep", new_callable=AsyncMock):
        assert await with_retry(operation, max_attempts=2, initial_delay=0.1) == "ok"
    assert operation.await_count == 2


@pytest.mark.asyncio
async def test_with_retry_rejects_zero_attempts() -> None:
    with pytest.raises(ValueError):
        await with_retry(AsyncMock(), max_attempts=0)
