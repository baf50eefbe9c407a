"""Tests for retry mechanism with exponential backoff."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from claudle.app.providers.retry import RetryPolicy, with_retry


def status_error(status_code: int) -> httpx.HTTPStatusError:
    response_mock = MagicMock()
    response_mock.status_code = status_code
    return httpx.HTTPStatusError(f"HTTP {status_code}", request=MagicMock(), response=response_mock)


class TestRetryPolicy:
    """Test RetryPolicy configuration."""

    def test_default_values(self):
        policy = RetryPolicy()

        assert policy.max_retries == 2
        assert policy.base_delay == 0.5
        assert policy.max_delay == 5.0
        assert policy.exponential_base == 2.0
        assert policy.retryable_exceptions == (
            httpx.HTTPStatusError,
            httpx.NetworkError,
            httpx.TimeoutException,
        )

    def test_calculate_delay_capped_at_max(self):
        policy = RetryPolicy(base_delay=1.0, max_delay=5.0, exponential_base=2.0)

        assert policy.calculate_delay(0) == 1.0
        assert policy.calculate_delay(1) == 2.0
        assert policy.calculate_delay(2) == 4.0
        # 1.0 * 2^3 = 8.0, capped
        assert policy.calculate_delay(3) == 5.0

    @pytest.mark.parametrize(
        "status_code,expected",
        [(500, True), (503, True), (529, True), (429, True), (400, False), (401, False), (404, False)],
    )
    def test_status_codes(self, status_code, expected):
        assert RetryPolicy().is_retryable(status_error(status_code)) is expected

    def test_network_errors_are_retryable(self):
        policy = RetryPolicy()
        assert policy.is_retryable(httpx.ConnectError("refused")) is True
        assert policy.is_retryable(httpx.ReadTimeout("slow")) is True
        assert policy.is_retryable(ValueError("bad")) is False


class TestWithRetryDecorator:
    """Test with_retry decorator functionality."""

    @pytest.mark.asyncio
    async def test_success_on_first_attempt(self):
        mock_func = AsyncMock(return_value="success")

        @with_retry()
        async def test_func():
            return await mock_func()

        assert await test_func() == "success"
        assert mock_func.call_count == 1

    @pytest.mark.asyncio
    async def test_retry_on_retryable_exception(self):
        mock_func = AsyncMock(side_effect=[httpx.NetworkError("Connection failed"), "success"])

        @with_retry(RetryPolicy(base_delay=0.01))
        async def test_func():
            return await mock_func()

        assert await test_func() == "success"
        assert mock_func.call_count == 2

    @pytest.mark.asyncio
    async def test_max_retries_exceeded(self):
        mock_func = AsyncMock(side_effect=httpx.NetworkError("Connection failed"))

        @with_retry(RetryPolicy(max_retries=2, base_delay=0.01))
        async def test_func():
            return await mock_func()

        with pytest.raises(httpx.NetworkError, match="Connection failed"):
            await test_func()

        # Initial attempt + 2 retries
        assert mock_func.call_count == 3

    @pytest.mark.asyncio
    async def test_no_retry_on_client_error(self):
        mock_func = AsyncMock(side_effect=status_error(401))

        @with_retry(RetryPolicy(base_delay=0.01))
        async def test_func():
            return await mock_func()

        with pytest.raises(httpx.HTTPStatusError):
            await test_func()

        assert mock_func.call_count == 1

    @pytest.mark.asyncio
    async def test_retry_on_overloaded(self):
        mock_func = AsyncMock(side_effect=[status_error(529), status_error(429), "success"])

        @with_retry(RetryPolicy(base_delay=0.01))
        async def test_func():
            return await mock_func()

        assert await test_func() == "success"
        assert mock_func.call_count == 3

    @pytest.mark.asyncio
    async def test_exponential_backoff_delay(self):
        sleep_calls = []

        async def mock_sleep(duration):
            sleep_calls.append(duration)

        mock_func = AsyncMock(side_effect=[
            httpx.NetworkError("Error 1"),
            httpx.NetworkError("Error 2"),
            "success",
        ])

        with patch("asyncio.sleep", mock_sleep):
            @with_retry(RetryPolicy(base_delay=0.5, exponential_base=2.0))
            async def test_func():
                return await mock_func()

            await test_func()

        assert sleep_calls == [0.5, 1.0]

    @pytest.mark.asyncio
    async def test_preserves_function_metadata(self):
        @with_retry()
        async def my_test_function():
            """My docstring."""
            return "test"

        assert my_test_function.__name__ == "my_test_function"
        assert my_test_function.__doc__ == "My docstring."


class TestRetryAfterHeader:
    def make_error(self, headers):
        request = httpx.Request("POST", "https://api.anthropic.test/v1/messages")
        response = httpx.Response(429, headers=headers, request=request)
        return httpx.HTTPStatusError("HTTP 429", request=request, response=response)

    def test_server_delay_is_used(self):
        policy = RetryPolicy(base_delay=0.5, max_delay=5.0)
        assert policy.delay_for(0, self.make_error({"retry-after": "2"})) == 2.0

    def test_server_delay_is_capped(self):
        policy = RetryPolicy(max_delay=5.0)
        assert policy.delay_for(0, self.make_error({"retry-after": "60"})) == 5.0

    def test_unparseable_header_uses_backoff(self):
        policy = RetryPolicy(base_delay=0.5)
        error = self.make_error({"retry-after": "Wed, 21 Oct 2026 07:28:00 GMT"})
        assert policy.delay_for(1, error) == 1.0

    def test_network_error_uses_backoff(self):
        policy = RetryPolicy(base_delay=0.5)
        assert policy.delay_for(2, httpx.ConnectError("refused")) == 2.0
