from typing import Any, Dict, Optional

import httpx

from claudle.app.exceptions import MissingApiKeyError
from claudle.app.providers.base import BaseProvider
from claudle.app.providers.retry import RetryPolicy, with_retry


class AnthropicProvider(BaseProvider):
    """Anthropic Messages API provider with shared HTTP client support.

    The API key is checked at call time rather than construction so the
    app can start without one and serve fallback replies.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
        api_version: str = "2023-06-01",
    ):
        super().__init__(base_url, api_key, model, http_client, timeout)
        self.api_version = api_version

    def _build_headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
            "content-type": "application/json",
        }

    def check_api_key(self) -> None:
        if not self.api_key:
            raise MissingApiKeyError()

    @with_retry(RetryPolicy())
    async def create_message(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Send a non-streaming Messages API request.

        Raises:
            MissingApiKeyError: If no API key is configured
            httpx.HTTPStatusError: If the API returns an error
        """
        self.check_api_key()
        url = self._get_endpoint_url("/messages")

        async with self._client_context() as client:
            resp = await client.post(
                url, headers=self._build_headers(), json=payload, timeout=self.timeout
            )
            resp.raise_for_status()
            return resp.json()

    async def health_check(self, timeout: float = 2.0) -> bool:
        """Calls the /models endpoint with a short timeout."""
        if not self.api_key:
            return False
        try:
            async with self._client_context() as client:
                resp = await client.get(
                    self._get_endpoint_url("/models"),
                    headers=self._build_headers(),
                    timeout=timeout,
                )
                return resp.status_code == 200
        except httpx.HTTPError:
            return False
