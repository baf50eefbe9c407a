from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from claudle.app.exceptions import ProviderError


class BaseProvider(ABC):
    """Base class for LLM providers.

    Subclasses can accept an external httpx.AsyncClient for connection pooling,
    or create their own per request if not provided.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0
    ):
        """Initialize the provider.

        Args:
            base_url: The API base URL
            api_key: The API key for authentication
            model: Model identifier sent with every request
            http_client: Optional shared HTTP client for connection pooling
            timeout: Request timeout in seconds
        """
        self._http_client = http_client
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    @property
    def http_client(self) -> Optional[httpx.AsyncClient]:
        return self._http_client

    @asynccontextmanager
    async def _client_context(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the shared client, or a per-request client that is closed afterwards."""
        if self._http_client is not None:
            yield self._http_client
            return

        client = httpx.AsyncClient(timeout=self.timeout)
        try:
            yield client
        finally:
            await client.aclose()

    def _get_endpoint_url(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint}"

    def build_payload(self, prompt: str, max_tokens: int) -> Dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

    async def complete(self, prompt: str, max_tokens: int = 150) -> str:
        """Send a single user prompt and return the stripped text reply.

        Raises:
            ProviderError: If the reply carries no text block
        """
        response = await self.create_message(self.build_payload(prompt, max_tokens))
        for block in response.get("content") or []:
            if block.get("type") == "text":
                return str(block.get("text", "")).strip()
        raise ProviderError("Provider reply contained no text content")

    @abstractmethod
    async def create_message(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Send a non-streaming message request.

        Args:
            payload: The request payload containing model, messages, etc.

        Returns:
            The JSON response from the API
        """
        pass

    @abstractmethod
    async def health_check(self, timeout: float = 2.0) -> bool:
        """Return True when the provider answers a lightweight request."""
        pass
