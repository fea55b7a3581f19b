"""OpenAI-based generation backend.

Calls the chat completions endpoint of OpenAI, or of any server exposing the
same API, with a fixed system instruction and fixed sampling parameters.

Requirements:
    - OPENAI_API_KEY set in the environment (or .env)
    - OPENAI_BASE_URL pointing at a compatible server when not using OpenAI

Key features:
- Single request/response exchange, no streaming
- No retries; every failure surfaces as BackendError
- Output bounded by max_tokens
"""

import logging

import httpx

from itinerary_cache.config import settings
from itinerary_cache.errors import BackendError
from itinerary_cache.prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class OpenAIGenerationBackend:
    """OpenAI chat-completions implementation of GenerationBackend protocol.

    This class satisfies the GenerationBackend protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        backend = OpenAIGenerationBackend.create(model_name="gpt-4o")
        text = await backend.generate("Create a 3-day travel itinerary for Kyoto. ...")
        await backend.close()
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        model_name: str | None = None,
        base_url: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the OpenAI generation backend.

        Args:
            api_key: Bearer token. Defaults to settings.openai_api_key.
            model_name: Chat model. Defaults to settings.generation_model.
            base_url: API root. Defaults to settings.openai_base_url.
            temperature: Sampling temperature. Defaults to settings.
            max_tokens: Output ceiling. Defaults to settings.
            timeout: Request timeout in seconds. Defaults to settings.
            client: Pre-built async HTTP client (mainly for tests).
        """
        self._api_key = api_key or settings.openai_api_key
        self._model_name = model_name or settings.generation_model
        self._base_url = (base_url or settings.openai_base_url).rstrip("/")
        self._temperature = settings.generation_temperature if temperature is None else temperature
        self._max_tokens = max_tokens or settings.generation_max_tokens
        self._timeout = timeout or settings.generation_timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @classmethod
    def create(
        cls,
        model_name: str | None = None,
        base_url: str | None = None,
    ) -> "OpenAIGenerationBackend":
        """Factory method to create OpenAIGenerationBackend with defaults.

        Args:
            model_name: Chat model. If None, uses settings.
            base_url: API root. If None, uses settings.

        Returns:
            Configured OpenAIGenerationBackend
        """
        return cls(model_name=model_name, base_url=base_url)

    @property
    def model_name(self) -> str:
        """Get the model name/identifier."""
        return self._model_name

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def generate(self, prompt: str) -> str:
        """Generate itinerary text for a prompt.

        Args:
            prompt: The rendered user prompt

        Returns:
            The content of the first choice, or "" when the model returned none

        Raises:
            BackendError: On a non-2xx status, transport fault, timeout or
                a body that is not a chat completion
        """
        url = f"{self._base_url}/chat/completions"
        payload = {
            "model": self._model_name,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }

        try:
            response = await self.client.post(url, json=payload, headers=self._headers())
        except httpx.TimeoutException as e:
            raise BackendError(f"Generation request timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise BackendError(f"Generation request failed: {e}") from e

        if response.is_error:
            raise BackendError(response.text or response.reason_phrase, status=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise BackendError("Generation response is not JSON", status=response.status_code) from e

        return self._extract_content(data, response.status_code)

    @staticmethod
    def _extract_content(data: object, status: int | None = None) -> str:
        """Pull the first choice's text out of a chat completion body.

        A body without choices or without content is an empty itinerary.
        Any other shape is a backend error.
        """
        if not isinstance(data, dict):
            raise BackendError(f"Unexpected response format: {data!r}", status=status)

        choices = data.get("choices")
        if choices is None:
            return ""
        if not isinstance(choices, list):
            raise BackendError(f"Unexpected response format: choices is {type(choices).__name__}", status=status)
        if not choices:
            return ""

        choice = choices[0]
        if not isinstance(choice, dict):
            raise BackendError(f"Unexpected response format: choice is {type(choice).__name__}", status=status)

        message = choice.get("message")
        if message is None:
            return ""
        if not isinstance(message, dict):
            raise BackendError(f"Unexpected response format: message is {type(message).__name__}", status=status)

        content = message.get("content")
        if content is None:
            return ""
        if not isinstance(content, str):
            raise BackendError(f"Unexpected response format: content is {type(content).__name__}", status=status)
        return content

    async def is_available(self) -> bool:
        """Check if the backend answers a model listing request.

        Returns:
            True if the API is reachable and accepts the key, False otherwise
        """
        try:
            response = await self.client.get(f"{self._base_url}/models", headers=self._headers())
            return response.is_success
        except httpx.HTTPError as e:
            logger.debug("Generation backend unreachable: %s", e)
            return False

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
