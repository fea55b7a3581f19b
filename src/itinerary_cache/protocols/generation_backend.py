"""Generation backend protocol.

Defines the interface for any text-generation service that turns a rendered
prompt into itinerary text in a single request/response exchange.

Implementations can include:
- OpenAI chat completions (default)
- Any OpenAI-compatible endpoint (Azure OpenAI, vLLM, Ollama's /v1 API)
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class GenerationBackend(Protocol):
    """Protocol for text-generation services.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.
    """

    @property
    def model_name(self) -> str:
        """Return the name/identifier of the model.

        Returns:
            Model name or identifier
        """
        ...

    async def generate(self, prompt: str) -> str:
        """Generate itinerary text for a prompt.

        Args:
            prompt: The rendered user prompt

        Returns:
            The generated text (may be empty)

        Raises:
            BackendError: On a non-success response, transport fault or timeout
        """
        ...

    async def is_available(self) -> bool:
        """Check if the backend is reachable.

        Returns:
            True if available, False otherwise
        """
        ...

    async def close(self) -> None:
        """Release any network resources held by the backend."""
        ...
