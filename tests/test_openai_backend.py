"""
Tests for the OpenAI generation backend using httpx's mock transport.
"""

import asyncio
import json

import httpx
import pytest

from itinerary_cache.entities import ItineraryRequestEntity
from itinerary_cache.errors import BackendError, GenerationFailed
from itinerary_cache.prompts import SYSTEM_PROMPT
from itinerary_cache.repositories import InMemoryItineraryRepository, OpenAIGenerationBackend
from itinerary_cache.services import ItineraryService


def make_backend(handler, **kwargs) -> OpenAIGenerationBackend:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OpenAIGenerationBackend(
        api_key="sk-test",
        model_name="gpt-4o",
        base_url="https://llm.test/v1/",
        temperature=0.7,
        max_tokens=800,
        client=client,
        **kwargs,
    )


def completion(content):
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


def test_generate_sends_chat_completion_request():
    """The request carries the system instruction, prompt and fixed parameters."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=completion("Day 1: Fushimi Inari"))

    text = asyncio.run(make_backend(handler).generate("Create a 3-day travel itinerary for Kyoto."))

    assert text == "Day 1: Fushimi Inari"
    assert seen["url"] == "https://llm.test/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"] == {
        "model": "gpt-4o",
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": "Create a 3-day travel itinerary for Kyoto."},
        ],
        "temperature": 0.7,
        "max_tokens": 800,
    }


@pytest.mark.parametrize("body", [{"choices": []}, {}, completion(None)])
def test_generate_returns_empty_string_without_content(body):
    """Missing content is an empty itinerary, not an error."""
    backend = make_backend(lambda request: httpx.Response(200, json=body))
    assert asyncio.run(backend.generate("prompt")) == ""


def test_generate_error_status_raises_backend_error():
    """Non-2xx responses carry their status and body."""
    backend = make_backend(lambda request: httpx.Response(429, text="Rate limit reached"))

    with pytest.raises(BackendError) as exc_info:
        asyncio.run(backend.generate("prompt"))

    assert exc_info.value.status == 429
    assert exc_info.value.detail == "Rate limit reached"


def test_generate_transport_error_raises_backend_error():
    """Connection failures become BackendError without a status."""

    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BackendError) as exc_info:
        asyncio.run(make_backend(handler).generate("prompt"))

    assert exc_info.value.status is None
    assert "connection refused" in exc_info.value.detail


def test_generate_timeout_raises_backend_error():
    """Timeouts are reported as generation failures."""

    def handler(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(BackendError) as exc_info:
        asyncio.run(make_backend(handler, timeout=5.0).generate("prompt"))

    assert "timed out after 5.0s" in exc_info.value.detail


def test_generate_non_json_body_raises_backend_error():
    """A 200 with an unparseable body is a backend error."""
    backend = make_backend(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(BackendError):
        asyncio.run(backend.generate("prompt"))


@pytest.mark.parametrize(
    "body",
    [
        {"choices": ["oops"]},
        {"choices": {"a": 1}},
        {"choices": [{"message": "hi"}]},
        completion([{"type": "text", "text": "Day 1"}]),
        ["not", "an", "object"],
    ],
)
def test_generate_wrong_shape_raises_backend_error(body):
    """A 200 whose body is not a chat completion is a backend error."""
    backend = make_backend(lambda request: httpx.Response(200, json=body))

    with pytest.raises(BackendError) as exc_info:
        asyncio.run(backend.generate("prompt"))

    assert exc_info.value.status == 200
    assert "Unexpected response format" in exc_info.value.detail


def test_wrong_shape_fails_fulfill_as_generation_failed():
    """A malformed completion surfaces from the service as GenerationFailed, with nothing stored."""
    store = InMemoryItineraryRepository()
    backend = make_backend(lambda request: httpx.Response(200, json={"choices": ["oops"]}))
    service = ItineraryService.create(repository=store, backend=backend)

    with pytest.raises(GenerationFailed):
        asyncio.run(service.fulfill(ItineraryRequestEntity(destination="Kyoto", trip_length=3)))

    assert len(store) == 0


def test_is_available():
    """Availability follows the model listing endpoint."""

    def handler(request):
        if request.headers.get("Authorization") == "Bearer sk-test":
            return httpx.Response(200, json={"data": []})
        return httpx.Response(401)

    assert asyncio.run(make_backend(handler).is_available()) is True

    def down(request):
        raise httpx.ConnectError("down", request=request)

    assert asyncio.run(make_backend(down).is_available()) is False


def test_close_releases_client():
    """close() drops the HTTP client so it is rebuilt lazily."""
    backend = make_backend(lambda request: httpx.Response(200, json=completion("x")))
    asyncio.run(backend.close())
    assert backend._client is None
    assert backend.model_name == "gpt-4o"
