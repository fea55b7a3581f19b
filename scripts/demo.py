#!/usr/bin/env python3
"""
Demo script for the itinerary cache.

This script sends the same trip request twice and shows that the second
answer comes from the cache without another model call. It uses the
in-memory store, so only OPENAI_API_KEY needs to be set.
"""

import asyncio
import time

from itinerary_cache import (
    GenerationFailed,
    InMemoryItineraryRepository,
    ItineraryRequestEntity,
    ItineraryService,
    OpenAIGenerationBackend,
    derive_key,
    render_prompt,
)


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demo_prompt_and_key() -> None:
    """Show the rendered prompt and its cache key."""
    print_section("Prompt Rendering & Cache Key")

    request = ItineraryRequestEntity(destination="Kyoto", trip_length=3)
    prompt = render_prompt(request)

    print("\n📝 Prompt (defaults filled in):")
    for line in prompt.splitlines():
        print(f"  {line}")
    print(f"\n🔑 Key: {derive_key(prompt)}")

    same = ItineraryRequestEntity(destination="Kyoto", trip_length=3, budget="mid-range", pace="medium")
    print(f"  Same prompt with explicit defaults -> same key: {derive_key(render_prompt(same)) == derive_key(prompt)}")


async def demo_cache_hit(service: ItineraryService) -> None:
    """Fulfill one request twice and compare timings."""
    print_section("Cache Miss, Then Hit")

    request = ItineraryRequestEntity(
        destination="Lisbon",
        trip_length=2,
        preferences="seafood, viewpoints",
        budget="economy",
        pace="relaxed",
    )

    for attempt in (1, 2):
        start = time.time()
        result = await service.fulfill(request)
        elapsed_ms = (time.time() - start) * 1000
        source = "cache" if result.cached else "model"
        print(f"\n  Attempt {attempt}: {source} in {elapsed_ms:.0f} ms (id {result.id})")
        print(f"  {result.text[:120]}...")

    stats = service.get_stats()
    print(f"\n📊 hits={stats['cache_hits']} misses={stats['cache_misses']} model calls={stats['generation_calls']}")


async def main() -> None:
    """Run all demos."""
    print("\n🚀 Itinerary Cache Demo")
    print("=" * 70)

    demo_prompt_and_key()

    backend = OpenAIGenerationBackend.create()
    service = ItineraryService.create(repository=InMemoryItineraryRepository(), backend=backend)

    try:
        await demo_cache_hit(service)

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except GenerationFailed as e:
        print(f"\n❌ Error: {e}")
        print("\nMake sure OPENAI_API_KEY is set (or OPENAI_BASE_URL points at a compatible server).")
    finally:
        await backend.close()


if __name__ == "__main__":
    asyncio.run(main())
