"""Prompt rendering for itinerary generation.

The rendered prompt is the only input to cache key derivation, so any change to
the template below changes every cache key.
"""

from itinerary_cache.entities import ItineraryRequestEntity

SYSTEM_PROMPT = "You are a helpful travel itinerary planner."

DEFAULT_PREFERENCES = "no specific preferences"
DEFAULT_BUDGET = "mid-range"
DEFAULT_PACE = "medium"

PROMPT_TEMPLATE = (
    "Create a {trip_length}-day travel itinerary for {destination}.\n"
    "Preferences: {preferences}. Budget: {budget}. Pace: {pace}.\n"
    "Provide daily destinations, activities, and notable restaurants in JSON format."
)


def _or_default(value: str, default: str) -> str:
    return value or default


def render_prompt(request: ItineraryRequestEntity) -> str:
    """Render the user prompt for a request.

    Empty preferences, budget and pace fall back to their defaults.
    Whitespace-only values are kept as given. Never raises.

    Args:
        request: The itinerary request (validated or not)

    Returns:
        The prompt text sent to the generation backend
    """
    return PROMPT_TEMPLATE.format(
        trip_length=request.trip_length,
        destination=request.destination,
        preferences=_or_default(request.preferences, DEFAULT_PREFERENCES),
        budget=_or_default(request.budget, DEFAULT_BUDGET),
        pace=_or_default(request.pace, DEFAULT_PACE),
    )
