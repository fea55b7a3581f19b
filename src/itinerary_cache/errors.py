"""Error taxonomy for itinerary requests.

Only two errors ever reach a caller of ``ItineraryService.fulfill``:
``InvalidRequest`` (bad input, 4xx) and ``GenerationFailed`` (backend failure,
5xx). ``StoreUnavailable`` is recovered inside the service on the fulfill path
and only surfaces from direct store reads such as lookup by id.
"""


class ItineraryError(Exception):
    """Base class for all itinerary cache errors."""


class InvalidRequest(ItineraryError):
    """The request is malformed and was rejected before any I/O."""


class StoreUnavailable(ItineraryError):
    """The result store could not be reached or returned malformed data."""


class BackendError(ItineraryError):
    """A generation backend returned an error or could not be reached.

    Attributes:
        status: HTTP status returned by the backend, or None for transport faults
        detail: Diagnostic text from the backend or the transport layer
    """

    def __init__(self, detail: str, status: int | None = None) -> None:
        super().__init__(f"[{status}] {detail}" if status is not None else detail)
        self.status = status
        self.detail = detail


class GenerationFailed(ItineraryError):
    """Itinerary generation failed; no result is available for the request."""

    def __init__(self, detail: str, status: int | None = None) -> None:
        super().__init__(detail)
        self.status = status
        self.detail = detail
