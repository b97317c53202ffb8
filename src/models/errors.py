# src/models/errors.py

"""Typed failures raised along the fetch → extract → assemble path.

Every error carries a ``kind`` (the value reported to clients as
``{"error": kind}``) and the HTTP ``status`` it maps to. Upstream-sourced
faults (bad markup, unreachable storefront) map to 502, faults inside
this service to 500.
"""


class ExtractionError(Exception):
    """Base class for all per-request failures."""

    kind: str = "ExtractionError"
    status: int = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.kind)
        self.message = message or self.kind


class FetchError(ExtractionError):
    """Upstream document could not be retrieved."""

    kind = "FetchError"
    status = 502


class MalformedPrice(ExtractionError):
    """Price text does not match the currency-suffixed numeric shape."""

    kind = "MalformedPrice"
    status = 502


class MissingIdentifier(ExtractionError):
    """An id could not be parsed out of a URL fragment."""

    kind = "MissingIdentifier"
    status = 502


class SerializationError(ExtractionError):
    """A response payload could not be JSON-encoded."""

    kind = "SerializationError"
    status = 500


class InvalidRequest(ExtractionError):
    """The caller supplied an unusable identifier."""

    kind = "InvalidRequest"
    status = 400


class ProductNotFound(ExtractionError):
    """The detail page matched neither the product nor its gallery."""

    kind = "ProductNotFound"
    status = 404
