"""
Errors raised by the completion client.

Every failed call surfaces exactly one of these; nothing is retried or
replaced with a default value.
"""


class EnrichmentError(Exception):
    """Base class for completion client failures."""


class TransportError(EnrichmentError):
    """Non-2xx response or network-level failure."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedEnvelopeError(EnrichmentError):
    """Response body is not a completion envelope."""


class EmptyChoicesError(EnrichmentError):
    """Envelope contains no choices."""


class MalformedPayloadError(EnrichmentError):
    """A choice's text does not satisfy the task schema."""
