"""
catalog-enrich: LLM-powered product catalog enrichment.

Classifies free-text product descriptions and extracts their main
parameters through an OpenAI-compatible completion endpoint.
"""

from .client import CatalogModelClient, CompletionClient
from .errors import (
    EmptyChoicesError,
    EnrichmentError,
    MalformedEnvelopeError,
    MalformedPayloadError,
    TransportError,
)
from .models import ProductParameter, Task
from .parser import parse_response
from .prompts import build_request

__version__ = "0.1.0"

__all__ = [
    "CatalogModelClient",
    "CompletionClient",
    "EmptyChoicesError",
    "EnrichmentError",
    "MalformedEnvelopeError",
    "MalformedPayloadError",
    "ProductParameter",
    "Task",
    "TransportError",
    "build_request",
    "parse_response",
]
