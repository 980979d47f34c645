"""
Response parsing for catalog-enrich.

The endpoint body is decoded in two layers: first the completion envelope,
then the JSON document the model wrote into the first choice's text. Only
structure is checked; the values themselves are returned as the model gave
them.
"""

import json
import logging
from typing import Any

from .errors import EmptyChoicesError, MalformedEnvelopeError, MalformedPayloadError
from .models import (
    Choice,
    CompletionEnvelope,
    ProductCategory,
    ProductParameter,
    ProductParametersResult,
    Task,
)

logger = logging.getLogger(__name__)


def parse_envelope(raw_body: str) -> CompletionEnvelope:
    """Decode the outer completion response."""
    try:
        data = json.loads(raw_body)
    except (TypeError, ValueError, RecursionError) as e:
        raise MalformedEnvelopeError(f"Response body is not valid JSON: {e}") from e

    if not isinstance(data, dict) or "choices" not in data:
        raise MalformedEnvelopeError("Response body has no 'choices' field")

    raw_choices = data["choices"]
    if not isinstance(raw_choices, list):
        raise MalformedEnvelopeError("'choices' is not a list")

    choices = []
    for i, raw_choice in enumerate(raw_choices):
        if not isinstance(raw_choice, dict) or not isinstance(raw_choice.get("text"), str):
            raise MalformedEnvelopeError(f"Choice {i} has no 'text' string")
        choices.append(Choice(text=raw_choice["text"]))

    return CompletionEnvelope(choices=choices)


def first_choice(envelope: CompletionEnvelope) -> Choice:
    """Select the choice to decode."""
    if not envelope.choices:
        raise EmptyChoicesError("Completion returned no choices")
    return envelope.choices[0]


def _load_payload(text: str, field_name: str) -> Any:
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise MalformedPayloadError(f"Choice text is not valid JSON: {e}") from e

    if not isinstance(data, dict) or field_name not in data:
        raise MalformedPayloadError(f"Choice text has no '{field_name}' field")
    return data[field_name]


def parse_category(text: str) -> ProductCategory:
    """Decode a classification payload."""
    value = _load_payload(text, "product_category")
    if not isinstance(value, str):
        raise MalformedPayloadError("'product_category' is not a string")
    return ProductCategory(product_category=value)


def parse_parameters(text: str) -> ProductParametersResult:
    """Decode a parameter extraction payload."""
    value = _load_payload(text, "product_parameters")
    if not isinstance(value, list):
        raise MalformedPayloadError("'product_parameters' is not a list")

    parameters = []
    for i, item in enumerate(value):
        if not isinstance(item, dict):
            raise MalformedPayloadError(f"Parameter {i} is not an object")
        name = item.get("parameter_name")
        val = item.get("parameter_value")
        if not isinstance(name, str) or not isinstance(val, str):
            raise MalformedPayloadError(
                f"Parameter {i} needs string 'parameter_name' and 'parameter_value'"
            )
        parameters.append(ProductParameter(parameter_name=name, parameter_value=val))

    return ProductParametersResult(product_parameters=parameters)


def parse_response(task: Task, raw_body: str) -> str | list[ProductParameter]:
    """
    Parse a completion response body for a task.

    Args:
        task: Task the request was built for
        raw_body: Body text returned by the endpoint

    Returns:
        The category string for CLASSIFY, the ordered parameter list for
        PARAMETERIZE

    Raises:
        MalformedEnvelopeError: body is not a completion envelope
        EmptyChoicesError: envelope has no choices
        MalformedPayloadError: first choice does not match the task schema
    """
    envelope = parse_envelope(raw_body)
    choice = first_choice(envelope)
    logger.debug(f"Parsing {Task(task).value} payload: {choice.text[:200]}")

    if Task(task) is Task.CLASSIFY:
        return parse_category(choice.text).product_category
    return parse_parameters(choice.text).product_parameters
