"""
Completion request construction for catalog-enrich.

Each task has a fixed instruction prefix, sampling settings, and a JSON
Schema describing the single top-level field the model must return.
"""

import copy
import json
from dataclasses import dataclass
from typing import Any

from .models import Task

SCHEMA_LANGUAGE = "ru"
DEFAULT_MAX_TOKENS = 512


@dataclass
class SchemaSpec:
    """JSON Schema constraint attached to a completion request."""

    name: str
    schema: dict[str, Any]
    strict: bool = True
    language: str = SCHEMA_LANGUAGE

    @property
    def required(self) -> list[str]:
        return list(self.schema.get("required", []))

    def to_dict(self) -> dict[str, Any]:
        """Convert to the `response_format` wire shape."""
        return {
            "type": "json_schema",
            "json_schema": {
                "name": self.name,
                "strict": self.strict,
                "language": self.language,
                "schema": self.schema,
            },
        }


@dataclass
class CompletionRequest:
    """Payload POSTed to the completion endpoint."""

    model: str
    prompt: str
    max_tokens: int
    response_format: SchemaSpec
    temperature: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "model": self.model,
            "prompt": self.prompt,
            "max_tokens": self.max_tokens,
            "response_format": self.response_format.to_dict(),
            "temperature": self.temperature,
        }

    def to_json(self) -> str:
        """Serialize to JSON string (non-ASCII kept as is)."""
        return json.dumps(self.to_dict(), ensure_ascii=False)


@dataclass(frozen=True)
class TaskTemplate:
    """Fixed per-task request settings."""

    prefix: str
    temperature: float
    schema_name: str
    field_name: str
    field_schema: dict[str, Any]
    max_tokens: int = DEFAULT_MAX_TOKENS

    def schema_spec(self) -> SchemaSpec:
        return SchemaSpec(
            name=self.schema_name,
            schema={
                "type": "object",
                "properties": {self.field_name: copy.deepcopy(self.field_schema)},
                "required": [self.field_name],
            },
        )


TEMPLATES: dict[Task, TaskTemplate] = {
    Task.CLASSIFY: TaskTemplate(
        prefix="Выбери общую категорию для продукта: ",
        temperature=0.9,
        schema_name="product_category_response",
        field_name="product_category",
        field_schema={"type": "string"},
    ),
    Task.PARAMETERIZE: TaskTemplate(
        prefix="Укажи список основных параметров (не более 10) этого продукта: ",
        temperature=0.6,
        schema_name="product_parameters_response",
        field_name="product_parameters",
        field_schema={
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "parameter_name": {"type": "string"},
                    "parameter_value": {"type": "string"},
                },
            },
        },
    ),
}


def build_request(task: Task, model_id: str, text: str) -> CompletionRequest:
    """
    Build the completion request for a task.

    Args:
        task: Which completion to ask for
        model_id: API identifier of the model
        text: Product description, embedded verbatim after the task prefix

    Returns:
        CompletionRequest ready to be sent
    """
    template = TEMPLATES[Task(task)]
    return CompletionRequest(
        model=model_id,
        prompt=template.prefix + text,
        max_tokens=template.max_tokens,
        response_format=template.schema_spec(),
        temperature=template.temperature,
    )
