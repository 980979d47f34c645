"""
Data models for catalog-enrich.

Completion envelopes returned by the endpoint, the typed results decoded from
a choice's text, and the product records read from the catalog store.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Task(str, Enum):
    """Kind of completion requested for a product description."""

    CLASSIFY = "classify"
    PARAMETERIZE = "parameterize"


@dataclass
class Choice:
    """One candidate completion returned by the endpoint."""

    text: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"text": self.text}


@dataclass
class CompletionEnvelope:
    """Outer completion response; only the first choice is ever used."""

    choices: list[Choice] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"choices": [c.to_dict() for c in self.choices]}

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False)


@dataclass
class ProductCategory:
    """Category chosen by the model for a product."""

    product_category: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"product_category": self.product_category}


@dataclass
class ProductParameter:
    """A single name/value attribute extracted from a description."""

    parameter_name: str
    parameter_value: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "parameter_name": self.parameter_name,
            "parameter_value": self.parameter_value,
        }


@dataclass
class ProductParametersResult:
    """
    Attributes extracted by the model.

    The prompt asks for at most 10 entries; the count is not enforced here.
    """

    product_parameters: list[ProductParameter] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"product_parameters": [p.to_dict() for p in self.product_parameters]}


@dataclass
class Product:
    """A product row from the catalog store."""

    id: str
    name: str
    marking: str | None = None
    parameters_text: str | None = None
    measure_unit_name: str | None = None
    okpd2_category_name: str | None = None

    def description(self) -> str:
        """Free-text description sent to the model."""
        parts = [self.name]
        if self.marking:
            parts.append(self.marking)
        if self.parameters_text:
            parts.append(self.parameters_text)
        return " ".join(p.strip() for p in parts if p and p.strip())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.marking:
            result["marking"] = self.marking
        if self.parameters_text:
            result["parameters_text"] = self.parameters_text
        if self.measure_unit_name:
            result["measure_unit_name"] = self.measure_unit_name
        if self.okpd2_category_name:
            result["okpd2_category_name"] = self.okpd2_category_name
        return result
