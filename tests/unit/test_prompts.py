"""Tests for completion request construction."""

import json

import pytest

from catalog_enrich.models import Task
from catalog_enrich.prompts import SchemaSpec, build_request


class TestBuildRequest:
    """Test build_request for each task."""

    @pytest.mark.parametrize(
        "task,required",
        [
            (Task.CLASSIFY, ["product_category"]),
            (Task.PARAMETERIZE, ["product_parameters"]),
        ],
    )
    def test_required_field_per_task(self, task, required):
        """Schema should require exactly the task's field."""
        request = build_request(task, "model-1", "Болт М12")
        assert request.response_format.schema["required"] == required
        assert list(request.response_format.schema["properties"]) == required

    def test_classify_settings(self):
        """Classify should use its prefix, token limit and temperature."""
        request = build_request(Task.CLASSIFY, "model-1", "Болт М12")

        assert request.model == "model-1"
        assert request.prompt == "Выбери общую категорию для продукта: Болт М12"
        assert request.max_tokens == 512
        assert request.temperature == 0.9
        assert request.response_format.name == "product_category_response"
        assert request.response_format.schema["properties"]["product_category"] == {
            "type": "string"
        }

    def test_parameterize_settings(self):
        """Parameterize should use its prefix and item schema."""
        request = build_request(Task.PARAMETERIZE, "model-1", "Болт М12")

        assert request.prompt == (
            "Укажи список основных параметров (не более 10) этого продукта: Болт М12"
        )
        assert request.max_tokens == 512
        assert request.temperature == 0.6
        items = request.response_format.schema["properties"]["product_parameters"]["items"]
        assert items["properties"] == {
            "parameter_name": {"type": "string"},
            "parameter_value": {"type": "string"},
        }

    def test_empty_text_passed_through(self):
        """Empty descriptions are not rejected."""
        request = build_request(Task.CLASSIFY, "model-1", "")
        assert request.prompt == "Выбери общую категорию для продукта: "

    def test_text_embedded_verbatim(self):
        """Text should follow the prefix unchanged."""
        text = '  "quoted" {braces}\nnew line  '
        request = build_request(Task.PARAMETERIZE, "m", text)
        assert request.prompt.endswith(text)

    def test_builds_are_independent(self):
        """Each build should own its schema dict."""
        first = build_request(Task.CLASSIFY, "m", "a")
        first.response_format.schema["required"].append("extra")
        second = build_request(Task.CLASSIFY, "m", "b")
        assert second.response_format.schema["required"] == ["product_category"]


class TestWireFormat:
    """Test the serialized request shape."""

    def test_to_dict(self):
        """Should serialize response_format as a json_schema block."""
        data = build_request(Task.CLASSIFY, "model-1", "x").to_dict()

        assert set(data) == {"model", "prompt", "max_tokens", "response_format", "temperature"}
        assert data["response_format"]["type"] == "json_schema"
        block = data["response_format"]["json_schema"]
        assert block["name"] == "product_category_response"
        assert block["strict"] is True
        assert block["language"] == "ru"
        assert block["schema"]["type"] == "object"

    def test_to_json_keeps_cyrillic(self):
        """JSON output should keep non-ASCII text readable."""
        json_str = build_request(Task.CLASSIFY, "m", "Гайка").to_json()
        assert "Гайка" in json_str
        assert json.loads(json_str)["prompt"].endswith("Гайка")

    def test_schema_spec_required(self):
        """SchemaSpec.required should mirror the schema."""
        spec = SchemaSpec(name="n", schema={"type": "object", "required": ["a"]})
        assert spec.required == ["a"]
