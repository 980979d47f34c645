"""
Configuration for catalog-enrich.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_SECTION = "catalog_enrich"


@dataclass
class LLMConfig:
    """Completion endpoint configuration."""

    model: str = "llama3.1:8b"
    endpoint_url: str = "http://localhost:11434/v1/completions"
    api_key: str | None = None
    api_key_env: str | None = None
    timeout_seconds: float | None = None  # None: transport default

    def get_api_key(self) -> str | None:
        """Get API key from config or environment."""
        if self.api_key:
            return self.api_key
        if self.api_key_env:
            return os.environ.get(self.api_key_env)
        return None


@dataclass
class CatalogConfig:
    """Catalog store configuration."""

    db_path: Path = field(default_factory=lambda: Path("catalog.db"))
    start_index: int = 0
    page_size: int = 5


@dataclass
class EnrichConfig:
    """Complete catalog-enrich configuration."""

    max_concurrency: int = 4

    llm: LLMConfig = field(default_factory=LLMConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EnrichConfig":
        """Create config from a dictionary (e.g., from YAML)."""
        config = cls()

        if "max_concurrency" in data:
            config.max_concurrency = data["max_concurrency"]

        if "llm" in data:
            llm = data["llm"]
            config.llm = LLMConfig(
                model=llm.get("model", config.llm.model),
                endpoint_url=llm.get("endpoint_url", config.llm.endpoint_url),
                api_key=llm.get("api_key"),
                api_key_env=llm.get("api_key_env"),
                timeout_seconds=llm.get("timeout_seconds"),
            )

        if "catalog" in data:
            catalog = data["catalog"]
            config.catalog = CatalogConfig(
                db_path=Path(catalog.get("db_path", "catalog.db")),
                start_index=catalog.get("start_index", 0),
                page_size=catalog.get("page_size", 5),
            )

        return config

    @classmethod
    def from_yaml(cls, path: Path) -> "EnrichConfig":
        """Load config from the `catalog_enrich` section of a YAML file."""
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data.get(CONFIG_SECTION, {}) or {})

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for JSON serialization."""
        return {
            "max_concurrency": self.max_concurrency,
            "llm": {
                "model": self.llm.model,
                "endpoint_url": self.llm.endpoint_url,
                "timeout_seconds": self.llm.timeout_seconds,
            },
            "catalog": {
                "db_path": str(self.catalog.db_path),
                "start_index": self.catalog.start_index,
                "page_size": self.catalog.page_size,
            },
        }
