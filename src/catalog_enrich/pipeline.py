"""
Batch enrichment for catalog-enrich.

Classifies a page of catalog products and writes each category back to the
store as the product group. A failure on one product is recorded in the
summary and does not stop the rest of the page.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any

from .catalog import CatalogStore, SqliteCatalogStore
from .client import CatalogModelClient
from .config import EnrichConfig
from .errors import EnrichmentError
from .models import Product

logger = logging.getLogger(__name__)


@dataclass
class ProductResult:
    """Outcome of enriching a single product."""

    product_id: str
    category: str | None = None
    updated: bool = False
    skipped: bool = False
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result: dict[str, Any] = {"product_id": self.product_id, "updated": self.updated}
        if self.category is not None:
            result["category"] = self.category
        if self.skipped:
            result["skipped"] = True
        if self.error:
            result["error"] = self.error
        return result


@dataclass
class EnrichmentSummary:
    """Counts and per-product outcomes for one page."""

    processed: int = 0
    errored: int = 0
    skipped: int = 0
    results: list[ProductResult] = field(default_factory=list)

    def add(self, result: ProductResult) -> None:
        self.results.append(result)
        if result.skipped:
            self.skipped += 1
        elif result.error:
            self.errored += 1
        else:
            self.processed += 1

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "processed": self.processed,
            "errored": self.errored,
            "skipped": self.skipped,
            "results": [r.to_dict() for r in self.results],
        }

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False)


async def enrich_product(
    product: Product,
    client: CatalogModelClient,
    store: CatalogStore,
) -> ProductResult:
    """Classify one product and store its group."""
    text = product.description()
    if not text:
        logger.info(f"Skipping product {product.id}: empty description")
        return ProductResult(product_id=product.id, skipped=True)

    try:
        category = await client.classify(text)
    except EnrichmentError as e:
        logger.warning(f"Classification failed for product {product.id}: {e}")
        return ProductResult(product_id=product.id, error=f"{type(e).__name__}: {e}")
    except Exception as e:
        logger.exception(f"Unexpected error classifying product {product.id}")
        return ProductResult(product_id=product.id, error=str(e))

    try:
        updated = store.update_group(product.id, category)
    except Exception as e:
        logger.exception(f"Error storing group for product {product.id}")
        return ProductResult(product_id=product.id, category=category, error=str(e))

    logger.debug(f"Product {product.id} -> {category!r} (updated={updated})")
    return ProductResult(product_id=product.id, category=category, updated=updated)


async def enrich_products(
    store: CatalogStore,
    client: CatalogModelClient,
    start_index: int = 0,
    page_size: int = 5,
    max_concurrency: int = 4,
) -> EnrichmentSummary:
    """
    Enrich one page of products.

    Args:
        store: Catalog store to read products from and write groups to
        client: Model client used for classification
        start_index: Index of the first product in the page
        page_size: Number of products to fetch
        max_concurrency: Maximum classification calls in flight

    Returns:
        EnrichmentSummary with results in catalog order
    """
    products = store.fetch_products(start_index, page_size)
    logger.info(f"Fetched {len(products)} product(s) starting at {start_index}")

    semaphore = asyncio.Semaphore(max(1, max_concurrency))

    async def _bounded(product: Product) -> ProductResult:
        async with semaphore:
            return await enrich_product(product, client, store)

    results = await asyncio.gather(*(_bounded(p) for p in products))

    summary = EnrichmentSummary()
    for result in results:
        summary.add(result)

    logger.info(
        f"Page at {start_index} complete: {summary.processed} processed, "
        f"{summary.errored} errors, {summary.skipped} skipped"
    )
    return summary


async def run_enrichment(config: EnrichConfig) -> EnrichmentSummary:
    """Enrich the configured page using the configured store and model."""
    store = SqliteCatalogStore(config.catalog.db_path)
    client = CatalogModelClient.from_config(config.llm)
    return await enrich_products(
        store,
        client,
        start_index=config.catalog.start_index,
        page_size=config.catalog.page_size,
        max_concurrency=config.max_concurrency,
    )
