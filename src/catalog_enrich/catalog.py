"""
Catalog store access for catalog-enrich.

The enrichment run reads product pages from the store and writes the model's
category back as the product group. The SQLite store reads the existing
material catalog tables (products, OKPD2 classifier, measurement units);
it does not create them.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from pathlib import Path

from .models import Product

logger = logging.getLogger(__name__)

PRODUCTS_QUERY = """
    SELECT
        m."код СКМТР" AS id,
        m."Наименование" AS name,
        m."Маркировка" AS marking,
        m."Параметры" AS parameters_text,
        u."Наименование" AS measure_unit_name,
        o."OKPD2_NAME" AS okpd2_category_name
    FROM "MTR" m
    LEFT JOIN "OKPD_2" o ON m."ОКПД2" = o."OKPD2"
    LEFT JOIN "ED_IZM" u ON m."Базисная Единица измерения" = u."Код ЕИ"
    ORDER BY m.rowid
    LIMIT ? OFFSET ?
"""

UPDATE_GROUP_QUERY = 'UPDATE "MTR" SET "Группа" = ? WHERE "код СКМТР" = ?'


class CatalogStore(ABC):
    """Product catalog consumed by the enrichment run."""

    @abstractmethod
    def fetch_products(self, start_index: int = 0, page_size: int = 5) -> list[Product]:
        """Get a page of products in stable order."""

    @abstractmethod
    def update_group(self, product_id: str, group_value: str) -> bool:
        """Store the group for a product. Returns False if no row matched."""


class SqliteCatalogStore(CatalogStore):
    """Catalog store backed by a SQLite copy of the material catalog."""

    def __init__(self, db_path: Path):
        self.db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def fetch_products(self, start_index: int = 0, page_size: int = 5) -> list[Product]:
        """Get `page_size` products starting at `start_index`.

        Rows without a product id are skipped; they cannot be written back.
        """
        conn = self._connect()
        try:
            cursor = conn.execute(PRODUCTS_QUERY, (page_size, start_index))
            rows = [dict(row) for row in cursor.fetchall()]
        finally:
            conn.close()

        products = []
        for row in rows:
            if row["id"] is None:
                logger.warning(f"Skipping catalog row without id: {row['name']!r}")
                continue
            row["id"] = str(row["id"])
            products.append(Product(**row))
        return products

    def update_group(self, product_id: str, group_value: str) -> bool:
        """Write the product group; values are bound, never interpolated."""
        conn = self._connect()
        try:
            cursor = conn.execute(UPDATE_GROUP_QUERY, (group_value, product_id))
            conn.commit()
            updated = cursor.rowcount != 0
        finally:
            conn.close()

        if not updated:
            logger.warning(f"No product row matched id {product_id}")
        return updated
