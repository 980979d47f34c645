"""Shared pytest fixtures for catalog-enrich tests."""

import sqlite3

import pytest

CATALOG_SCHEMA = """
    CREATE TABLE "OKPD_2" (
        "OKPD2" TEXT PRIMARY KEY,
        "OKPD2_NAME" TEXT
    );

    CREATE TABLE "ED_IZM" (
        "Код ЕИ" TEXT PRIMARY KEY,
        "Наименование" TEXT
    );

    CREATE TABLE "MTR" (
        "код СКМТР" TEXT PRIMARY KEY,
        "Наименование" TEXT NOT NULL,
        "Маркировка" TEXT,
        "Параметры" TEXT,
        "Базисная Единица измерения" TEXT,
        "ОКПД2" TEXT,
        "Группа" TEXT
    );
"""


def seed_product(
    db_path,
    product_id: str,
    name: str,
    marking: str | None = None,
    parameters: str | None = None,
    unit_code: str | None = "796",
    okpd2: str | None = "25.94.11",
) -> None:
    """Insert a product row."""
    conn = sqlite3.connect(db_path)
    conn.execute(
        """
        INSERT INTO "MTR" ("код СКМТР", "Наименование", "Маркировка", "Параметры",
                           "Базисная Единица измерения", "ОКПД2")
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (product_id, name, marking, parameters, unit_code, okpd2),
    )
    conn.commit()
    conn.close()


def read_group(db_path, product_id: str) -> str | None:
    """Read the stored group for a product."""
    conn = sqlite3.connect(db_path)
    try:
        row = conn.execute(
            'SELECT "Группа" FROM "MTR" WHERE "код СКМТР" = ?', (product_id,)
        ).fetchone()
        return row[0] if row else None
    finally:
        conn.close()


@pytest.fixture
def catalog_db(tmp_path):
    """Create a temporary catalog database with reference rows."""
    db_file = tmp_path / "catalog.db"
    conn = sqlite3.connect(db_file)
    conn.executescript(CATALOG_SCHEMA)
    conn.execute("""INSERT INTO "ED_IZM" VALUES ('796', 'шт')""")
    conn.execute(
        """INSERT INTO "OKPD_2" VALUES ('25.94.11', 'Изделия крепежные с резьбой')"""
    )
    conn.commit()
    conn.close()
    return db_file


@pytest.fixture
def seed(catalog_db):
    """Insert products into the temporary catalog."""

    def _seed(product_id: str, name: str, **kwargs) -> None:
        seed_product(catalog_db, product_id, name, **kwargs)

    return _seed


@pytest.fixture
def group_of(catalog_db):
    """Read a product's stored group from the temporary catalog."""
    return lambda product_id: read_group(catalog_db, product_id)
