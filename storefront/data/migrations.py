# storefront/data/migrations.py
"""
Wersjonowane migracje schematu.

Uruchamiane RAZ przy deployu:

    python -m storefront.data.migrations

Kod obslugujacy requesty nigdy nie tworzy tabel, tylko sprawdza wersje
(require_schema) i konczy sie SchemaNotReadyError gdy schemat nie jest gotowy.
"""
from typing import Callable, List, Tuple

from sqlalchemy import select, func, inspect, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import OperationalError, ProgrammingError
from sqlalchemy.orm import Session

from storefront.data.database import Base, engine as default_engine
from storefront.data.models import (
    CategoryModel,
    ProductModel,
    NewsModel,
    OrderModel,
    OrderItemModel,
    SchemaVersionModel,
)
from storefront.domain.errors import SchemaNotReadyError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _catalog_tables(conn: Connection) -> None:
    Base.metadata.create_all(
        conn,
        tables=[CategoryModel.__table__, ProductModel.__table__, NewsModel.__table__],
    )


def _order_tables(conn: Connection) -> None:
    Base.metadata.create_all(
        conn,
        tables=[OrderModel.__table__, OrderItemModel.__table__],
    )


def _product_details(conn: Connection) -> None:
    # baza z migracji 1 sprzed tej wersji nie ma kolumny, swieza baza ma ja juz z create_all
    columns = {c["name"] for c in inspect(conn).get_columns("products")}
    if "details" in columns:
        return
    column_type = ProductModel.__table__.c.details.type.compile(dialect=conn.dialect)
    conn.execute(text(f"ALTER TABLE products ADD COLUMN details {column_type}"))


# (wersja, opis, funkcja) - tylko dopisujemy na koncu, nigdy nie zmieniamy starych
MIGRATIONS: List[Tuple[int, str, Callable[[Connection], None]]] = [
    (1, "catalog: categories, products, news", _catalog_tables),
    (2, "orders and order items", _order_tables),
    (3, "products: details column", _product_details),
]

LATEST_VERSION = MIGRATIONS[-1][0]


def current_version(conn: Connection) -> int:
    return conn.execute(select(func.max(SchemaVersionModel.version))).scalar() or 0


def migrate(engine: Engine = default_engine) -> List[int]:
    applied = []

    with engine.begin() as conn:
        Base.metadata.create_all(conn, tables=[SchemaVersionModel.__table__])
        version = current_version(conn)
        logger.info(f"Schema version before migration: {version}")

        for number, description, apply in MIGRATIONS:
            if number <= version:
                continue

            logger.info(f"Applying migration {number}: {description}")
            apply(conn)
            conn.execute(
                SchemaVersionModel.__table__.insert().values(version=number, description=description)
            )
            applied.append(number)

    logger.info(f"Schema at version {LATEST_VERSION}, applied: {applied or 'none'}")
    return applied


def require_schema(db: Session, expected: int = LATEST_VERSION) -> int:
    try:
        version = db.execute(select(func.max(SchemaVersionModel.version))).scalar()
    except (OperationalError, ProgrammingError) as e:
        # postgres po bledzie zostawia transakcje w stanie aborted
        db.rollback()
        raise SchemaNotReadyError(
            "schema not ready: run `python -m storefront.data.migrations` before serving requests"
        ) from e

    if version is None or version < expected:
        raise SchemaNotReadyError(
            f"schema not ready: database is at version {version or 0}, expected {expected}"
        )

    return version


if __name__ == "__main__":
    migrate()
