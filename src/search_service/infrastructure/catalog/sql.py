"""PostgreSQL catalog adapter over the storefront products table."""

from typing import Any, Sequence

import structlog
from sqlalchemy import and_, false, func, or_, select, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql.elements import ColumnElement

from search_service.exceptions import CatalogError
from search_service.infrastructure.catalog.filters import (
    AllOf,
    AnyOf,
    Between,
    Contains,
    Equals,
    Filter,
    GreaterThan,
    InSet,
    NotEquals,
    Overlaps,
    SortKey,
)
from search_service.infrastructure.database.models import ProductRecord
from search_service.schemas import Product

logger = structlog.get_logger()


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def compile_filter(node: Filter) -> ColumnElement[bool]:
    """Translate a filter tree into a SQLAlchemy boolean expression."""
    if isinstance(node, AllOf):
        if not node.clauses:
            return true()
        return and_(*(compile_filter(c) for c in node.clauses))
    if isinstance(node, AnyOf):
        if not node.clauses:
            return false()
        return or_(*(compile_filter(c) for c in node.clauses))

    column = getattr(ProductRecord, node.field)
    if isinstance(node, Contains):
        return column.ilike(f"%{_escape_like(node.value)}%", escape="\\")
    if isinstance(node, Equals):
        return column == node.value
    if isinstance(node, NotEquals):
        return column != node.value
    if isinstance(node, InSet):
        return column.in_(list(node.values))
    if isinstance(node, Overlaps):
        return column.overlap(list(node.values))
    if isinstance(node, Between):
        return and_(column >= node.low, column <= node.high)
    if isinstance(node, GreaterThan):
        return column > node.value
    raise TypeError(f"Unsupported filter node: {type(node).__name__}")


def compile_sort(sort: Sequence[SortKey]) -> list[Any]:
    clauses = []
    for key in sort:
        column = getattr(ProductRecord, key.field)
        clauses.append(column.desc() if key.descending else column.asc())
    # Primary key last so pagination is deterministic
    clauses.append(ProductRecord.id.asc())
    return clauses


def _to_product(record: ProductRecord) -> Product:
    return Product.model_validate(
        {column.key: getattr(record, column.key) for column in ProductRecord.__mapper__.column_attrs}
    )


class SqlCatalog:
    """Catalog adapter issuing one short-lived session per call.

    Sessions are never shared between calls, so independent lookups may
    run concurrently.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def query_products(
        self,
        filters: Filter,
        sort: Sequence[SortKey] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[list[Product], int]:
        where = compile_filter(filters)
        stmt = select(ProductRecord).where(where).order_by(*compile_sort(sort)).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                records = result.scalars().all()
                total = await self._count(session, where)
        except SQLAlchemyError as e:
            logger.error("Catalog query failed", error=str(e))
            raise CatalogError("Catalog query failed") from e

        return [_to_product(r) for r in records], total

    async def count_products(self, filters: Filter) -> int:
        try:
            async with self.session_factory() as session:
                return await self._count(session, compile_filter(filters))
        except SQLAlchemyError as e:
            logger.error("Catalog count failed", error=str(e))
            raise CatalogError("Catalog count failed") from e

    async def _count(self, session: AsyncSession, where: ColumnElement[bool]) -> int:
        stmt = select(func.count()).select_from(ProductRecord).where(where)
        result = await session.execute(stmt)
        return int(result.scalar_one())
