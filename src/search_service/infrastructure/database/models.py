"""SQLAlchemy mapping of the storefront's product table.

The table is owned by the e-commerce backend; the search engine only reads
it. Column names follow the storefront's camelCase convention while the
mapped attributes use the snake_case names of ``Product``.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from search_service.config import get_settings

SCHEMA = get_settings().catalog_schema


class Base(DeclarativeBase):
    """Base class for all models."""


class ProductRecord(Base):
    """Row of the storefront ``products`` table."""

    __tablename__ = "products"
    __table_args__ = {"schema": SCHEMA}

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    short_description: Mapped[Optional[str]] = mapped_column("shortDescription", Text)
    category: Mapped[Optional[str]] = mapped_column(String(255))
    subcategory: Mapped[Optional[str]] = mapped_column(String(255))
    brand: Mapped[Optional[str]] = mapped_column(String(255))
    tags: Mapped[Optional[list[str]]] = mapped_column(ARRAY(String))
    colors: Mapped[Optional[list[str]]] = mapped_column(ARRAY(String))
    sizes: Mapped[Optional[list[str]]] = mapped_column(ARRAY(String))
    materials: Mapped[Optional[list[str]]] = mapped_column("material", ARRAY(String))
    gender: Mapped[Optional[str]] = mapped_column(String(50))
    age_group: Mapped[Optional[str]] = mapped_column("ageGroup", String(50))
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    original_price: Mapped[Optional[Decimal]] = mapped_column("originalPrice", Numeric(12, 2))
    stock_quantity: Mapped[int] = mapped_column("stockQuantity", Integer, default=0)
    is_active: Mapped[bool] = mapped_column("isActive", Boolean, default=True)
    is_featured: Mapped[bool] = mapped_column("isFeatured", Boolean, default=False)
    is_new: Mapped[bool] = mapped_column("isNew", Boolean, default=False)
    is_sale: Mapped[bool] = mapped_column("isSale", Boolean, default=False)
    average_rating: Mapped[float] = mapped_column("averageRating", Float, default=0.0)
    total_reviews: Mapped[int] = mapped_column("totalReviews", Integer, default=0)
    sales_count: Mapped[int] = mapped_column("salesCount", Integer, default=0)
    view_count: Mapped[int] = mapped_column("viewCount", Integer, default=0)
    main_image: Mapped[Optional[str]] = mapped_column("mainImage", Text)
    created_at: Mapped[datetime] = mapped_column("createdAt", DateTime(timezone=True))
