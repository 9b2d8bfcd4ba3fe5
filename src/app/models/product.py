"""Rental product and price tier models."""

import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.base import TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from app.models.order import OrderItem


class Product(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Rentable item. Prices are integers in the smallest currency unit."""

    __tablename__ = "products"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    photos: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )
    daily_price: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    total_stock: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    # Relationships
    pricing_tiers: Mapped[List["PricingTier"]] = relationship(
        "PricingTier", back_populates="product", cascade="all, delete-orphan"
    )
    quantity_pricing: Mapped[List["QuantityPricing"]] = relationship(
        "QuantityPricing", back_populates="product", cascade="all, delete-orphan"
    )
    order_items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem", back_populates="product"
    )

    __table_args__ = (
        CheckConstraint("total_stock >= 0", name="chk_product_stock_non_negative"),
        CheckConstraint("daily_price >= 0", name="chk_product_daily_price_non_negative"),
        Index("idx_products_active", "is_active"),
    )


class PricingTier(Base, UUIDPrimaryKeyMixin):
    """Flat price for renting one unit for exactly ``days`` days."""

    __tablename__ = "pricing_tiers"

    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    days: Mapped[int] = mapped_column(Integer, nullable=False)
    total_price: Mapped[int] = mapped_column(Integer, nullable=False)

    product: Mapped["Product"] = relationship("Product", back_populates="pricing_tiers")

    __table_args__ = (
        UniqueConstraint("product_id", "days", name="uq_pricing_tier_product_days"),
        CheckConstraint("days > 0", name="chk_pricing_tier_days"),
    )


class QuantityPricing(Base, UUIDPrimaryKeyMixin):
    """Flat price for renting exactly ``quantity`` units for one day."""

    __tablename__ = "quantity_pricing"

    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    total_price: Mapped[int] = mapped_column(Integer, nullable=False)

    product: Mapped["Product"] = relationship("Product", back_populates="quantity_pricing")

    __table_args__ = (
        UniqueConstraint("product_id", "quantity", name="uq_quantity_pricing_product_quantity"),
        CheckConstraint("quantity > 0", name="chk_quantity_pricing_quantity"),
    )
