from __future__ import annotations

from typing import Optional

from sqlalchemy import JSON, CheckConstraint, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class CatalogStore(Base):
    """Pre-seeded store, a secondary source next to the live places search."""

    __tablename__ = "stores"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(32))
    website: Mapped[Optional[str]] = mapped_column(String(255))
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    price_score: Mapped[int] = mapped_column(Integer, nullable=False)
    health_score: Mapped[int] = mapped_column(Integer, nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    categories: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    hours: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False, default=dict)

    __table_args__ = (
        CheckConstraint("price_score BETWEEN 1 AND 10", name="ck_store_price_score"),
        CheckConstraint("health_score BETWEEN 1 AND 10", name="ck_store_health_score"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_store_rating"),
        Index("ix_store_lat_lon", "latitude", "longitude"),
    )


__all__ = ["CatalogStore"]
