"""Asset catalogue and player-owned assets."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from .accounts import Account
from .base import ID_TYPE, Base
from .taxes import TaxType


class AssetCategory(Base):
    __tablename__ = "ASSET_CATEGORY"

    asset_category_id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    asset_category_name: Mapped[str] = mapped_column(String(120), nullable=False)
    asset_category_desc: Mapped[str | None] = mapped_column(String(255))
    asset_category_status: Mapped[int] = mapped_column(Integer, nullable=False, default=1)


class AssetType(Base):
    __tablename__ = "ASSET_TYPE"

    asset_type_id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    asset_category_id: Mapped[int | None] = mapped_column(
        ForeignKey("ASSET_CATEGORY.asset_category_id")
    )
    asset_type_name: Mapped[str] = mapped_column(String(120), nullable=False)
    asset_type_desc: Mapped[str | None] = mapped_column(String(255))
    asset_type_status: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    asset_category: Mapped[AssetCategory | None] = relationship()


class Asset(Base):
    """An asset available for purchase."""

    __tablename__ = "ASSET"

    asset_id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    asset_type_id: Mapped[int | None] = mapped_column(ForeignKey("ASSET_TYPE.asset_type_id"))
    tax_type_id: Mapped[int | None] = mapped_column(ForeignKey("TAX_TYPE.tax_type_id"))
    asset_detail_name: Mapped[str] = mapped_column(String(160), nullable=False)
    asset_location: Mapped[str | None] = mapped_column(String(160))
    asset_price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=0)
    asset_monthly_maintenance: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=0
    )
    asset_status: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    asset_type: Mapped[AssetType | None] = relationship()
    tax_type: Mapped[TaxType | None] = relationship()


class UserAsset(Base):
    """An asset owned by a player account."""

    __tablename__ = "USER_ASSET"

    user_asset_id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    account_id: Mapped[int | None] = mapped_column(ForeignKey("ACCOUNT.account_id"))
    asset_id: Mapped[int | None] = mapped_column(ForeignKey("ASSET.asset_id"))
    user_asset_custom_name: Mapped[str] = mapped_column(String(160), nullable=False)
    user_asset_market_value: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=0
    )
    user_asset_monthly_tax: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=0
    )
    user_asset_monthly_maintenance: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=0
    )
    user_asset_current_upgrade: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    user_asset_status: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    last_tax_collection: Mapped[date | None] = mapped_column(Date)
    last_maintenance_paid: Mapped[date | None] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False
    )

    account: Mapped[Account | None] = relationship()
    asset: Mapped[Asset | None] = relationship()
