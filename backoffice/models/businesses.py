"""Business catalogue and player-owned businesses."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from .accounts import Account
from .base import ID_TYPE, Base
from .taxes import TaxType


class BusinessCategory(Base):
    __tablename__ = "BUSINESS_CATEGORY"

    business_category_id: Mapped[int] = mapped_column(
        ID_TYPE, primary_key=True, autoincrement=True
    )
    business_category_name: Mapped[str] = mapped_column(String(120), nullable=False)
    business_category_desc: Mapped[str | None] = mapped_column(String(255))
    business_category_status: Mapped[int] = mapped_column(Integer, nullable=False, default=1)


class BusinessType(Base):
    __tablename__ = "BUSINESS_TYPE"

    business_type_id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    business_type_name: Mapped[str] = mapped_column(String(120), nullable=False)
    business_type_desc: Mapped[str | None] = mapped_column(String(255))
    business_type_status: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    tax_type_id: Mapped[int | None] = mapped_column(ForeignKey("TAX_TYPE.tax_type_id"))

    tax_type: Mapped[TaxType | None] = relationship()


class BusinessTypeDetail(Base):
    """A business that players can purchase (type within a category)."""

    __tablename__ = "BUSINESS_TYPE_DETAIL"

    business_type_detail_id: Mapped[int] = mapped_column(
        ID_TYPE, primary_key=True, autoincrement=True
    )
    business_type_id: Mapped[int | None] = mapped_column(
        ForeignKey("BUSINESS_TYPE.business_type_id")
    )
    business_category_id: Mapped[int | None] = mapped_column(
        ForeignKey("BUSINESS_CATEGORY.business_category_id")
    )
    business_type_detail_name: Mapped[str] = mapped_column(String(160), nullable=False)
    initial_cost: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=0)
    maintenance_cost: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=0)
    monthly_earnings: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=0)
    location: Mapped[str | None] = mapped_column(String(160))

    business_type: Mapped[BusinessType | None] = relationship()
    business_category: Mapped[BusinessCategory | None] = relationship()


class UserBusiness(Base):
    """A business owned by a player account."""

    __tablename__ = "USER_BUSINESS"

    user_business_id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    account_id: Mapped[int | None] = mapped_column(ForeignKey("ACCOUNT.account_id"))
    business_type_detail_id: Mapped[int | None] = mapped_column(
        ForeignKey("BUSINESS_TYPE_DETAIL.business_type_detail_id")
    )
    user_business_name: Mapped[str] = mapped_column(String(160), nullable=False)
    user_business_desc: Mapped[str | None] = mapped_column(String(255))
    user_business_location: Mapped[str | None] = mapped_column(String(160))
    user_business_status: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    user_business_worth: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=0)
    user_business_monthly_income: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=0
    )
    user_business_earnings: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=0
    )
    user_business_monthly_tax: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=0
    )
    user_business_monthly_maintenance: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=0
    )
    user_business_current_level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    last_tax_collection: Mapped[date | None] = mapped_column(Date)
    last_maintenance_collection: Mapped[date | None] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False
    )

    account: Mapped[Account | None] = relationship()
    type_detail: Mapped[BusinessTypeDetail | None] = relationship()
