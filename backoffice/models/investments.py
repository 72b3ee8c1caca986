"""Investment catalogue and player holdings."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from .accounts import Account
from .base import ID_TYPE, Base


class InvestmentCategory(Base):
    __tablename__ = "INVESTMENT_CATEGORY"

    investment_category_id: Mapped[int] = mapped_column(
        ID_TYPE, primary_key=True, autoincrement=True
    )
    investment_category_name: Mapped[str] = mapped_column(String(120), nullable=False)
    investment_category_focus: Mapped[str | None] = mapped_column(String(160))
    investment_category_desc: Mapped[str | None] = mapped_column(String(255))


class InvestmentType(Base):
    __tablename__ = "INVESTMENT_TYPE"

    investment_type_id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    investment_type_name: Mapped[str] = mapped_column(String(120), nullable=False)
    investment_type_desc: Mapped[str | None] = mapped_column(String(255))
    investment_type_price_per_unit: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=0
    )
    investment_type_capitalization: Mapped[Decimal] = mapped_column(
        Numeric(20, 2), nullable=False, default=0
    )
    investment_type_roi: Mapped[Decimal | None] = mapped_column(Numeric(7, 3))
    investment_type_status: Mapped[int] = mapped_column(Integer, nullable=False, default=1)


class InvestmentTypeDetail(Base):
    """An investment product offered to players."""

    __tablename__ = "INVESTMENT_TYPE_DETAIL"

    investment_type_detail_id: Mapped[int] = mapped_column(
        ID_TYPE, primary_key=True, autoincrement=True
    )
    investment_type_id: Mapped[int | None] = mapped_column(
        ForeignKey("INVESTMENT_TYPE.investment_type_id")
    )
    investment_category_id: Mapped[int | None] = mapped_column(
        ForeignKey("INVESTMENT_CATEGORY.investment_category_id")
    )
    investment_type_detail_name: Mapped[str | None] = mapped_column(String(160))

    investment_type: Mapped[InvestmentType | None] = relationship()
    investment_category: Mapped[InvestmentCategory | None] = relationship()


class UserInvestment(Base):
    """Units of an investment product held by a player account."""

    __tablename__ = "USER_INVESTMENT"

    user_investment_id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    account_id: Mapped[int | None] = mapped_column(ForeignKey("ACCOUNT.account_id"))
    investment_type_detail_id: Mapped[int | None] = mapped_column(
        ForeignKey("INVESTMENT_TYPE_DETAIL.investment_type_detail_id")
    )
    user_investment_units: Mapped[Decimal] = mapped_column(
        Numeric(18, 4), nullable=False, default=0
    )
    user_investment_total_earnings: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=0
    )
    user_investment_issued: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False
    )

    account: Mapped[Account | None] = relationship()
    type_detail: Mapped[InvestmentTypeDetail | None] = relationship()
