"""Player accounts and account types."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from .base import ID_TYPE, Base


class AccountType(Base):
    """Account tier (player, premium, admin...)."""

    __tablename__ = "TYPE"

    type_id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    type_name: Mapped[str] = mapped_column(String(80), nullable=False)
    type_desc: Mapped[str | None] = mapped_column(String(255))
    type_max_stage: Mapped[int | None] = mapped_column(Integer)
    status: Mapped[int] = mapped_column(Integer, nullable=False, default=1)


class Account(Base):
    """A registered game account."""

    __tablename__ = "ACCOUNT"

    account_id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    type_id: Mapped[int | None] = mapped_column(ForeignKey("TYPE.type_id"))
    account_uname: Mapped[str] = mapped_column(String(80), unique=True, nullable=False)
    account_email: Mapped[str] = mapped_column(String(255), nullable=False)
    account_fname: Mapped[str] = mapped_column(String(80), nullable=False)
    account_mname: Mapped[str | None] = mapped_column(String(80))
    account_lname: Mapped[str | None] = mapped_column(String(80))
    account_address: Mapped[str | None] = mapped_column(String(255))
    account_status: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    account_current_stage: Mapped[int | None] = mapped_column(Integer)
    account_total_clicks: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    account_investment_total_earnings: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=0
    )
    account_business_total_earnings: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=0
    )
    account_clicker_total_earnings: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=0
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False
    )

    account_type: Mapped[AccountType | None] = relationship()
