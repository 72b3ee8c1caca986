"""Tax rules applied to businesses and assets."""
from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Boolean, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import ID_TYPE, Base


class TaxType(Base):
    __tablename__ = "TAX_TYPE"

    tax_type_id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    tax_name: Mapped[str] = mapped_column(String(120), nullable=False)
    tax_rate: Mapped[Decimal] = mapped_column(Numeric(7, 3), nullable=False)
    is_auto: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
