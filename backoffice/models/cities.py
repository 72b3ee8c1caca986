"""Cities players can place businesses in."""
from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import ID_TYPE, Base


class City(Base):
    __tablename__ = "CITY"

    city_id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    city_name: Mapped[str] = mapped_column(String(120), nullable=False)
