"""Database models for the back office domain."""
from __future__ import annotations

from .accounts import Account, AccountType
from .assets import Asset, AssetCategory, AssetType, UserAsset
from .base import Base
from .businesses import BusinessCategory, BusinessType, BusinessTypeDetail, UserBusiness
from .cities import City
from .investments import (
    InvestmentCategory,
    InvestmentType,
    InvestmentTypeDetail,
    UserInvestment,
)
from .taxes import TaxType

__all__ = [
    "Base",
    "Account",
    "AccountType",
    "Asset",
    "AssetCategory",
    "AssetType",
    "UserAsset",
    "BusinessCategory",
    "City",
    "BusinessType",
    "BusinessTypeDetail",
    "UserBusiness",
    "InvestmentCategory",
    "InvestmentType",
    "InvestmentTypeDetail",
    "UserInvestment",
    "TaxType",
]
