"""Wash sale input records and check results."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taxengine.models.fields import Money


class SaleRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    lot_id: str
    symbol: str
    sale_date: date
    loss: Money  # Negative for a realized loss

    @field_validator("symbol")
    @classmethod
    def _normalize_symbol(cls, value: str) -> str:
        return value.strip().upper()


class PurchaseRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    lot_id: str
    symbol: str
    purchase_date: date
    quantity: Decimal = Field(gt=0)
    cost_basis: Money

    @field_validator("symbol")
    @classmethod
    def _normalize_symbol(cls, value: str) -> str:
        return value.strip().upper()


class WashSaleViolation(BaseModel):
    """A loss sale matched to a replacement purchase inside the window."""

    model_config = ConfigDict(frozen=True)

    sold_lot_id: str
    replacement_lot_id: str
    symbol: str
    sale_date: date
    replacement_date: date
    disallowed_loss: Money
    basis_adjustment: Money


class WashSaleCheckResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    violations: list[WashSaleViolation] = []
    total_disallowed_loss: Money = Decimal("0.00")
    compliant: bool = True
