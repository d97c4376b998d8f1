"""Tax lot, lot selection method, and lot selection result models."""

from datetime import date
from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taxengine.models.enums import HoldingPeriod, LotMethod
from taxengine.models.fields import Money


class TaxLot(BaseModel):
    """A discrete acquisition of a security, tracked for cost basis."""

    model_config = ConfigDict(frozen=True)

    id: str
    symbol: str
    acquisition_date: date
    quantity: Decimal = Field(gt=0)
    adjusted_basis: Money
    wash_sale_adjustment: Money = Decimal("0.00")
    account_id: str | None = None

    @field_validator("symbol")
    @classmethod
    def _normalize_symbol(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def cost_basis_per_share(self) -> Decimal:
        return self.adjusted_basis / self.quantity


# ---------------------------------------------------------------------------
# Selection methods: a closed set of tagged variants
# ---------------------------------------------------------------------------

class Fifo(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[LotMethod.FIFO] = LotMethod.FIFO


class Lifo(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[LotMethod.LIFO] = LotMethod.LIFO


class SpecificId(BaseModel):
    """Specific identification: only the listed lots, in the listed order."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[LotMethod.SPECIFIC_ID] = LotMethod.SPECIFIC_ID
    lot_ids: list[str] = []


LotSelectionMethod = Annotated[Fifo | Lifo | SpecificId, Field(discriminator="kind")]


class SelectedLot(BaseModel):
    """The portion of a lot consumed by one sale."""

    model_config = ConfigDict(frozen=True)

    lot_id: str
    acquisition_date: date
    quantity_sold: Decimal
    cost_basis_per_share: Money
    total_basis: Money
    proceeds: Money
    gain_loss: Money
    holding_period: HoldingPeriod


class LotSelectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: LotMethod
    selected_lots: list[SelectedLot]
    requested_quantity: Decimal
    quantity_sold: Decimal
    total_proceeds: Money
    total_basis: Money
    total_gain_loss: Money
    short_term_gain_loss: Money
    long_term_gain_loss: Money
    estimated_tax_impact: Money = Decimal("0.00")

    @property
    def is_fully_filled(self) -> bool:
        return self.quantity_sold >= self.requested_quantity
