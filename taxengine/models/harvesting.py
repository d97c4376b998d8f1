"""Tax-loss harvesting candidate model."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from taxengine.models.enums import HoldingPeriod
from taxengine.models.fields import Money


class HarvestCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    lot_id: str
    quantity: Decimal
    current_price: Money
    cost_basis: Money
    unrealized_loss: Money  # Negative
    holding_period: HoldingPeriod
    wash_sale_risk: bool
    estimated_tax_savings: Money
    rationale: str
