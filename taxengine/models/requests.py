"""Request documents accepted by the command line, one per engine call."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from taxengine.models.enums import FilingStatus
from taxengine.models.estimates import IncomeSummary, QuarterlyPayment
from taxengine.models.lots import Fifo, Lifo, LotSelectionMethod, TaxLot
from taxengine.models.wash_sale import PurchaseRecord, SaleRecord


class LotSelectionRequest(BaseModel):
    lots: list[TaxLot]
    quantity: Decimal
    price: Decimal
    sale_date: date
    methods: list[LotSelectionMethod] = Field(default_factory=lambda: [Fifo(), Lifo()])
    marginal_rate: Decimal = Decimal("0.32")
    long_term_rate: Decimal = Decimal("0.15")


class WashSaleRequest(BaseModel):
    sales: list[SaleRecord]
    purchases: list[PurchaseRecord] = []


class QuarterlyRequest(BaseModel):
    tax_year: int
    filing_status: FilingStatus
    projected_income: IncomeSummary = IncomeSummary()
    prior_year_tax: Decimal = Decimal("0")
    payments_made: list[QuarterlyPayment] = []
    as_of: date


class HarvestRequest(BaseModel):
    lots: list[TaxLot]
    prices: dict[str, Decimal]
    as_of: date
    min_loss: Decimal = Decimal("100")
    marginal_rate: Decimal = Decimal("0.32")
    long_term_rate: Decimal = Decimal("0.15")
    recent_purchases: list[PurchaseRecord] = []
