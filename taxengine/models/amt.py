"""Alternative minimum tax inputs and results (Form 6251 / Form 8801)."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from taxengine.models.enums import FilingStatus
from taxengine.models.fields import Money


class AmtInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    filing_status: FilingStatus
    taxable_income: Money
    regular_tax: Money
    # Form 6251 adjustments and preference items
    state_and_local_tax_deduction: Money = Decimal("0.00")
    tax_exempt_interest_from_pabs: Money = Decimal("0.00")
    incentive_stock_option_bargain_element: Money = Decimal("0.00")
    other_adjustments: Money = Decimal("0.00")
    tax_year: int = 2025


class AmtResult(BaseModel):
    """Form 6251 worksheet figures, stage by stage."""

    model_config = ConfigDict(frozen=True)

    tax_year: int
    filing_status: FilingStatus
    amti: Money
    exemption_amount: Money
    exemption_phaseout_start: Money
    reduced_exemption: Money
    amt_base: Money
    tentative_minimum_tax: Money
    regular_tax: Money
    alternative_minimum_tax: Money
    is_subject_to_amt: bool


class AmtCreditResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    credit_used: Money
    credit_remaining: Money
