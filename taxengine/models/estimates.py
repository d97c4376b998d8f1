"""Income, liability, Schedule D and quarterly estimate models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from taxengine.models.enums import FilingStatus, QuarterStatus, UnderpaymentRisk
from taxengine.models.fields import Money

_ZERO = Decimal("0.00")


class IncomeSummary(BaseModel):
    """Projected annual income for one taxpayer. Every item defaults to zero.

    Capital loss carryovers are signed: a loss carried in from the prior
    year is negative.
    """

    model_config = ConfigDict(frozen=True)

    wages: Money = _ZERO
    ordinary_dividends: Money = _ZERO
    qualified_dividends: Money = _ZERO
    interest_income: Money = _ZERO
    tax_exempt_interest: Money = _ZERO
    short_term_gains: Money = _ZERO
    long_term_gains: Money = _ZERO
    business_income: Money = _ZERO
    rental_income: Money = _ZERO
    other_income: Money = _ZERO
    total_withholding: Money = _ZERO
    estimated_payments: Money = _ZERO
    deductions: Money = _ZERO  # Itemized total; the standard deduction applies if larger
    foreign_tax_credit: Money = _ZERO
    capital_loss_carryover_short_term: Money = _ZERO
    capital_loss_carryover_long_term: Money = _ZERO


# ---------------------------------------------------------------------------
# Schedule D
# ---------------------------------------------------------------------------

class ScheduleDInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    short_term_gain_loss: Money = _ZERO
    long_term_gain_loss: Money = _ZERO
    short_term_carryover: Money = _ZERO  # Negative for a prior-year loss
    long_term_carryover: Money = _ZERO
    capital_gain_distributions: Money = _ZERO


class ScheduleDResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    net_short_term_gain_loss: Money
    net_long_term_gain_loss: Money
    net_capital_gain_loss: Money
    capital_loss_deduction: Money
    short_term_carryover_to_next_year: Money
    long_term_carryover_to_next_year: Money
    qualifies_for_preferential_rates: bool

    @property
    def capital_income(self) -> Decimal:
        """Net capital gain, or the allowed loss deduction as a negative figure."""
        if self.net_capital_gain_loss >= 0:
            return self.net_capital_gain_loss
        return -self.capital_loss_deduction


# ---------------------------------------------------------------------------
# Liability
# ---------------------------------------------------------------------------

class TaxLiabilityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    tax_year: int
    filing_status: FilingStatus
    # Income
    gross_income: Money
    self_employment_deduction: Money
    adjusted_gross_income: Money
    # Deductions
    standard_deduction: Money
    deduction_used: Money
    taxable_income: Money
    taxable_ordinary_income: Money
    preferential_income: Money
    # Federal
    ordinary_tax: Money
    qualified_dividend_tax: Money
    long_term_capital_gains_tax: Money
    net_investment_income_tax: Money
    self_employment_tax: Money
    total_federal_tax: Money
    foreign_tax_credit: Money
    total_tax: Money
    # Payments
    total_withholding: Money
    estimated_payments: Money
    balance_due: Money
    effective_rate: Decimal
    marginal_rate: Decimal
    schedule_d: ScheduleDResult
    assumptions: list[str] = []


# ---------------------------------------------------------------------------
# Quarterly estimates
# ---------------------------------------------------------------------------

class QuarterlyPayment(BaseModel):
    """An estimated payment already made. ``quarter`` pins it to a quarter."""

    model_config = ConfigDict(frozen=True)

    amount: Money
    date_paid: date
    quarter: int | None = Field(default=None, ge=1, le=4)


class QuarterPayment(BaseModel):
    model_config = ConfigDict(frozen=True)

    quarter: int = Field(ge=1, le=4)
    due_date: date
    amount_due: Money
    amount_paid: Money
    status: QuarterStatus


class QuarterlyEstimateResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    tax_year: int
    filing_status: FilingStatus
    as_of: date
    quarters: list[QuarterPayment]
    projected_tax: Money
    safe_harbor_amount: Money
    total_estimated_tax: Money
    total_paid: Money
    total_remaining: Money
    safe_harbor_met: bool
    underpayment_risk: UnderpaymentRisk
    next_due_date: date
    suggested_next_payment: Money
