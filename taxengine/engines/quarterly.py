"""Quarterly estimated tax engine (Form 1040-ES).

Builds the four-payment schedule from projected liability and the
safe-harbor rules, credits payments already made, and rates underpayment
risk. Status is always evaluated against an explicit as-of date.
"""

import logging
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from taxengine.engines.liability import TaxLiabilityEstimator
from taxengine.engines.parameters import (
    TaxYearParameters,
    get_parameters,
    quarterly_due_dates,
)
from taxengine.models.enums import FilingStatus, QuarterStatus, UnderpaymentRisk
from taxengine.models.estimates import (
    IncomeSummary,
    QuarterlyEstimateResult,
    QuarterlyPayment,
    QuarterPayment,
)
from taxengine.money import (
    ZERO,
    add,
    apply_rate,
    clamp_min,
    prorate,
    round_to_whole_dollar,
    subtract,
    sum_all,
)

logger = logging.getLogger(__name__)

QUARTERS = (1, 2, 3, 4)


def _credit_quarter(payment: QuarterlyPayment, due_dates: Sequence[date]) -> int:
    """The quarter a payment counts toward."""
    if payment.quarter is not None:
        return payment.quarter
    for quarter, due in zip(QUARTERS, due_dates):
        if payment.date_paid <= due:
            return quarter
    return QUARTERS[-1]


def _quarter_status(amount_paid: Decimal, amount_due: Decimal, due: date, as_of: date) -> QuarterStatus:
    if amount_paid >= amount_due:
        return QuarterStatus.PAID
    if as_of > due:
        return QuarterStatus.OVERDUE
    return QuarterStatus.UPCOMING


def _risk(overdue_count: int) -> UnderpaymentRisk:
    if overdue_count == 0:
        return UnderpaymentRisk.LOW
    if overdue_count == 1:
        return UnderpaymentRisk.MEDIUM
    return UnderpaymentRisk.HIGH


class QuarterlyEstimateEngine:
    """Computes the estimated payment schedule for a tax year."""

    def __init__(self, table: dict[int, TaxYearParameters] | None = None) -> None:
        self.table = table
        self.estimator = TaxLiabilityEstimator(table)

    def calculate_quarterly_estimates(
        self,
        tax_year: int,
        filing_status: FilingStatus,
        projected_income: IncomeSummary,
        prior_year_tax: Decimal,
        payments_made: Sequence[QuarterlyPayment],
        as_of: date,
    ) -> QuarterlyEstimateResult:
        """Compute the four quarterly payments and where the taxpayer stands.

        Args:
            tax_year: Year the estimates are for.
            filing_status: Filing status.
            projected_income: Projected income for the year, with withholding.
            prior_year_tax: Total tax on the prior year's return.
            payments_made: Estimated payments so far. Those dated after
                ``as_of`` are ignored.
            as_of: Date the schedule is evaluated on.
        """
        params = get_parameters(tax_year, self.table)
        liability = self.estimator.estimate(tax_year, filing_status, projected_income)
        projected_tax = liability.total_tax
        withholding = projected_income.total_withholding

        # --- Safe harbor: lesser of 90% current year and 100%/110% prior year ---
        high_income = (
            liability.adjusted_gross_income
            > params.safe_harbor_high_income_agi[filing_status]
        )
        prior_multiplier = (
            params.safe_harbor_high_income_prior_year_rate
            if high_income
            else params.safe_harbor_prior_year_rate
        )
        prior_year_amount = round_to_whole_dollar(apply_rate(prior_year_tax, prior_multiplier))
        current_year_amount = round_to_whole_dollar(
            apply_rate(projected_tax, params.safe_harbor_current_year_rate)
        )
        safe_harbor_amount = min(prior_year_amount, current_year_amount)

        required = clamp_min(subtract(safe_harbor_amount, withholding))
        per_quarter = round_to_whole_dollar(apply_rate(required, Decimal("0.25")))

        # --- Credit payments made on or before as_of ---
        due_dates = quarterly_due_dates(tax_year, self.table)
        credited = {quarter: ZERO for quarter in QUARTERS}
        for payment in payments_made:
            if payment.date_paid > as_of:
                logger.debug("Ignoring payment dated %s after %s", payment.date_paid, as_of)
                continue
            quarter = _credit_quarter(payment, due_dates)
            credited[quarter] = add(credited[quarter], payment.amount)

        quarters = [
            QuarterPayment(
                quarter=quarter,
                due_date=due,
                amount_due=per_quarter,
                amount_paid=credited[quarter],
                status=_quarter_status(credited[quarter], per_quarter, due, as_of),
            )
            for quarter, due in zip(QUARTERS, due_dates)
        ]

        total_paid = sum_all(q.amount_paid for q in quarters)
        total_remaining = clamp_min(subtract(required, total_paid))
        safe_harbor_met = add(total_paid, withholding) >= safe_harbor_amount

        overdue = [q for q in quarters if q.status == QuarterStatus.OVERDUE]
        unpaid = [q for q in quarters if q.status != QuarterStatus.PAID]
        next_due_date = unpaid[0].due_date if unpaid else quarters[-1].due_date
        suggested = ZERO
        if unpaid:
            suggested = round_to_whole_dollar(prorate(total_remaining, 1, len(unpaid)))

        if overdue:
            logger.warning(
                "%d estimated payment(s) overdue for %d as of %s",
                len(overdue), tax_year, as_of,
            )

        return QuarterlyEstimateResult(
            tax_year=tax_year,
            filing_status=filing_status,
            as_of=as_of,
            quarters=quarters,
            projected_tax=projected_tax,
            safe_harbor_amount=safe_harbor_amount,
            total_estimated_tax=round_to_whole_dollar(required),
            total_paid=total_paid,
            total_remaining=total_remaining,
            safe_harbor_met=safe_harbor_met,
            underpayment_risk=_risk(len(overdue)),
            next_due_date=next_due_date,
            suggested_next_payment=suggested,
        )


def calculate_quarterly_estimates(
    tax_year: int,
    filing_status: FilingStatus,
    projected_income: IncomeSummary,
    prior_year_tax: Decimal,
    payments_made: Sequence[QuarterlyPayment],
    as_of: date,
) -> QuarterlyEstimateResult:
    return QuarterlyEstimateEngine().calculate_quarterly_estimates(
        tax_year, filing_status, projected_income, prior_year_tax, payments_made, as_of
    )
