"""Federal tax liability estimation engine.

Projects annual federal income tax from an income summary. Implements:
  - Capital gain and loss netting per Schedule D / IRC Section 1211(b)
  - Self-employment tax per Schedule SE, with the deductible half
  - Progressive ordinary income tax
  - LTCG/qualified dividend stacking per the Qualified Dividends and
    Capital Gain Tax Worksheet (Form 1040 Instructions)
  - Net Investment Income Tax (NIIT) per IRC Section 1411
  - Foreign tax credit as a direct credit

State income tax is not computed.
"""

import logging
from decimal import Decimal

from taxengine.engines.parameters import Bracket, TaxYearParameters, get_parameters
from taxengine.engines.schedule_d import compute_schedule_d
from taxengine.models.enums import FilingStatus
from taxengine.models.estimates import (
    IncomeSummary,
    ScheduleDInput,
    TaxLiabilityResult,
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

_RATE_PLACES = Decimal("0.0001")


class TaxLiabilityEstimator:
    """Estimates federal tax liability for one tax year."""

    def __init__(self, table: dict[int, TaxYearParameters] | None = None) -> None:
        self.table = table

    def estimate(
        self,
        tax_year: int,
        filing_status: FilingStatus,
        income: IncomeSummary,
    ) -> TaxLiabilityResult:
        params = get_parameters(tax_year, self.table)
        assumptions: list[str] = []
        if params.year != tax_year:
            assumptions.append(f"No {tax_year} tables configured; {params.year} figures used")

        # --- Capital gains through Schedule D ---
        schedule_d = compute_schedule_d(
            ScheduleDInput(
                short_term_gain_loss=income.short_term_gains,
                long_term_gain_loss=income.long_term_gains,
                short_term_carryover=income.capital_loss_carryover_short_term,
                long_term_carryover=income.capital_loss_carryover_long_term,
            ),
            filing_status,
            params,
        )
        capital_income = schedule_d.capital_income
        if schedule_d.capital_loss_deduction > 0:
            assumptions.append(
                f"Capital loss deduction limited to ${schedule_d.capital_loss_deduction:,.2f}"
            )

        # --- Self-employment tax and its deductible half ---
        se_tax, se_deduction = self.compute_self_employment_tax(
            income.business_income, params
        )

        # --- Income aggregation ---
        gross_income = sum_all([
            income.wages,
            income.ordinary_dividends,
            income.interest_income,
            capital_income,
            income.business_income,
            income.rental_income,
            income.other_income,
        ])
        agi = subtract(gross_income, se_deduction)

        # --- Deductions ---
        standard_deduction = params.standard_deduction[filing_status]
        if income.deductions > standard_deduction:
            deduction_used = income.deductions
            assumptions.append("Using itemized deductions")
        else:
            deduction_used = standard_deduction
            assumptions.append("Using standard deduction")
        taxable_income = clamp_min(subtract(agi, deduction_used))

        # --- Split ordinary vs. preferential income ---
        # Net capital gain is net LTCG in excess of net STCL.
        net_capital_gain = clamp_min(
            min(schedule_d.net_long_term_gain_loss, schedule_d.net_capital_gain_loss)
        )
        preferential_income = min(
            add(clamp_min(income.qualified_dividends), net_capital_gain),
            taxable_income,
        )
        taxable_ordinary = subtract(taxable_income, preferential_income)

        # --- Ordinary income tax ---
        ordinary_tax = round_to_whole_dollar(
            self.apply_brackets(taxable_ordinary, params.ordinary_brackets[filing_status])
        )

        # --- LTCG/qualified dividend tax, split pro rata ---
        preferential_tax = round_to_whole_dollar(
            self.compute_ltcg_tax(
                preferential_income,
                taxable_income,
                params.ltcg_brackets[filing_status],
            )
        )
        qualified_in_preferential = min(
            clamp_min(income.qualified_dividends), preferential_income
        )
        qualified_dividend_tax = round_to_whole_dollar(
            prorate(preferential_tax, qualified_in_preferential, preferential_income)
        )
        ltcg_tax = subtract(preferential_tax, qualified_dividend_tax)

        # --- NIIT ---
        investment_income = clamp_min(sum_all([
            income.ordinary_dividends,
            income.interest_income,
            capital_income,
            income.rental_income,
        ]))
        niit = self.compute_niit(investment_income, agi, filing_status, params)

        # --- Totals ---
        total_federal = sum_all([
            ordinary_tax, qualified_dividend_tax, ltcg_tax, niit, se_tax,
        ])
        total_tax = clamp_min(subtract(total_federal, income.foreign_tax_credit))
        balance_due = subtract(
            total_tax, add(income.total_withholding, income.estimated_payments)
        )

        effective_rate = Decimal("0")
        if gross_income > 0:
            effective_rate = (total_tax / gross_income).quantize(_RATE_PLACES)
        marginal_rate = self.marginal_rate(
            taxable_ordinary, params.ordinary_brackets[filing_status]
        )

        assumptions.append(f"Tax year {params.year} brackets applied")
        assumptions.append("State income tax not included")
        logger.debug(
            "Liability %d/%s: AGI %s, taxable %s, total tax %s",
            tax_year, filing_status, agi, taxable_income, total_tax,
        )

        return TaxLiabilityResult(
            tax_year=tax_year,
            filing_status=filing_status,
            gross_income=round_to_whole_dollar(gross_income),
            self_employment_deduction=se_deduction,
            adjusted_gross_income=round_to_whole_dollar(agi),
            standard_deduction=standard_deduction,
            deduction_used=deduction_used,
            taxable_income=round_to_whole_dollar(taxable_income),
            taxable_ordinary_income=round_to_whole_dollar(taxable_ordinary),
            preferential_income=round_to_whole_dollar(preferential_income),
            ordinary_tax=ordinary_tax,
            qualified_dividend_tax=qualified_dividend_tax,
            long_term_capital_gains_tax=ltcg_tax,
            net_investment_income_tax=niit,
            self_employment_tax=se_tax,
            total_federal_tax=total_federal,
            foreign_tax_credit=income.foreign_tax_credit,
            total_tax=total_tax,
            total_withholding=income.total_withholding,
            estimated_payments=income.estimated_payments,
            balance_due=balance_due,
            effective_rate=effective_rate,
            marginal_rate=marginal_rate,
            schedule_d=schedule_d,
            assumptions=assumptions,
        )

    def compute_self_employment_tax(
        self, business_income: Decimal, params: TaxYearParameters
    ) -> tuple[Decimal, Decimal]:
        """Compute SE tax per Schedule SE.

        Returns:
            (se_tax, se_deduction), both whole dollars. Zero for no net profit.
        """
        if business_income <= 0:
            return ZERO, ZERO

        earnings = apply_rate(business_income, params.se_earnings_factor)
        social_security = apply_rate(
            min(earnings, params.se_social_security_wage_base),
            params.se_social_security_rate,
        )
        medicare = apply_rate(earnings, params.se_medicare_rate)
        additional_medicare = apply_rate(
            clamp_min(subtract(earnings, params.additional_medicare_threshold)),
            params.additional_medicare_rate,
        )
        se_tax = round_to_whole_dollar(
            sum_all([social_security, medicare, additional_medicare])
        )
        se_deduction = round_to_whole_dollar(
            apply_rate(earnings, params.se_tax_rate / 2)
        )
        return se_tax, se_deduction

    def compute_niit(
        self,
        investment_income: Decimal,
        agi: Decimal,
        filing_status: FilingStatus,
        params: TaxYearParameters,
    ) -> Decimal:
        """Compute Net Investment Income Tax (3.8%) per IRC Section 1411."""
        threshold = params.niit_threshold[filing_status]
        if agi <= threshold:
            return ZERO
        base = min(investment_income, subtract(agi, threshold))
        return round_to_whole_dollar(apply_rate(base, params.niit_rate))

    def compute_ltcg_tax(
        self,
        preferential_income: Decimal,
        taxable_income: Decimal,
        brackets: list[Bracket],
    ) -> Decimal:
        """Compute tax on LTCG and qualified dividends by stacking.

        Preferential income sits on top of ordinary income in the bracket
        structure. The portion falling in each LTCG bracket is taxed at that
        bracket's rate.
        """
        if preferential_income <= 0:
            return ZERO

        # Ordinary income fills the bottom of the brackets first
        ordinary_top = clamp_min(subtract(taxable_income, preferential_income))

        tax = ZERO
        remaining = preferential_income
        prev_bound = ZERO
        for upper_bound, rate in brackets:
            if remaining <= 0:
                break
            if upper_bound is None:
                tax = add(tax, apply_rate(remaining, rate))
                remaining = ZERO
                continue
            bracket_start = max(prev_bound, ordinary_top)
            if bracket_start < upper_bound:
                taxed_here = min(remaining, subtract(upper_bound, bracket_start))
                tax = add(tax, apply_rate(taxed_here, rate))
                remaining = subtract(remaining, taxed_here)
            prev_bound = upper_bound
        return tax

    @staticmethod
    def apply_brackets(income: Decimal, brackets: list[Bracket]) -> Decimal:
        """Apply progressive tax brackets to income."""
        tax = ZERO
        prev_bound = ZERO
        for upper_bound, rate in brackets:
            top = income if upper_bound is None else min(income, upper_bound)
            tax = add(tax, apply_rate(clamp_min(subtract(top, prev_bound)), rate))
            if upper_bound is None or income <= upper_bound:
                break
            prev_bound = upper_bound
        return tax

    @staticmethod
    def marginal_rate(income: Decimal, brackets: list[Bracket]) -> Decimal:
        """Rate of the bracket the last dollar of ordinary income falls in."""
        for upper_bound, rate in brackets:
            if upper_bound is None or income <= upper_bound:
                return rate
        return brackets[-1][1]


def estimate_tax_liability(
    tax_year: int, filing_status: FilingStatus, income: IncomeSummary
) -> TaxLiabilityResult:
    return TaxLiabilityEstimator().estimate(tax_year, filing_status, income)
