"""Alternative Minimum Tax engine.

Implements the Form 6251 computation (AMTI, exemption phase-out, 26%/28%
tentative minimum tax) and the AMT credit carryforward per Form 8801.
"""

import logging
from decimal import Decimal

from taxengine.engines.parameters import TaxYearParameters, get_parameters
from taxengine.models.amt import AmtCreditResult, AmtInput, AmtResult
from taxengine.money import (
    ZERO,
    add,
    apply_rate,
    clamp_min,
    round_to_cents,
    subtract,
    sum_all,
)

logger = logging.getLogger(__name__)


class AMTCalculator:
    """Computes AMT from regular taxable income and Form 6251 adjustments."""

    def __init__(self, table: dict[int, TaxYearParameters] | None = None) -> None:
        self.table = table

    def compute_amt(self, amt_input: AmtInput) -> AmtResult:
        params = get_parameters(amt_input.tax_year, self.table)
        status_params = params.amt[amt_input.filing_status]

        # Step 1: AMTI
        amti = sum_all([
            amt_input.taxable_income,
            amt_input.state_and_local_tax_deduction,
            amt_input.tax_exempt_interest_from_pabs,
            amt_input.incentive_stock_option_bargain_element,
            amt_input.other_adjustments,
        ])

        # Step 2: Exemption, reduced by 25% of AMTI above the phase-out start
        exemption = status_params.exemption
        phaseout_start = status_params.phaseout_start
        if amti <= phaseout_start:
            reduced_exemption = round_to_cents(exemption)
        else:
            reduction = apply_rate(subtract(amti, phaseout_start), params.amt_phaseout_rate)
            reduced_exemption = clamp_min(subtract(exemption, reduction))

        # Step 3: AMT base
        amt_base = clamp_min(subtract(amti, reduced_exemption))

        # Step 4: Tentative minimum tax, 26% up to the threshold, 28% above it
        tmt = self._tentative_minimum_tax(
            amt_base,
            status_params.bracket_threshold,
            params.amt_low_rate,
            params.amt_high_rate,
        )

        # Step 5: AMT is the excess over regular tax
        amt = clamp_min(subtract(tmt, amt_input.regular_tax))
        logger.debug(
            "AMT %d/%s: AMTI %s, exemption %s, base %s, TMT %s, AMT %s",
            params.year, amt_input.filing_status, amti,
            reduced_exemption, amt_base, tmt, amt,
        )

        return AmtResult(
            tax_year=amt_input.tax_year,
            filing_status=amt_input.filing_status,
            amti=amti,
            exemption_amount=exemption,
            exemption_phaseout_start=phaseout_start,
            reduced_exemption=reduced_exemption,
            amt_base=amt_base,
            tentative_minimum_tax=tmt,
            regular_tax=amt_input.regular_tax,
            alternative_minimum_tax=amt,
            is_subject_to_amt=amt > 0,
        )

    @staticmethod
    def _tentative_minimum_tax(
        amt_base: Decimal,
        threshold: Decimal,
        low_rate: Decimal,
        high_rate: Decimal,
    ) -> Decimal:
        if amt_base <= threshold:
            return apply_rate(amt_base, low_rate)
        return add(
            apply_rate(threshold, low_rate),
            apply_rate(subtract(amt_base, threshold), high_rate),
        )

    def compute_amt_credit(
        self,
        prior_year_credit: Decimal,
        regular_tax: Decimal,
        tentative_minimum_tax: Decimal,
    ) -> AmtCreditResult:
        """Compute the usable AMT credit per Form 8801.

        The credit is limited to the amount by which regular tax exceeds
        TMT, so none is usable in a year that itself owes AMT.
        """
        if prior_year_credit <= 0:
            return AmtCreditResult(credit_used=ZERO, credit_remaining=ZERO)

        limit = clamp_min(subtract(regular_tax, tentative_minimum_tax))
        credit_used = min(round_to_cents(prior_year_credit), limit)
        return AmtCreditResult(
            credit_used=credit_used,
            credit_remaining=subtract(prior_year_credit, credit_used),
        )


def compute_amt(amt_input: AmtInput) -> AmtResult:
    return AMTCalculator().compute_amt(amt_input)
