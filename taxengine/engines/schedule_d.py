"""Schedule D capital gain and loss netting.

Nets short-term and long-term results with prior-year carryovers, limits
the net loss deduction per IRC Section 1211(b) ($3,000, or $1,500 married
filing separately), and carries the rest forward keeping its character.
"""

import logging
from decimal import Decimal

from taxengine.engines.parameters import DEFAULT_TAX_YEAR, TaxYearParameters, get_parameters
from taxengine.models.enums import FilingStatus
from taxengine.models.estimates import ScheduleDInput, ScheduleDResult
from taxengine.money import ZERO, add, sum_all

logger = logging.getLogger(__name__)


def compute_schedule_d(
    schedule: ScheduleDInput,
    filing_status: FilingStatus,
    params: TaxYearParameters | None = None,
) -> ScheduleDResult:
    params = params or get_parameters(DEFAULT_TAX_YEAR)

    net_short = add(schedule.short_term_gain_loss, schedule.short_term_carryover)
    net_long = sum_all([
        schedule.long_term_gain_loss,
        schedule.long_term_carryover,
        schedule.capital_gain_distributions,
    ])
    net_total = add(net_short, net_long)

    deduction = ZERO
    if net_total < 0:
        deduction = min(-net_total, params.capital_loss_limit[filing_status])

    st_carry, lt_carry = _carryover(net_short, net_long, deduction)
    logger.debug(
        "Schedule D: net ST %s, net LT %s, deduction %s, carryover ST %s LT %s",
        net_short, net_long, deduction, st_carry, lt_carry,
    )
    return ScheduleDResult(
        net_short_term_gain_loss=net_short,
        net_long_term_gain_loss=net_long,
        net_capital_gain_loss=net_total,
        capital_loss_deduction=deduction,
        short_term_carryover_to_next_year=st_carry,
        long_term_carryover_to_next_year=lt_carry,
        qualifies_for_preferential_rates=net_long > 0,
    )


def _carryover(
    net_short: Decimal, net_long: Decimal, deduction: Decimal
) -> tuple[Decimal, Decimal]:
    """Split the unused net loss into short-term and long-term carryovers.

    A gain in one character first offsets a loss in the other. The allowed
    deduction then absorbs short-term loss before long-term loss.
    """
    net_total = add(net_short, net_long)
    if net_total >= 0:
        return ZERO, ZERO

    if net_short >= 0:
        st_loss, lt_loss = ZERO, net_total
    elif net_long >= 0:
        st_loss, lt_loss = net_total, ZERO
    else:
        st_loss, lt_loss = net_short, net_long

    st_absorbed = min(-st_loss, deduction)
    st_loss = add(st_loss, st_absorbed)
    lt_absorbed = min(-lt_loss, deduction - st_absorbed)
    lt_loss = add(lt_loss, lt_absorbed)
    return st_loss, lt_loss
