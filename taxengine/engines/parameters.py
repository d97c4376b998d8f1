"""Tax parameter tables.

Ordinary and LTCG brackets, standard deductions, NIIT, self-employment,
capital loss, AMT and estimated-tax constants. Keyed by tax year, then by
filing status. Never hardcode these figures in computation functions: engines
take a table in their constructor.

Sources:
  - 2024: IRS Rev. Proc. 2023-34, Form 1040-ES (2024)
  - 2025: IRS Rev. Proc. 2024-40, Form 1040-ES (2025)
"""

import logging
from datetime import date, timedelta
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from taxengine.models.enums import FilingStatus

logger = logging.getLogger(__name__)

# (upper_bound, rate); upper bound is None for the top bracket.
Bracket = tuple[Decimal | None, Decimal]


class AmtParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    exemption: Decimal
    phaseout_start: Decimal
    bracket_threshold: Decimal  # Top of the 26% band


class TaxYearParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    ordinary_brackets: dict[FilingStatus, list[Bracket]]
    ltcg_brackets: dict[FilingStatus, list[Bracket]]
    standard_deduction: dict[FilingStatus, Decimal]
    capital_loss_limit: dict[FilingStatus, Decimal]

    # Net Investment Income Tax, IRC Section 1411 (thresholds are statutory)
    niit_rate: Decimal = Decimal("0.038")
    niit_threshold: dict[FilingStatus, Decimal]

    # Self-employment tax, Schedule SE
    se_earnings_factor: Decimal = Decimal("0.9235")
    se_tax_rate: Decimal = Decimal("0.153")
    se_social_security_rate: Decimal = Decimal("0.124")
    se_medicare_rate: Decimal = Decimal("0.029")
    se_social_security_wage_base: Decimal
    additional_medicare_rate: Decimal = Decimal("0.009")
    additional_medicare_threshold: Decimal = Decimal("200000")

    # AMT, Form 6251
    amt: dict[FilingStatus, AmtParameters]
    amt_low_rate: Decimal = Decimal("0.26")
    amt_high_rate: Decimal = Decimal("0.28")
    amt_phaseout_rate: Decimal = Decimal("0.25")

    # Estimated tax, Form 1040-ES
    safe_harbor_current_year_rate: Decimal = Decimal("0.90")
    safe_harbor_prior_year_rate: Decimal = Decimal("1.00")
    safe_harbor_high_income_prior_year_rate: Decimal = Decimal("1.10")
    safe_harbor_high_income_agi: dict[FilingStatus, Decimal]
    quarterly_due_dates: list[date] = []


_NIIT_THRESHOLD = {
    FilingStatus.SINGLE: Decimal("200000"),
    FilingStatus.MFJ: Decimal("250000"),
    FilingStatus.MFS: Decimal("125000"),
    FilingStatus.HOH: Decimal("200000"),
}

# IRC Section 1211(b)
_CAPITAL_LOSS_LIMIT = {
    FilingStatus.SINGLE: Decimal("3000"),
    FilingStatus.MFJ: Decimal("3000"),
    FilingStatus.MFS: Decimal("1500"),
    FilingStatus.HOH: Decimal("3000"),
}

# AGI above which the prior-year safe harbor is 110%
_HIGH_INCOME_AGI = {
    FilingStatus.SINGLE: Decimal("150000"),
    FilingStatus.MFJ: Decimal("150000"),
    FilingStatus.MFS: Decimal("75000"),
    FilingStatus.HOH: Decimal("150000"),
}


def _brackets(*rows: tuple[str | None, str]) -> list[Bracket]:
    return [
        (Decimal(bound) if bound is not None else None, Decimal(rate))
        for bound, rate in rows
    ]


# ---------------------------------------------------------------------------
# 2024
# ---------------------------------------------------------------------------
PARAMETERS_2024 = TaxYearParameters(
    year=2024,
    ordinary_brackets={
        FilingStatus.SINGLE: _brackets(
            ("11600", "0.10"), ("47150", "0.12"), ("100525", "0.22"),
            ("191950", "0.24"), ("243725", "0.32"), ("609350", "0.35"),
            (None, "0.37"),
        ),
        FilingStatus.MFJ: _brackets(
            ("23200", "0.10"), ("94300", "0.12"), ("201050", "0.22"),
            ("383900", "0.24"), ("487450", "0.32"), ("731200", "0.35"),
            (None, "0.37"),
        ),
        FilingStatus.MFS: _brackets(
            ("11600", "0.10"), ("47150", "0.12"), ("100525", "0.22"),
            ("191950", "0.24"), ("243725", "0.32"), ("365600", "0.35"),
            (None, "0.37"),
        ),
        FilingStatus.HOH: _brackets(
            ("16550", "0.10"), ("63100", "0.12"), ("100500", "0.22"),
            ("191950", "0.24"), ("243700", "0.32"), ("609350", "0.35"),
            (None, "0.37"),
        ),
    },
    ltcg_brackets={
        FilingStatus.SINGLE: _brackets(("47025", "0.00"), ("518900", "0.15"), (None, "0.20")),
        FilingStatus.MFJ: _brackets(("94050", "0.00"), ("583750", "0.15"), (None, "0.20")),
        FilingStatus.MFS: _brackets(("47025", "0.00"), ("291850", "0.15"), (None, "0.20")),
        FilingStatus.HOH: _brackets(("63000", "0.00"), ("551350", "0.15"), (None, "0.20")),
    },
    standard_deduction={
        FilingStatus.SINGLE: Decimal("14600"),
        FilingStatus.MFJ: Decimal("29200"),
        FilingStatus.MFS: Decimal("14600"),
        FilingStatus.HOH: Decimal("21900"),
    },
    capital_loss_limit=_CAPITAL_LOSS_LIMIT,
    niit_threshold=_NIIT_THRESHOLD,
    se_social_security_wage_base=Decimal("168600"),
    amt={
        FilingStatus.SINGLE: AmtParameters(
            exemption=Decimal("85700"), phaseout_start=Decimal("609350"),
            bracket_threshold=Decimal("232600"),
        ),
        FilingStatus.MFJ: AmtParameters(
            exemption=Decimal("133300"), phaseout_start=Decimal("1218700"),
            bracket_threshold=Decimal("232600"),
        ),
        FilingStatus.MFS: AmtParameters(
            exemption=Decimal("66650"), phaseout_start=Decimal("609350"),
            bracket_threshold=Decimal("116300"),
        ),
        FilingStatus.HOH: AmtParameters(
            exemption=Decimal("85700"), phaseout_start=Decimal("609350"),
            bracket_threshold=Decimal("232600"),
        ),
    },
    safe_harbor_high_income_agi=_HIGH_INCOME_AGI,
    quarterly_due_dates=[
        date(2024, 4, 15),
        date(2024, 6, 17),
        date(2024, 9, 16),
        date(2025, 1, 15),
    ],
)

# ---------------------------------------------------------------------------
# 2025
# ---------------------------------------------------------------------------
PARAMETERS_2025 = TaxYearParameters(
    year=2025,
    ordinary_brackets={
        FilingStatus.SINGLE: _brackets(
            ("11925", "0.10"), ("48475", "0.12"), ("103350", "0.22"),
            ("197300", "0.24"), ("250525", "0.32"), ("626350", "0.35"),
            (None, "0.37"),
        ),
        FilingStatus.MFJ: _brackets(
            ("23850", "0.10"), ("96950", "0.12"), ("206700", "0.22"),
            ("394600", "0.24"), ("501050", "0.32"), ("751600", "0.35"),
            (None, "0.37"),
        ),
        FilingStatus.MFS: _brackets(
            ("11925", "0.10"), ("48475", "0.12"), ("103350", "0.22"),
            ("197300", "0.24"), ("250525", "0.32"), ("375800", "0.35"),
            (None, "0.37"),
        ),
        FilingStatus.HOH: _brackets(
            ("17000", "0.10"), ("64850", "0.12"), ("103350", "0.22"),
            ("197300", "0.24"), ("250500", "0.32"), ("626350", "0.35"),
            (None, "0.37"),
        ),
    },
    ltcg_brackets={
        FilingStatus.SINGLE: _brackets(("48350", "0.00"), ("533400", "0.15"), (None, "0.20")),
        FilingStatus.MFJ: _brackets(("96700", "0.00"), ("600050", "0.15"), (None, "0.20")),
        FilingStatus.MFS: _brackets(("48350", "0.00"), ("300000", "0.15"), (None, "0.20")),
        FilingStatus.HOH: _brackets(("64750", "0.00"), ("566700", "0.15"), (None, "0.20")),
    },
    standard_deduction={
        FilingStatus.SINGLE: Decimal("15000"),
        FilingStatus.MFJ: Decimal("30000"),
        FilingStatus.MFS: Decimal("15000"),
        FilingStatus.HOH: Decimal("22500"),
    },
    capital_loss_limit=_CAPITAL_LOSS_LIMIT,
    niit_threshold=_NIIT_THRESHOLD,
    se_social_security_wage_base=Decimal("176100"),
    amt={
        FilingStatus.SINGLE: AmtParameters(
            exemption=Decimal("88100"), phaseout_start=Decimal("609350"),
            bracket_threshold=Decimal("248300"),
        ),
        FilingStatus.MFJ: AmtParameters(
            exemption=Decimal("137000"), phaseout_start=Decimal("1218700"),
            bracket_threshold=Decimal("248300"),
        ),
        FilingStatus.MFS: AmtParameters(
            exemption=Decimal("68500"), phaseout_start=Decimal("609350"),
            bracket_threshold=Decimal("124150"),
        ),
        FilingStatus.HOH: AmtParameters(
            exemption=Decimal("88100"), phaseout_start=Decimal("609350"),
            bracket_threshold=Decimal("248300"),
        ),
    },
    safe_harbor_high_income_agi=_HIGH_INCOME_AGI,
    quarterly_due_dates=[
        date(2025, 4, 15),
        date(2025, 6, 16),
        date(2025, 9, 15),
        date(2026, 1, 15),
    ],
)

TAX_YEAR_PARAMETERS: dict[int, TaxYearParameters] = {
    2024: PARAMETERS_2024,
    2025: PARAMETERS_2025,
}

DEFAULT_TAX_YEAR = 2025


def get_parameters(
    tax_year: int,
    table: dict[int, TaxYearParameters] | None = None,
) -> TaxYearParameters:
    """Resolve the parameters for a tax year.

    An unconfigured year falls back to the nearest configured year (the
    later one on a tie) and logs a warning.
    """
    table = TAX_YEAR_PARAMETERS if table is None else table
    if tax_year in table:
        return table[tax_year]
    if not table:
        raise ValueError("Parameter table is empty")

    nearest = min(table, key=lambda year: (abs(year - tax_year), -year))
    logger.warning(
        "No tax parameters for %d; using %d figures instead", tax_year, nearest
    )
    return table[nearest]


def _roll_past_weekend(day: date) -> date:
    while day.weekday() >= 5:
        day += timedelta(days=1)
    return day


def default_quarterly_due_dates(tax_year: int) -> list[date]:
    """April 15, June 15, September 15 and January 15, moved off weekends."""
    return [
        _roll_past_weekend(date(tax_year, 4, 15)),
        _roll_past_weekend(date(tax_year, 6, 15)),
        _roll_past_weekend(date(tax_year, 9, 15)),
        _roll_past_weekend(date(tax_year + 1, 1, 15)),
    ]


def quarterly_due_dates(
    tax_year: int,
    table: dict[int, TaxYearParameters] | None = None,
) -> list[date]:
    """Published due dates when the year is configured, else the default schedule."""
    table = TAX_YEAR_PARAMETERS if table is None else table
    params = table.get(tax_year)
    if params is not None and len(params.quarterly_due_dates) == 4:
        return list(params.quarterly_due_dates)
    return default_quarterly_due_dates(tax_year)
