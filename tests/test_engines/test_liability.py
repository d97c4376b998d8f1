"""Tests for the federal tax liability estimator."""

from decimal import Decimal

import pytest

from taxengine.engines.liability import TaxLiabilityEstimator, estimate_tax_liability
from taxengine.engines.parameters import PARAMETERS_2025
from taxengine.models.enums import FilingStatus
from taxengine.models.estimates import IncomeSummary


def _income(**kwargs) -> IncomeSummary:
    return IncomeSummary(**{k: Decimal(v) for k, v in kwargs.items()})


class TestOrdinaryIncome:
    def test_wage_earner(self, wage_earner_income):
        result = estimate_tax_liability(2025, FilingStatus.SINGLE, wage_earner_income)
        assert result.gross_income == Decimal("100000")
        assert result.adjusted_gross_income == Decimal("100000")
        assert result.deduction_used == Decimal("15000")
        assert result.taxable_income == Decimal("85000")
        # 1192.50 + 4386 + 8035.50
        assert result.ordinary_tax == Decimal("13614")
        assert result.total_tax == Decimal("13614")
        assert result.balance_due == Decimal("5614.00")
        assert result.marginal_rate == Decimal("0.22")
        assert result.effective_rate == Decimal("0.1361")
        assert "Using standard deduction" in result.assumptions

    def test_itemized_deductions_used_when_larger(self):
        result = estimate_tax_liability(
            2025, FilingStatus.SINGLE, _income(wages="100000", deductions="20000")
        )
        assert result.deduction_used == Decimal("20000.00")
        assert result.taxable_income == Decimal("80000")
        assert "Using itemized deductions" in result.assumptions

    def test_income_below_deduction(self):
        result = estimate_tax_liability(2025, FilingStatus.MFJ, _income(wages="20000"))
        assert result.taxable_income == Decimal("0")
        assert result.total_tax == Decimal("0")
        assert result.marginal_rate == Decimal("0.10")

    def test_no_income(self):
        result = estimate_tax_liability(2025, FilingStatus.SINGLE, IncomeSummary())
        assert result.total_tax == Decimal("0")
        assert result.effective_rate == Decimal("0")


class TestPreferentialIncome:
    def test_ltcg_in_zero_bracket(self):
        result = estimate_tax_liability(
            2025, FilingStatus.SINGLE, _income(wages="40000", long_term_gains="20000")
        )
        assert result.taxable_income == Decimal("45000")
        assert result.preferential_income == Decimal("20000")
        # 1192.50 + 13075 x 12% = 2761.50
        assert result.ordinary_tax == Decimal("2762")
        assert result.long_term_capital_gains_tax == Decimal("0")

    def test_ltcg_stacked_at_fifteen_percent(self):
        result = estimate_tax_liability(
            2025, FilingStatus.SINGLE, _income(wages="100000", long_term_gains="50000")
        )
        assert result.taxable_ordinary_income == Decimal("85000")
        assert result.ordinary_tax == Decimal("13614")
        assert result.long_term_capital_gains_tax == Decimal("7500")
        assert result.total_tax == Decimal("21114")

    def test_qualified_dividend_share(self):
        result = estimate_tax_liability(
            2025,
            FilingStatus.SINGLE,
            _income(
                wages="100000",
                ordinary_dividends="10000",
                qualified_dividends="10000",
                long_term_gains="30000",
            ),
        )
        # Preferential 40000 x 15% = 6000, a quarter from dividends
        assert result.qualified_dividend_tax == Decimal("1500")
        assert result.long_term_capital_gains_tax == Decimal("4500")

    def test_short_term_loss_offsets_long_term_gain(self):
        result = estimate_tax_liability(
            2025,
            FilingStatus.SINGLE,
            _income(wages="100000", long_term_gains="50000", short_term_gains="-20000"),
        )
        assert result.schedule_d.net_capital_gain_loss == Decimal("30000.00")
        assert result.preferential_income == Decimal("30000")
        assert result.long_term_capital_gains_tax == Decimal("4500")


class TestCapitalLosses:
    def test_loss_deduction_capped(self):
        result = estimate_tax_liability(
            2025, FilingStatus.SINGLE, _income(wages="100000", short_term_gains="-10000")
        )
        assert result.gross_income == Decimal("97000")
        assert result.taxable_income == Decimal("82000")
        assert result.ordinary_tax == Decimal("12954")
        assert result.schedule_d.short_term_carryover_to_next_year == Decimal("-7000.00")
        assert any("Capital loss deduction" in a for a in result.assumptions)

    def test_prior_year_carryover_applied(self):
        result = estimate_tax_liability(
            2025,
            FilingStatus.SINGLE,
            _income(
                wages="100000",
                long_term_gains="10000",
                capital_loss_carryover_long_term="-4000",
            ),
        )
        assert result.schedule_d.net_long_term_gain_loss == Decimal("6000.00")
        assert result.gross_income == Decimal("106000")


class TestOtherTaxes:
    def test_self_employment(self):
        result = estimate_tax_liability(
            2025, FilingStatus.SINGLE, _income(business_income="100000")
        )
        # 92350 x 12.4% + 92350 x 2.9% = 11451.40 + 2678.15
        assert result.self_employment_tax == Decimal("14130")
        # 92350 x 7.65% = 7064.78
        assert result.self_employment_deduction == Decimal("7065")
        assert result.adjusted_gross_income == Decimal("92935")
        assert result.ordinary_tax == Decimal("12060")
        assert result.total_tax == Decimal("26190")

    def test_self_employment_above_wage_base(self):
        estimator = TaxLiabilityEstimator()
        se_tax, _ = estimator.compute_self_employment_tax(Decimal("300000"), PARAMETERS_2025)
        # earnings 277050: 176100 x 12.4% + 277050 x 2.9% + 77050 x 0.9%
        # = 21836.40 + 8034.45 + 693.45
        assert se_tax == Decimal("30564")

    def test_business_loss_has_no_se_tax(self):
        result = estimate_tax_liability(
            2025, FilingStatus.SINGLE, _income(wages="50000", business_income="-5000")
        )
        assert result.self_employment_tax == Decimal("0")
        assert result.gross_income == Decimal("45000")

    def test_niit(self):
        result = estimate_tax_liability(
            2025, FilingStatus.SINGLE, _income(wages="250000", interest_income="20000")
        )
        # min(20000, 270000 - 200000) x 3.8%
        assert result.net_investment_income_tax == Decimal("760")

    def test_niit_limited_by_excess_agi(self):
        result = estimate_tax_liability(
            2025, FilingStatus.MFJ, _income(wages="240000", interest_income="20000")
        )
        # min(20000, 260000 - 250000) x 3.8%
        assert result.net_investment_income_tax == Decimal("380")

    def test_foreign_tax_credit(self, wage_earner_income):
        income = wage_earner_income.model_copy(update={"foreign_tax_credit": Decimal("614.00")})
        result = estimate_tax_liability(2025, FilingStatus.SINGLE, income)
        assert result.total_federal_tax == Decimal("13614")
        assert result.total_tax == Decimal("13000")

    def test_foreign_tax_credit_cannot_go_negative(self):
        result = estimate_tax_liability(
            2025, FilingStatus.SINGLE, _income(wages="10000", foreign_tax_credit="500")
        )
        assert result.total_tax == Decimal("0")


class TestBrackets:
    @pytest.mark.parametrize(
        "income,expected",
        [
            ("0", "0"),
            ("11925", "1192.50"),
            ("48475", "5578.50"),
        ],
    )
    def test_apply_brackets(self, income, expected):
        brackets = PARAMETERS_2025.ordinary_brackets[FilingStatus.SINGLE]
        assert TaxLiabilityEstimator.apply_brackets(Decimal(income), brackets) == Decimal(expected)

    def test_top_bracket(self):
        brackets = PARAMETERS_2025.ordinary_brackets[FilingStatus.SINGLE]
        assert TaxLiabilityEstimator.marginal_rate(Decimal("1000000"), brackets) == Decimal("0.37")

    def test_unconfigured_year_falls_back(self, wage_earner_income):
        result = estimate_tax_liability(2030, FilingStatus.SINGLE, wage_earner_income)
        assert result.tax_year == 2030
        assert result.ordinary_tax == Decimal("13614")
        assert any("2025 figures used" in a for a in result.assumptions)
