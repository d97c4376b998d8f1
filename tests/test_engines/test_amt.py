"""Tests for the AMT calculator (Form 6251) and AMT credit (Form 8801)."""

from decimal import Decimal

import pytest

from taxengine.engines.amt import AMTCalculator, compute_amt
from taxengine.engines.parameters import PARAMETERS_2025
from taxengine.models.amt import AmtInput
from taxengine.models.enums import FilingStatus


def _input(taxable: str, regular_tax: str = "0", status=FilingStatus.SINGLE, **kwargs) -> AmtInput:
    return AmtInput(
        filing_status=status,
        taxable_income=Decimal(taxable),
        regular_tax=Decimal(regular_tax),
        **kwargs,
    )


class TestComputeAmt:
    def test_high_income_single(self, high_income_amt_input):
        result = compute_amt(high_income_amt_input)
        assert result.amti == Decimal("610000.00")
        assert result.exemption_amount == Decimal("88100.00")
        assert result.exemption_phaseout_start == Decimal("609350.00")
        # 88100 - 25% x (610000 - 609350)
        assert result.reduced_exemption == Decimal("87937.50")
        assert result.amt_base == Decimal("522062.50")
        # 248300 x 26% + 273762.50 x 28% = 64558 + 76653.50
        assert result.tentative_minimum_tax == Decimal("141211.50")
        assert result.alternative_minimum_tax == Decimal("0")
        assert not result.is_subject_to_amt

    def test_below_phaseout_full_exemption(self):
        result = compute_amt(_input("500000"))
        assert result.reduced_exemption == Decimal("88100.00")
        assert result.amt_base == Decimal("411900.00")
        # 64558 + (411900 - 248300) x 28% = 64558 + 45808
        assert result.tentative_minimum_tax == Decimal("110366.00")

    def test_iso_exercise_triggers_amt(self):
        result = compute_amt(
            _input(
                "150000",
                regular_tax="30000",
                incentive_stock_option_bargain_element=Decimal("100000"),
            )
        )
        # AMTI 250000, base 161900, TMT 26% = 42094
        assert result.amti == Decimal("250000.00")
        assert result.amt_base == Decimal("161900.00")
        assert result.tentative_minimum_tax == Decimal("42094.00")
        assert result.alternative_minimum_tax == Decimal("12094.00")
        assert result.is_subject_to_amt

    def test_all_adjustments_add_to_amti(self):
        result = compute_amt(
            _input(
                "100000",
                state_and_local_tax_deduction=Decimal("10000"),
                tax_exempt_interest_from_pabs=Decimal("2000"),
                incentive_stock_option_bargain_element=Decimal("3000"),
                other_adjustments=Decimal("-500"),
            )
        )
        assert result.amti == Decimal("114500.00")

    def test_exemption_fully_phased_out(self):
        # Phase-out completes at 609350 + 4 x 88100 = 961750
        result = compute_amt(_input("1000000"))
        assert result.reduced_exemption == Decimal("0")
        assert result.amt_base == Decimal("1000000.00")

    def test_low_income_has_zero_base(self):
        result = compute_amt(_input("50000"))
        assert result.amt_base == Decimal("0")
        assert result.tentative_minimum_tax == Decimal("0")
        assert not result.is_subject_to_amt

    @pytest.mark.parametrize(
        "status,exemption,phaseout",
        [
            (FilingStatus.MFJ, "137000", "1218700"),
            (FilingStatus.MFS, "68500", "609350"),
            (FilingStatus.HOH, "88100", "609350"),
        ],
    )
    def test_parameters_by_status(self, status, exemption, phaseout):
        result = compute_amt(_input("100000", status=status))
        assert result.exemption_amount == Decimal(exemption)
        assert result.exemption_phaseout_start == Decimal(phaseout)

    def test_mfs_uses_half_threshold(self):
        result = compute_amt(_input("300000", status=FilingStatus.MFS))
        # base 231500; 124150 x 26% + 107350 x 28% = 32279 + 30058
        assert result.amt_base == Decimal("231500.00")
        assert result.tentative_minimum_tax == Decimal("62337.00")

    def test_2024_parameters(self):
        result = compute_amt(_input("100000", tax_year=2024))
        assert result.exemption_amount == Decimal("85700.00")

    def test_not_subject_whenever_tmt_at_most_regular_tax(self):
        for regular in ("42094", "50000"):
            result = compute_amt(
                _input("150000", regular_tax=regular,
                       incentive_stock_option_bargain_element=Decimal("100000"))
            )
            assert not result.is_subject_to_amt

    def test_exemption_non_increasing_and_non_negative(self):
        previous = None
        for amti in range(600000, 1100000, 25000):
            exemption = compute_amt(_input(str(amti))).reduced_exemption
            assert exemption >= 0
            if previous is not None:
                assert exemption <= previous
            previous = exemption

    def test_injected_table(self):
        calculator = AMTCalculator(table={2025: PARAMETERS_2025})
        result = calculator.compute_amt(_input("100000", tax_year=2031))
        assert result.exemption_amount == Decimal("88100.00")


class TestAmtCredit:
    def setup_method(self):
        self.calculator = AMTCalculator()

    def test_credit_limited_by_excess_regular_tax(self):
        result = self.calculator.compute_amt_credit(
            Decimal("20000"), regular_tax=Decimal("50000"), tentative_minimum_tax=Decimal("42000")
        )
        assert result.credit_used == Decimal("8000.00")
        assert result.credit_remaining == Decimal("12000.00")

    def test_credit_fully_used(self):
        result = self.calculator.compute_amt_credit(
            Decimal("5000"), Decimal("50000"), Decimal("30000")
        )
        assert result.credit_used == Decimal("5000.00")
        assert result.credit_remaining == Decimal("0")

    def test_no_credit_in_amt_year(self):
        result = self.calculator.compute_amt_credit(
            Decimal("5000"), Decimal("30000"), Decimal("42000")
        )
        assert result.credit_used == Decimal("0")
        assert result.credit_remaining == Decimal("5000.00")

    def test_no_prior_credit(self):
        result = self.calculator.compute_amt_credit(
            Decimal("0"), Decimal("50000"), Decimal("30000")
        )
        assert result.credit_used == Decimal("0")
        assert result.credit_remaining == Decimal("0")
