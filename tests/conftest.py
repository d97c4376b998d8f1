"""Shared test fixtures for the tax engine."""

from datetime import date
from decimal import Decimal

import pytest

from taxengine.models.amt import AmtInput
from taxengine.models.enums import FilingStatus
from taxengine.models.estimates import IncomeSummary
from taxengine.models.lots import TaxLot
from taxengine.models.wash_sale import PurchaseRecord, SaleRecord


@pytest.fixture
def lot_a() -> TaxLot:
    return TaxLot(
        id="A",
        symbol="ACME",
        acquisition_date=date(2023, 1, 1),
        quantity=Decimal("100"),
        adjusted_basis=Decimal("15000"),
    )


@pytest.fixture
def lot_b() -> TaxLot:
    return TaxLot(
        id="B",
        symbol="ACME",
        acquisition_date=date(2024, 6, 1),
        quantity=Decimal("50"),
        adjusted_basis=Decimal("9000"),
    )


@pytest.fixture
def two_lots(lot_a: TaxLot, lot_b: TaxLot) -> list[TaxLot]:
    return [lot_a, lot_b]


@pytest.fixture
def loss_sale() -> SaleRecord:
    return SaleRecord(
        lot_id="L1",
        symbol="ACME",
        sale_date=date(2025, 3, 15),
        loss=Decimal("-1200.00"),
    )


@pytest.fixture
def replacement_purchase() -> PurchaseRecord:
    return PurchaseRecord(
        lot_id="L2",
        symbol="ACME",
        purchase_date=date(2025, 3, 25),
        quantity=Decimal("10"),
        cost_basis=Decimal("900.00"),
    )


@pytest.fixture
def high_income_amt_input() -> AmtInput:
    return AmtInput(
        filing_status=FilingStatus.SINGLE,
        taxable_income=Decimal("600000"),
        state_and_local_tax_deduction=Decimal("10000"),
        regular_tax=Decimal("150000"),
        tax_year=2025,
    )


@pytest.fixture
def wage_earner_income() -> IncomeSummary:
    return IncomeSummary(
        wages=Decimal("100000"),
        total_withholding=Decimal("8000"),
    )
