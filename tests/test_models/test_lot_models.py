"""Tests for lot, selection method and wash sale models."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import TypeAdapter, ValidationError

from taxengine.models.enums import LotMethod
from taxengine.models.lots import Fifo, LotSelectionMethod, SpecificId, TaxLot
from taxengine.models.wash_sale import PurchaseRecord, SaleRecord


class TestTaxLot:
    def test_symbol_normalized(self):
        lot = TaxLot(
            id="X",
            symbol=" acme ",
            acquisition_date=date(2024, 1, 2),
            quantity=Decimal("10"),
            adjusted_basis=Decimal("1000"),
        )
        assert lot.symbol == "ACME"
        assert lot.wash_sale_adjustment == Decimal("0")
        assert lot.account_id is None

    def test_basis_rounded_to_cents(self):
        lot = TaxLot(
            id="X",
            symbol="ACME",
            acquisition_date=date(2024, 1, 2),
            quantity=Decimal("3"),
            adjusted_basis=Decimal("100.005"),
        )
        assert lot.adjusted_basis == Decimal("100.01")

    def test_cost_basis_per_share(self, lot_a: TaxLot):
        assert lot_a.cost_basis_per_share == Decimal("150")

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            TaxLot(
                id="X",
                symbol="ACME",
                acquisition_date=date(2024, 1, 2),
                quantity=Decimal("0"),
                adjusted_basis=Decimal("0"),
            )

    def test_frozen(self, lot_a: TaxLot):
        with pytest.raises(ValidationError):
            lot_a.quantity = Decimal("1")


class TestSelectionMethod:
    adapter = TypeAdapter(LotSelectionMethod)

    def test_discriminated_by_kind(self):
        method = self.adapter.validate_python({"kind": "specific_id", "lot_ids": ["B", "A"]})
        assert isinstance(method, SpecificId)
        assert method.lot_ids == ["B", "A"]

    def test_plain_method(self):
        assert isinstance(self.adapter.validate_python({"kind": "fifo"}), Fifo)
        assert Fifo().kind == LotMethod.FIFO

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            self.adapter.validate_python({"kind": "hifo"})


class TestWashSaleRecords:
    def test_sale_symbol_normalized(self):
        sale = SaleRecord(lot_id="L", symbol="acme", sale_date=date(2025, 1, 2), loss=Decimal("-5"))
        assert sale.symbol == "ACME"
        assert sale.loss == Decimal("-5.00")

    def test_purchase_quantity_positive(self):
        with pytest.raises(ValidationError):
            PurchaseRecord(
                lot_id="P",
                symbol="ACME",
                purchase_date=date(2025, 1, 2),
                quantity=Decimal("-1"),
                cost_basis=Decimal("10"),
            )
