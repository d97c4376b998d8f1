"""Wash sale detection per IRC Section 1091.

A realized loss is disallowed when substantially identical stock (here: the
same symbol) is bought within 30 days before or after the sale, a 61-day
window counting the sale date. The disallowed loss is added to the basis of
the replacement shares.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from taxengine.models.lots import TaxLot
from taxengine.models.wash_sale import (
    PurchaseRecord,
    SaleRecord,
    WashSaleCheckResult,
    WashSaleViolation,
)
from taxengine.money import add, round_to_cents, sum_all

logger = logging.getLogger(__name__)

WASH_SALE_WINDOW_DAYS = 30


def _in_window(sale_date: date, purchase_date: date) -> bool:
    return abs((purchase_date - sale_date).days) <= WASH_SALE_WINDOW_DAYS


class WashSaleDetector:
    """Matches loss sales to replacement purchases."""

    def check_wash_sales(
        self,
        sales: Sequence[SaleRecord],
        purchases: Sequence[PurchaseRecord],
    ) -> WashSaleCheckResult:
        """Detect wash sales across a set of sales and purchases.

        Loss sales are processed in input order. Each takes the earliest
        unconsumed replacement purchase in its window (input order breaks
        ties), and a purchase replaces at most one sale. A purchase with the
        same lot id as the sold lot is the sold shares themselves and never
        counts as a replacement.
        """
        violations: list[WashSaleViolation] = []
        consumed: frozenset[str] = frozenset()

        for sale in sales:
            if sale.loss >= 0:
                continue
            candidates = [
                p for p in purchases
                if p.symbol == sale.symbol
                and p.lot_id != sale.lot_id
                and p.lot_id not in consumed
                and _in_window(sale.sale_date, p.purchase_date)
            ]
            if not candidates:
                continue

            replacement = min(candidates, key=lambda p: p.purchase_date)
            consumed = consumed | {replacement.lot_id}
            disallowed = round_to_cents(abs(sale.loss))
            logger.debug(
                "Wash sale: %s lot %s sold %s matched to lot %s bought %s",
                sale.symbol, sale.lot_id, sale.sale_date,
                replacement.lot_id, replacement.purchase_date,
            )
            violations.append(
                WashSaleViolation(
                    sold_lot_id=sale.lot_id,
                    replacement_lot_id=replacement.lot_id,
                    symbol=sale.symbol,
                    sale_date=sale.sale_date,
                    replacement_date=replacement.purchase_date,
                    disallowed_loss=disallowed,
                    basis_adjustment=disallowed,
                )
            )

        return WashSaleCheckResult(
            violations=violations,
            total_disallowed_loss=sum_all(v.disallowed_loss for v in violations),
            compliant=not violations,
        )

    def would_trigger_wash_sale(
        self,
        symbol: str,
        proposed_sale_date: date,
        recent_purchases: Iterable[PurchaseRecord],
    ) -> bool:
        """True if any same-symbol purchase falls in the sale's window."""
        symbol = symbol.strip().upper()
        return any(
            p.symbol == symbol and _in_window(proposed_sale_date, p.purchase_date)
            for p in recent_purchases
        )

    @staticmethod
    def earliest_safe_repurchase_date(sale_date: date) -> date:
        return sale_date + timedelta(days=WASH_SALE_WINDOW_DAYS + 1)

    def apply_basis_adjustments(
        self,
        lots: Sequence[TaxLot],
        result: WashSaleCheckResult,
    ) -> list[TaxLot]:
        """Return lots with disallowed losses added to replacement lot basis.

        Lots not named as a replacement come back unchanged. Inputs are not
        modified.
        """
        adjustments: dict[str, list] = {}
        for violation in result.violations:
            adjustments.setdefault(violation.replacement_lot_id, []).append(
                violation.basis_adjustment
            )

        adjusted = []
        for lot in lots:
            amounts = adjustments.get(lot.id)
            if not amounts:
                adjusted.append(lot)
                continue
            total = sum_all(amounts)
            adjusted.append(
                lot.model_copy(update={
                    "adjusted_basis": add(lot.adjusted_basis, total),
                    "wash_sale_adjustment": add(lot.wash_sale_adjustment, total),
                })
            )
        return adjusted


_default_detector = WashSaleDetector()


def check_wash_sales(
    sales: Sequence[SaleRecord], purchases: Sequence[PurchaseRecord]
) -> WashSaleCheckResult:
    return _default_detector.check_wash_sales(sales, purchases)


def would_trigger_wash_sale(
    symbol: str,
    proposed_sale_date: date,
    recent_purchases: Iterable[PurchaseRecord],
) -> bool:
    return _default_detector.would_trigger_wash_sale(
        symbol, proposed_sale_date, recent_purchases
    )


def earliest_safe_repurchase_date(sale_date: date) -> date:
    return WashSaleDetector.earliest_safe_repurchase_date(sale_date)


def apply_basis_adjustments(
    lots: Sequence[TaxLot], result: WashSaleCheckResult
) -> list[TaxLot]:
    return _default_detector.apply_basis_adjustments(lots, result)
