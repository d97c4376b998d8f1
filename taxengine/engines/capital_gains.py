"""Capital gains engine: FIFO, LIFO and specific identification lot selection."""

import logging
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from taxengine.models.enums import HoldingPeriod, LotMethod
from taxengine.models.lots import (
    Fifo,
    Lifo,
    LotSelectionMethod,
    LotSelectionResult,
    SelectedLot,
    TaxLot,
)
from taxengine.money import (
    ZERO,
    add,
    apply_rate,
    clamp_min,
    multiply,
    prorate,
    round_to_cents,
    subtract,
    sum_all,
)

logger = logging.getLogger(__name__)

# Held more than this many days is long-term.
LONG_TERM_HOLDING_DAYS = 365


def classify_holding_period(acquired: date, sold: date) -> HoldingPeriod:
    """Classify a holding period as short-term or long-term.

    Long-term if held more than 365 days. A fixed-day approximation of
    "more than one year" that ignores leap days.
    """
    if (sold - acquired).days > LONG_TERM_HOLDING_DAYS:
        return HoldingPeriod.LONG_TERM
    return HoldingPeriod.SHORT_TERM


class LotSelector:
    """Chooses which lots a sale consumes and computes the resulting gain or loss."""

    def select_lots(
        self,
        lots: Sequence[TaxLot],
        quantity_to_sell: Decimal,
        current_price: Decimal,
        method: LotSelectionMethod,
        sale_date: date,
    ) -> LotSelectionResult:
        """Consume lots in method order until the requested quantity is sold.

        Args:
            lots: Candidate lots. Never mutated.
            quantity_to_sell: Shares to sell. Non-positive yields an empty result.
            current_price: Sale price per share.
            method: Fifo(), Lifo() or SpecificId(lot_ids=[...]).
            sale_date: Date of the sale, for holding period classification.

        Returns:
            LotSelectionResult. When the lots cannot cover the request the
            result is partial: quantity_sold < requested_quantity.
        """
        quantity_to_sell = Decimal(str(quantity_to_sell))
        ordered = self._order_lots(lots, method)

        remaining = quantity_to_sell
        selected: list[SelectedLot] = []
        for lot in ordered:
            if remaining <= 0:
                break
            consumed = min(remaining, lot.quantity)
            total_basis = prorate(lot.adjusted_basis, consumed, lot.quantity)
            proceeds = multiply(current_price, consumed)
            holding_period = classify_holding_period(lot.acquisition_date, sale_date)
            selected.append(
                SelectedLot(
                    lot_id=lot.id,
                    acquisition_date=lot.acquisition_date,
                    quantity_sold=consumed,
                    cost_basis_per_share=round_to_cents(lot.cost_basis_per_share),
                    total_basis=total_basis,
                    proceeds=proceeds,
                    gain_loss=subtract(proceeds, total_basis),
                    holding_period=holding_period,
                )
            )
            logger.debug(
                "Consumed %s shares of lot %s (%s)", consumed, lot.id, holding_period
            )
            remaining -= consumed

        quantity_sold = sum((s.quantity_sold for s in selected), Decimal("0"))
        if quantity_to_sell > 0 and quantity_sold < quantity_to_sell:
            logger.warning(
                "Only %s of %s shares available for %s selection",
                quantity_sold, quantity_to_sell, method.kind,
            )

        total_proceeds = sum_all(s.proceeds for s in selected)
        total_basis = sum_all(s.total_basis for s in selected)
        return LotSelectionResult(
            method=method.kind,
            selected_lots=selected,
            requested_quantity=quantity_to_sell,
            quantity_sold=quantity_sold,
            total_proceeds=total_proceeds,
            total_basis=total_basis,
            total_gain_loss=subtract(total_proceeds, total_basis),
            short_term_gain_loss=sum_all(
                s.gain_loss for s in selected
                if s.holding_period == HoldingPeriod.SHORT_TERM
            ),
            long_term_gain_loss=sum_all(
                s.gain_loss for s in selected
                if s.holding_period == HoldingPeriod.LONG_TERM
            ),
            estimated_tax_impact=ZERO,
        )

    def compare_lot_strategies(
        self,
        lots: Sequence[TaxLot],
        quantity_to_sell: Decimal,
        current_price: Decimal,
        sale_date: date,
        marginal_rate: Decimal,
        long_term_rate: Decimal,
        methods: Sequence[LotSelectionMethod] = (Fifo(), Lifo()),
    ) -> list[LotSelectionResult]:
        """Run select_lots once per method and attach an estimated tax impact.

        Gains are taxed at the short-term (marginal) or long-term rate; losses
        count as savings at the same rate. Results keep the order of ``methods``.
        """
        results = []
        for method in methods:
            result = self.select_lots(
                lots, quantity_to_sell, current_price, method, sale_date
            )
            impact = self.estimate_tax_impact(
                result.short_term_gain_loss,
                result.long_term_gain_loss,
                marginal_rate,
                long_term_rate,
            )
            results.append(result.model_copy(update={"estimated_tax_impact": impact}))
        return results

    @staticmethod
    def estimate_tax_impact(
        short_term_gain_loss: Decimal,
        long_term_gain_loss: Decimal,
        marginal_rate: Decimal,
        long_term_rate: Decimal,
    ) -> Decimal:
        st_tax = apply_rate(clamp_min(short_term_gain_loss), marginal_rate)
        lt_tax = apply_rate(clamp_min(long_term_gain_loss), long_term_rate)
        st_savings = apply_rate(clamp_min(-short_term_gain_loss), marginal_rate)
        lt_savings = apply_rate(clamp_min(-long_term_gain_loss), long_term_rate)
        return subtract(add(st_tax, lt_tax), add(st_savings, lt_savings))

    @staticmethod
    def _order_lots(
        lots: Sequence[TaxLot], method: LotSelectionMethod
    ) -> list[TaxLot]:
        if method.kind == LotMethod.FIFO:
            return sorted(lots, key=lambda lot: lot.acquisition_date)
        if method.kind == LotMethod.LIFO:
            return sorted(lots, key=lambda lot: lot.acquisition_date, reverse=True)

        # Specific identification: listed order, duplicates once, unknown ids skipped
        by_id = {}
        for lot in lots:
            by_id.setdefault(lot.id, lot)
        ordered = []
        seen: set[str] = set()
        for lot_id in method.lot_ids:
            if lot_id in seen:
                continue
            seen.add(lot_id)
            if lot_id in by_id:
                ordered.append(by_id[lot_id])
            else:
                logger.debug("Lot %s not among candidate lots; skipped", lot_id)
        return ordered


_default_selector = LotSelector()


def select_lots(
    lots: Sequence[TaxLot],
    quantity_to_sell: Decimal,
    current_price: Decimal,
    method: LotSelectionMethod,
    sale_date: date,
) -> LotSelectionResult:
    return _default_selector.select_lots(
        lots, quantity_to_sell, current_price, method, sale_date
    )


def compare_lot_strategies(
    lots: Sequence[TaxLot],
    quantity_to_sell: Decimal,
    current_price: Decimal,
    sale_date: date,
    marginal_rate: Decimal,
    long_term_rate: Decimal,
    methods: Sequence[LotSelectionMethod] = (Fifo(), Lifo()),
) -> list[LotSelectionResult]:
    return _default_selector.compare_lot_strategies(
        lots, quantity_to_sell, current_price, sale_date,
        marginal_rate, long_term_rate, methods,
    )
