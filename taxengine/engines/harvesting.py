"""Tax-loss harvesting scanner.

Finds open lots trading below basis and ranks them by the tax the loss
would save, flagging lots whose sale would be a wash sale.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from decimal import Decimal

from taxengine.engines.capital_gains import classify_holding_period
from taxengine.engines.wash_sale import WashSaleDetector
from taxengine.models.enums import HoldingPeriod
from taxengine.models.harvesting import HarvestCandidate
from taxengine.models.lots import TaxLot
from taxengine.models.wash_sale import PurchaseRecord
from taxengine.money import apply_rate, multiply, subtract

logger = logging.getLogger(__name__)


class TaxLossHarvester:
    """Scans lots for unrealized losses worth realizing."""

    def __init__(self, detector: WashSaleDetector | None = None) -> None:
        self.detector = detector or WashSaleDetector()

    def find_candidates(
        self,
        lots: Sequence[TaxLot],
        prices: Mapping[str, Decimal],
        as_of: date,
        min_loss: Decimal = Decimal("100"),
        marginal_rate: Decimal = Decimal("0.32"),
        long_term_rate: Decimal = Decimal("0.15"),
        recent_purchases: Iterable[PurchaseRecord] = (),
    ) -> list[HarvestCandidate]:
        """Return lots with an unrealized loss of at least ``min_loss``.

        Lots without a price are skipped. Candidates are sorted by estimated
        tax savings, highest first.
        """
        recent_purchases = list(recent_purchases)
        prices = {symbol.strip().upper(): price for symbol, price in prices.items()}
        candidates = []

        for lot in lots:
            price = prices.get(lot.symbol)
            if price is None:
                logger.debug("No price for %s; lot %s skipped", lot.symbol, lot.id)
                continue
            market_value = multiply(price, lot.quantity)
            unrealized = subtract(market_value, lot.adjusted_basis)
            if unrealized >= 0 or -unrealized < min_loss:
                continue

            holding_period = classify_holding_period(lot.acquisition_date, as_of)
            rate = marginal_rate if holding_period == HoldingPeriod.SHORT_TERM else long_term_rate
            savings = apply_rate(-unrealized, rate)
            wash_risk = self.detector.would_trigger_wash_sale(
                lot.symbol, as_of, [p for p in recent_purchases if p.lot_id != lot.id]
            )
            candidates.append(
                HarvestCandidate(
                    symbol=lot.symbol,
                    lot_id=lot.id,
                    quantity=lot.quantity,
                    current_price=price,
                    cost_basis=lot.adjusted_basis,
                    unrealized_loss=unrealized,
                    holding_period=holding_period,
                    wash_sale_risk=wash_risk,
                    estimated_tax_savings=savings,
                    rationale=self._rationale(
                        unrealized, holding_period, rate, savings, wash_risk
                    ),
                )
            )

        return sorted(candidates, key=lambda c: c.estimated_tax_savings, reverse=True)

    @staticmethod
    def _rationale(
        unrealized: Decimal,
        holding_period: HoldingPeriod,
        rate: Decimal,
        savings: Decimal,
        wash_risk: bool,
    ) -> str:
        term = "short-term" if holding_period == HoldingPeriod.SHORT_TERM else "long-term"
        text = (
            f"Realizing a ${-unrealized:,.2f} {term} loss saves about "
            f"${savings:,.2f} at {rate:.0%}"
        )
        if wash_risk:
            text += "; a purchase within 30 days would make it a wash sale"
        return text
