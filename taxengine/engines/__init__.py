"""Tax computation engines."""

from taxengine.engines.amt import AMTCalculator
from taxengine.engines.capital_gains import (
    LotSelector,
    classify_holding_period,
    compare_lot_strategies,
    select_lots,
)
from taxengine.engines.harvesting import TaxLossHarvester
from taxengine.engines.liability import TaxLiabilityEstimator
from taxengine.engines.parameters import TAX_YEAR_PARAMETERS, TaxYearParameters, get_parameters
from taxengine.engines.quarterly import QuarterlyEstimateEngine
from taxengine.engines.schedule_d import compute_schedule_d
from taxengine.engines.wash_sale import WashSaleDetector

__all__ = [
    "AMTCalculator",
    "LotSelector",
    "QuarterlyEstimateEngine",
    "TAX_YEAR_PARAMETERS",
    "TaxLiabilityEstimator",
    "TaxLossHarvester",
    "TaxYearParameters",
    "WashSaleDetector",
    "classify_holding_period",
    "compare_lot_strategies",
    "compute_schedule_d",
    "get_parameters",
    "select_lots",
]
