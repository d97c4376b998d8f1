"""Data models for the tax engine."""

from taxengine.models.amt import AmtCreditResult, AmtInput, AmtResult
from taxengine.models.enums import (
    FilingStatus,
    HoldingPeriod,
    LotMethod,
    QuarterStatus,
    UnderpaymentRisk,
)
from taxengine.models.estimates import (
    IncomeSummary,
    QuarterlyEstimateResult,
    QuarterlyPayment,
    QuarterPayment,
    ScheduleDInput,
    ScheduleDResult,
    TaxLiabilityResult,
)
from taxengine.models.fields import Money
from taxengine.models.harvesting import HarvestCandidate
from taxengine.models.lots import (
    Fifo,
    Lifo,
    LotSelectionMethod,
    LotSelectionResult,
    SelectedLot,
    SpecificId,
    TaxLot,
)
from taxengine.models.requests import (
    HarvestRequest,
    LotSelectionRequest,
    QuarterlyRequest,
    WashSaleRequest,
)
from taxengine.models.wash_sale import (
    PurchaseRecord,
    SaleRecord,
    WashSaleCheckResult,
    WashSaleViolation,
)

__all__ = [
    "AmtCreditResult",
    "AmtInput",
    "AmtResult",
    "Fifo",
    "FilingStatus",
    "HarvestCandidate",
    "HarvestRequest",
    "HoldingPeriod",
    "IncomeSummary",
    "Lifo",
    "LotMethod",
    "LotSelectionMethod",
    "LotSelectionRequest",
    "LotSelectionResult",
    "Money",
    "PurchaseRecord",
    "QuarterPayment",
    "QuarterStatus",
    "QuarterlyEstimateResult",
    "QuarterlyPayment",
    "QuarterlyRequest",
    "SaleRecord",
    "ScheduleDInput",
    "ScheduleDResult",
    "SelectedLot",
    "SpecificId",
    "TaxLiabilityResult",
    "TaxLot",
    "UnderpaymentRisk",
    "WashSaleCheckResult",
    "WashSaleRequest",
    "WashSaleViolation",
]
