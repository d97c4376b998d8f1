"""Text report generation."""

from taxengine.reports.amt_worksheet import AMTWorksheetGenerator
from taxengine.reports.harvesting import HarvestReportGenerator
from taxengine.reports.lot_comparison import LotComparisonReportGenerator
from taxengine.reports.quarterly import QuarterlyScheduleGenerator
from taxengine.reports.wash_sale import WashSaleReportGenerator

__all__ = [
    "AMTWorksheetGenerator",
    "HarvestReportGenerator",
    "LotComparisonReportGenerator",
    "QuarterlyScheduleGenerator",
    "WashSaleReportGenerator",
]
