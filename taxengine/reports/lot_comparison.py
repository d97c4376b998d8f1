"""Lot selection comparison report generator."""

from taxengine.models.lots import LotSelectionResult
from taxengine.reports.environment import make_environment


class LotComparisonReportGenerator:
    """Generates a side-by-side view of lot selection strategies."""

    def __init__(self) -> None:
        self.env = make_environment()

    def render(self, results: list[LotSelectionResult]) -> str:
        template = self.env.get_template("lot_comparison.txt")
        best = min(results, key=lambda r: r.estimated_tax_impact) if results else None
        return template.render(results=results, best=best)
