"""Tax-loss harvesting candidates report generator."""

from taxengine.models.harvesting import HarvestCandidate
from taxengine.money import sum_all
from taxengine.reports.environment import make_environment


class HarvestReportGenerator:
    def __init__(self) -> None:
        self.env = make_environment()

    def render(self, candidates: list[HarvestCandidate]) -> str:
        template = self.env.get_template("harvest.txt")
        return template.render(
            candidates=candidates,
            total_loss=sum_all(c.unrealized_loss for c in candidates),
            total_savings=sum_all(c.estimated_tax_savings for c in candidates),
        )
