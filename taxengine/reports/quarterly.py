"""Quarterly estimated payment schedule generator."""

from taxengine.models.estimates import QuarterlyEstimateResult
from taxengine.reports.environment import make_environment


class QuarterlyScheduleGenerator:
    """Generates the Form 1040-ES payment schedule."""

    def __init__(self) -> None:
        self.env = make_environment()

    def render(self, result: QuarterlyEstimateResult) -> str:
        template = self.env.get_template("quarterly_schedule.txt")
        return template.render(est=result)
