"""Wash sale check report generator."""

from taxengine.engines.wash_sale import earliest_safe_repurchase_date
from taxengine.models.wash_sale import WashSaleCheckResult
from taxengine.reports.environment import make_environment


class WashSaleReportGenerator:
    """Lists disallowed losses and the replacement lots that absorb them."""

    def __init__(self) -> None:
        self.env = make_environment()

    def render(self, result: WashSaleCheckResult) -> str:
        template = self.env.get_template("wash_sale.txt")
        return template.render(
            result=result,
            rows=[
                (v, earliest_safe_repurchase_date(v.sale_date))
                for v in result.violations
            ],
        )
