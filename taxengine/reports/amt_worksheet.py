"""AMT worksheet generator (Form 6251 layout)."""

from taxengine.models.amt import AmtInput, AmtResult
from taxengine.reports.environment import make_environment


class AMTWorksheetGenerator:
    """Generates the AMT computation worksheet, one line per stage."""

    def __init__(self) -> None:
        self.env = make_environment()

    def render(self, amt_input: AmtInput, result: AmtResult) -> str:
        """Render AMT worksheet."""
        template = self.env.get_template("amt_worksheet.txt")
        return template.render(inp=amt_input, res=result)
