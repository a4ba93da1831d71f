from ..reporters.table import TableReporter
from .common import ReportCommand


class TableCommand(ReportCommand):
    """Generate an HTML table with the bottom-up view of a CPU profile"""

    def __init__(self) -> None:
        super().__init__(
            reporter_factory=TableReporter.from_profile,
            reporter_name="table",
        )
