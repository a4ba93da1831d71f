import os
from operator import attrgetter
from typing import IO
from typing import List
from typing import Optional

from rich import print as rprint
from rich.markup import escape
from rich.table import Column
from rich.table import Table

from bottomup import Profile
from bottomup.aggregation import AggregatedRecord
from bottomup.aggregation import aggregate
from bottomup.reporters.common import time_fmt

DEFAULT_TERMINAL_LINES = 24


def _get_terminal_lines() -> int:
    try:
        return os.get_terminal_size().lines
    except OSError:
        return DEFAULT_TERMINAL_LINES


def _time_to_color(proportion_of_total: float) -> str:
    if proportion_of_total > 0.6:
        return "red"
    elif proportion_of_total > 0.2:
        return "yellow"
    elif proportion_of_total > 0.05:
        return "green"
    else:
        return "bright_green"


class SummaryReporter:
    # Sort key to (column index, record key, descending)
    SORT_KEYS = {
        "total": (1, attrgetter("total_time"), True),
        "self": (3, attrgetter("self_time"), True),
        "name": (0, attrgetter("function_name", "url", "line_number"), False),
    }

    def __init__(self, records: List[AggregatedRecord], total_time: float):
        self.records = records
        self.total_time = total_time

    @classmethod
    def from_profile(cls, profile: Profile) -> "SummaryReporter":
        root = profile.translated_root()
        return cls(aggregate(root), total_time=root.total_time)

    def _proportion(self, value: float) -> float:
        return value / self.total_time if self.total_time else 0.0

    def render(
        self,
        sort: str = "total",
        *,
        include_url: bool = False,
        max_rows: Optional[int] = None,
        file: Optional[IO[str]] = None,
    ) -> None:
        # Leave room for the header and the shell prompt.
        max_rows = max_rows or max(_get_terminal_lines() - 5, 10)
        table = Table(
            Column("Location", ratio=5),
            Column("Total Time", ratio=1, justify="right"),
            Column("Total Time %", ratio=1, justify="right"),
            Column("Self Time", ratio=1, justify="right"),
            Column("Self Time %", ratio=1, justify="right"),
            Column("Occurrences", ratio=1, justify="right"),
            expand=True,
        )
        sort_column, key, descending = self.SORT_KEYS[sort]
        table.columns[sort_column].header = f"<{table.columns[sort_column].header}>"

        sorted_records = sorted(self.records, key=key, reverse=descending)[:max_rows]
        for record in sorted_records:
            location = f"[bold magenta]{escape(record.function_name)}[/]"
            if include_url and record.url:
                location += (
                    f" at [cyan]{escape(record.url)}:{record.line_number + 1}[/]"
                )
            total_proportion = self._proportion(record.total_time)
            self_proportion = self._proportion(record.self_time)
            total_color = _time_to_color(total_proportion)
            self_color = _time_to_color(self_proportion)
            table.add_row(
                location,
                f"[{total_color}]{time_fmt(record.total_time)}[/{total_color}]",
                f"[{total_color}]{total_proportion * 100:.2f}%[/{total_color}]",
                f"[{self_color}]{time_fmt(record.self_time)}[/{self_color}]",
                f"[{self_color}]{self_proportion * 100:.2f}%[/{self_color}]",
                str(record.occurrences),
            )

        rprint(table, file=file)
