import html
from typing import Any
from typing import Dict
from typing import List
from typing import TextIO

from bottomup import Metadata
from bottomup import Profile
from bottomup.reporters.common import format_location
from bottomup.reporters.templates import render_report


class TableReporter:
    def __init__(self, data: List[Dict[str, Any]]):
        self.data = data

    @classmethod
    def from_profile(cls, profile: Profile, **kwargs: Any) -> "TableReporter":
        result = []
        for record in profile.bottom_up_nodes():
            result.append(
                {
                    "function": html.escape(record.function_name),
                    "location": html.escape(format_location(record)),
                    "self_time": record.self_time,
                    "total_time": record.total_time,
                    "occurrences": record.occurrences,
                }
            )

        return cls(result)

    def render(self, outfile: TextIO, metadata: Metadata) -> None:
        html_code = render_report(kind="table", data=self.data, metadata=metadata)
        print(html_code, file=outfile)
