import csv
import json
from typing import Any
from typing import List
from typing import TextIO

from bottomup import Metadata
from bottomup import Profile
from bottomup.aggregation import AggregatedRecord
from bottomup.formatting import format_bottom_up


class TransformReporter:
    SUFFIX_MAP = {
        "json": ".json",
        "csv": ".csv",
    }

    def __init__(
        self,
        records: List[AggregatedRecord],
        *,
        format: str,
        include_url: bool = False,
        **kwargs: Any,
    ) -> None:
        self.records = records
        self.format = format
        self.include_url = include_url

    @classmethod
    def from_profile(cls, profile: Profile, **kwargs: Any) -> "TransformReporter":
        return cls(profile.bottom_up_nodes(), **kwargs)

    def render(self, outfile: TextIO, metadata: Metadata) -> None:
        renderer = getattr(self, f"render_as_{self.format}")
        renderer(outfile, metadata=metadata)

    def render_as_json(self, outfile: TextIO, **kwargs: Any) -> None:
        json.dump(
            format_bottom_up(self.records, include_url=self.include_url),
            outfile,
            indent=2,
        )

    def render_as_csv(self, outfile: TextIO, **kwargs: Any) -> None:
        writer = csv.writer(outfile)
        writer.writerow(
            [
                "function_name",
                "url",
                "line_number",
                "column_number",
                "self_time",
                "total_time",
                "occurrences",
            ]
        )
        for record in self.records:
            writer.writerow(
                [
                    record.function_name,
                    record.url,
                    record.line_number,
                    record.column_number,
                    record.self_time,
                    record.total_time,
                    record.occurrences,
                ]
            )
