import json
from dataclasses import asdict
from pathlib import Path
from typing import Any
from typing import Dict
from typing import List
from typing import Optional

import rich

from bottomup import Metadata
from bottomup import Profile
from bottomup.aggregation import AggregatedRecord
from bottomup.reporters.common import format_location
from bottomup.reporters.common import time_fmt


class StatsReporter:
    def __init__(
        self,
        records: List[AggregatedRecord],
        metadata: Metadata,
        num_largest: int,
    ):
        self.records = records
        self.metadata = metadata
        if num_largest < 1:
            raise ValueError(f"Invalid input num_largest={num_largest}, should be >=1")
        self.num_largest = num_largest

    @classmethod
    def from_profile(cls, profile: Profile, num_largest: int) -> "StatsReporter":
        return cls(profile.bottom_up_nodes(), profile.metadata, num_largest)

    def _get_top_records_by(self, attribute: str) -> List[AggregatedRecord]:
        return sorted(
            self.records,
            key=lambda record: getattr(record, attribute),
            reverse=True,
        )[: self.num_largest]

    def render(self, json_output_file: Optional[Path] = None) -> None:
        if json_output_file:
            self._render_to_json(json_output_file)
        else:
            self._render_to_terminal()

    def _render_to_terminal(self) -> None:
        metadata = self.metadata
        rich.print("⏱️  [bold]Profile duration:[/]")
        print(f"\t{time_fmt(metadata.duration / 1000)}")

        print()
        rich.print("🔬 [bold]Sampling interval:[/]")
        print(f"\t{time_fmt(metadata.sampling_interval / 1000)}")

        print()
        rich.print("📏 [bold]Samples:[/]")
        print(f"\t{metadata.total_hit_count} hits across {metadata.node_count} nodes")
        print(f"\t{metadata.native_node_count} native frames folded into callers")

        print()
        rich.print("📂 [bold]Distinct call sites:[/]")
        print(f"\t{len(self.records)}")

        print()
        rich.print(f"🥇 [bold]Top {self.num_largest} call sites (by self time):[/]")
        for record in self._get_top_records_by("self_time"):
            print(f"\t- {format_location(record)} -> {time_fmt(record.self_time)}")

        print()
        rich.print(f"🥇 [bold]Top {self.num_largest} call sites (by total time):[/]")
        for record in self._get_top_records_by("total_time"):
            print(f"\t- {format_location(record)} -> {time_fmt(record.total_time)}")

    def _render_to_json(self, out_path: Path) -> None:
        data: Dict[str, Any] = {
            "distinct_call_sites": len(self.records),
            "top_call_sites_by_self_time": [
                {"location": format_location(record), "self_time": record.self_time}
                for record in self._get_top_records_by("self_time")
            ],
            "top_call_sites_by_total_time": [
                {"location": format_location(record), "total_time": record.total_time}
                for record in self._get_top_records_by("total_time")
            ],
            "metadata": asdict(self.metadata),
        }

        with open(out_path, "w") as f:
            json.dump(data, f, indent=2)
