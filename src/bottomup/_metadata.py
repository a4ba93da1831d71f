from dataclasses import dataclass
from typing import Optional


@dataclass
class Metadata:
    start_time: float
    end_time: float
    duration: float
    sampling_interval: float
    total_hit_count: int
    node_count: int
    native_node_count: int
    sample_count: int
    source: Optional[str] = None
