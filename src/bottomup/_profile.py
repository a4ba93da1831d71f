import json
import logging
import math
import os
from dataclasses import dataclass
from dataclasses import replace
from pathlib import Path
from typing import Any
from typing import Dict
from typing import Iterable
from typing import List
from typing import Mapping
from typing import Optional
from typing import Sequence
from typing import Tuple
from typing import Union

from bottomup._errors import InvalidProfile
from bottomup._errors import MalformedInput
from bottomup._metadata import Metadata
from bottomup.aggregation import AggregatedRecord
from bottomup.aggregation import aggregate
from bottomup.formatting import FormattedRecord
from bottomup.formatting import format_bottom_up
from bottomup.frame_tools import CallSite
from bottomup.frame_tools import ScriptId
from bottomup.frame_tools import call_site_for
from bottomup.frame_tools import is_native_url
from bottomup.frame_tools import normalize_function_name
from bottomup.tree import TreeNode
from bottomup.tree import build_tree

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallFrame:
    function_name: str
    script_id: ScriptId
    url: str
    line_number: int
    column_number: int

    @property
    def call_site(self) -> CallSite:
        return call_site_for(self.function_name, self.script_id, self.line_number)


@dataclass
class ProfileNode:
    """A node of the profile as it was captured, referencing children by id."""

    id: int
    call_frame: CallFrame
    hit_count: int
    children: Tuple[int, ...] = ()
    position_ticks: Tuple[Dict[str, int], ...] = ()
    deopt_reason: Optional[str] = None
    self_time: float = 0.0

    @property
    def call_site(self) -> CallSite:
        return self.call_frame.call_site

    @property
    def is_native(self) -> bool:
        return is_native_url(self.call_frame.url)

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any]) -> "ProfileNode":
        try:
            frame = obj["callFrame"]
            call_frame = CallFrame(
                function_name=frame.get("functionName") or "",
                script_id=frame.get("scriptId", ""),
                url=frame.get("url") or "",
                line_number=frame.get("lineNumber", -1),
                column_number=frame.get("columnNumber", -1),
            )
            return cls(
                id=obj["id"],
                call_frame=call_frame,
                hit_count=obj.get("hitCount", 0),
                children=tuple(obj.get("children") or ()),
                position_ticks=tuple(obj.get("positionTicks") or ()),
                deopt_reason=obj.get("deoptReason") or None,
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise MalformedInput(f"Invalid profile node {obj!r}: {e!r}") from e


def compute_sampling_interval(
    start_time: float, end_time: float, nodes: Iterable[ProfileNode]
) -> float:
    """Derive the time between two samples from the recording duration.

    The interval is expressed in the unit of the timestamps (microseconds for
    V8 profiles).
    """
    total_hit_count = sum(node.hit_count for node in nodes)
    if total_hit_count == 0:
        raise InvalidProfile(
            "Total hit count is zero, the sampling interval is undefined"
        )
    duration = end_time - start_time
    if duration <= 0:
        raise InvalidProfile(
            f"endTime ({end_time}) must be greater than startTime ({start_time})"
        )
    interval = duration / total_hit_count
    if not math.isfinite(interval):
        raise InvalidProfile(f"Sampling interval is not finite: {interval}")
    return interval


def compute_self_time(hit_count: int, sampling_interval: float) -> float:
    """Self time, in milliseconds, of a node sampled ``hit_count`` times."""
    return (hit_count * sampling_interval) / 1000


def _is_node_id(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate_nodes(nodes: Sequence[ProfileNode]) -> Dict[int, ProfileNode]:
    if not nodes:
        raise MalformedInput("Profile has no nodes, a root node is required")

    node_by_id: Dict[int, ProfileNode] = {}
    for node in nodes:
        if not _is_node_id(node.id):
            raise MalformedInput(f"Node id must be an integer, not {node.id!r}")
        for child_id in node.children:
            if not _is_node_id(child_id):
                raise MalformedInput(
                    f"Node {node.id} has a non-integer child id: {child_id!r}"
                )
        if node.id in node_by_id:
            raise MalformedInput(f"Duplicate node id {node.id}")
        if isinstance(node.hit_count, bool) or not isinstance(node.hit_count, int):
            raise MalformedInput(
                f"Node {node.id} has a non-integer hit count: {node.hit_count!r}"
            )
        if node.hit_count < 0:
            raise MalformedInput(
                f"Node {node.id} has a negative hit count: {node.hit_count}"
            )
        node_by_id[node.id] = node

    root = nodes[0]
    if root.is_native:
        raise MalformedInput(f"Root node {root.id} is a native frame")

    parent_by_child: Dict[int, int] = {}
    for node in nodes:
        for child_id in node.children:
            if child_id not in node_by_id:
                raise MalformedInput(
                    f"Node {node.id} references unknown child id {child_id}"
                )
            if child_id == root.id:
                raise MalformedInput(
                    f"Node {node.id} references the root node {root.id} as a child"
                )
            if child_id in parent_by_child:
                raise MalformedInput(
                    f"Node {child_id} is a child of both node "
                    f"{parent_by_child[child_id]} and node {node.id}"
                )
            parent_by_child[child_id] = node.id
    return node_by_id


class Profile:
    """A parsed CPU profile with the self time of every node populated."""

    def __init__(
        self,
        nodes: Sequence[ProfileNode],
        start_time: float,
        end_time: float,
        samples: Sequence[int] = (),
        time_deltas: Sequence[int] = (),
        *,
        source: Optional[str] = None,
    ) -> None:
        self.nodes = list(nodes)
        self.start_time = start_time
        self.end_time = end_time
        self.samples = samples
        self.time_deltas = time_deltas
        self.source = source

        self._node_by_id = _validate_nodes(self.nodes)
        self.sampling_interval = compute_sampling_interval(
            start_time, end_time, self.nodes
        )
        self._assign_initial_self_times()
        self._name_anonymous_functions()
        LOGGER.debug(
            "Loaded profile with %d nodes, sampling interval %s",
            len(self.nodes),
            self.sampling_interval,
        )

    @classmethod
    def from_dict(
        cls, obj: Mapping[str, Any], *, source: Optional[str] = None
    ) -> "Profile":
        if not isinstance(obj, Mapping):
            raise MalformedInput(
                f"A profile must be a JSON object, not {type(obj).__name__}"
            )
        try:
            raw_nodes = obj["nodes"]
            start_time = obj["startTime"]
            end_time = obj["endTime"]
        except KeyError as e:
            raise MalformedInput(f"Profile is missing the {e} field") from e

        if not isinstance(raw_nodes, list):
            raise MalformedInput(f"nodes must be a list, not {raw_nodes!r}")

        for name, value in (("startTime", start_time), ("endTime", end_time)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise MalformedInput(f"{name} must be a number, not {value!r}")

        nodes = [ProfileNode.from_dict(node) for node in raw_nodes]
        return cls(
            nodes,
            start_time,
            end_time,
            obj.get("samples") or (),
            obj.get("timeDeltas") or (),
            source=source,
        )

    @classmethod
    def from_file(cls, path: Union[str, "os.PathLike[str]"]) -> "Profile":
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            try:
                obj = json.load(f)
            except json.JSONDecodeError as e:
                raise MalformedInput(f"{path} is not a valid JSON file: {e}") from e
        return cls.from_dict(obj, source=os.fspath(path))

    def _assign_initial_self_times(self) -> None:
        for node in self.nodes:
            node.self_time = compute_self_time(node.hit_count, self.sampling_interval)

    def _name_anonymous_functions(self) -> None:
        for node in self.nodes:
            name = node.call_frame.function_name
            if not name:
                node.call_frame = replace(
                    node.call_frame, function_name=normalize_function_name(name)
                )

    @property
    def root(self) -> ProfileNode:
        return self.nodes[0]

    def node_by_id(self, node_id: int) -> ProfileNode:
        return self._node_by_id[node_id]

    @property
    def metadata(self) -> Metadata:
        return Metadata(
            start_time=self.start_time,
            end_time=self.end_time,
            duration=self.end_time - self.start_time,
            sampling_interval=self.sampling_interval,
            total_hit_count=sum(node.hit_count for node in self.nodes),
            node_count=len(self.nodes),
            native_node_count=sum(1 for node in self.nodes if node.is_native),
            sample_count=len(self.samples),
            source=self.source,
        )

    def translated_root(self) -> TreeNode:
        return build_tree(self)

    def bottom_up_nodes(self) -> List[AggregatedRecord]:
        return aggregate(self.translated_root())

    def formatted_bottom_up_profile(
        self, *, include_url: bool = False, sort: bool = False
    ) -> List[FormattedRecord]:
        """All bottom-up records, limited to their function name, self and
        total time (and URL when ``include_url`` is set)."""
        return format_bottom_up(
            self.bottom_up_nodes(), include_url=include_url, sort=sort
        )
