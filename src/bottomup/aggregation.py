"""Bottom-up aggregation of a call tree into one record per call site.

The traversal is level-order and carries, for every node, the chain of its
ancestors. A node whose call site already occurred on that chain has its
total time covered by the ancestor occurrence, so only its self time is
merged into the call site's record.
"""
import itertools
import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque
from typing import Dict
from typing import Iterable
from typing import Iterator
from typing import List
from typing import Sequence
from typing import Set
from typing import Tuple

from bottomup.frame_tools import CallSite
from bottomup.tree import TreeNode
from bottomup.tree import iter_nodes

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeInfo:
    node: TreeNode
    total_accounted_for: bool


@dataclass
class AggregatedRecord:
    """Accumulated times of every tree node sharing a call site."""

    call_site: CallSite
    function_name: str
    url: str
    line_number: int
    column_number: int
    self_time: float
    total_time: float
    occurrences: int = 1

    @classmethod
    def from_tree_node(cls, node: TreeNode) -> "AggregatedRecord":
        frame = node.call_frame
        return cls(
            call_site=node.call_site,
            function_name=frame.function_name,
            url=frame.url,
            line_number=frame.line_number,
            column_number=frame.column_number,
            self_time=node.self_time,
            total_time=node.total_time,
        )


def iter_node_infos(root: TreeNode) -> Iterator[NodeInfo]:
    """Yield a :class:`NodeInfo` for every node of the tree except ``root``.

    Nodes get their traversal id the first time they are visited. Ids that
    are already set are kept, so walking the same tree twice gives the same
    result. New ids continue after the largest id already in the tree.
    """
    assigned = [node.uid for node in iter_nodes(root) if node.uid is not None]
    uids = itertools.count(max(assigned, default=0) + 1)
    visited_uids_by_call_site: Dict[CallSite, Set[int]] = {}
    groups: Deque[Tuple[Tuple[TreeNode, ...], Sequence[TreeNode]]] = deque(
        [((), [root])]
    )

    while groups:
        ancestors, nodes = groups.popleft()
        for node in nodes:
            if node.uid is None:
                node.uid = next(uids)

            if node is not root:
                call_site = node.call_site
                visited_uids = visited_uids_by_call_site.get(call_site)
                total_accounted_for = False
                if visited_uids is None:
                    visited_uids = visited_uids_by_call_site[call_site] = set()
                else:
                    total_accounted_for = any(
                        ancestor.uid in visited_uids for ancestor in ancestors
                    )
                visited_uids.add(node.uid)
                yield NodeInfo(node, total_accounted_for)

            if node.children:
                groups.append((ancestors + (node,), node.children))


def merge_node_infos(node_infos: Iterable[NodeInfo]) -> List[AggregatedRecord]:
    records: Dict[CallSite, AggregatedRecord] = {}
    for info in node_infos:
        node = info.node
        record = records.get(node.call_site)
        if record is None:
            records[node.call_site] = AggregatedRecord.from_tree_node(node)
            continue

        record.occurrences += 1
        record.self_time += node.self_time
        if not info.total_accounted_for:
            record.total_time += node.total_time

    return list(records.values())


def aggregate(root: TreeNode) -> List[AggregatedRecord]:
    records = merge_node_infos(iter_node_infos(root))
    LOGGER.debug("Aggregated call tree into %d call sites", len(records))
    return records
