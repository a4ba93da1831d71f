"""Reconstruction of the call tree from the flat list of profile nodes."""
import logging
from dataclasses import dataclass
from dataclasses import field
from typing import TYPE_CHECKING
from typing import Dict
from typing import Iterator
from typing import List
from typing import Optional
from typing import Tuple

from bottomup.frame_tools import CallSite

if TYPE_CHECKING:
    from bottomup._profile import CallFrame
    from bottomup._profile import Profile
    from bottomup._profile import ProfileNode

LOGGER = logging.getLogger(__name__)


@dataclass(eq=False)
class TreeNode:
    """A node of the reconstructed call tree.

    Children are owned by their parent, ``parent`` is a plain back reference
    and ``uid`` is assigned the first time an aggregation pass visits the node.
    """

    id: int
    call_frame: "CallFrame"
    hit_count: int
    self_time: float = 0.0
    total_time: float = 0.0
    children: List["TreeNode"] = field(default_factory=list, repr=False)
    position_ticks: Tuple[Dict[str, int], ...] = field(default=(), repr=False)
    deopt_reason: Optional[str] = None
    depth: int = -1
    parent: Optional["TreeNode"] = field(default=None, repr=False)
    uid: Optional[int] = None

    @property
    def call_site(self) -> CallSite:
        return self.call_frame.call_site

    @classmethod
    def clone_without_children(cls, node: "ProfileNode") -> "TreeNode":
        return cls(
            id=node.id,
            call_frame=node.call_frame,
            hit_count=node.hit_count,
            self_time=node.self_time,
            position_ticks=node.position_ticks,
            deopt_reason=node.deopt_reason,
        )


def iter_nodes(root: TreeNode) -> Iterator[TreeNode]:
    """Yield every node of the tree in pre-order, starting with ``root``."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def compute_total_times(root: TreeNode) -> None:
    stack = [(root, False)]
    while stack:
        node, children_done = stack.pop()
        if not children_done:
            stack.append((node, True))
            stack.extend((child, False) for child in node.children)
            continue
        total_time = node.self_time
        for child in node.children:
            total_time += child.total_time
        node.total_time = total_time


def assign_depths_and_parents(root: TreeNode) -> None:
    root.depth = -1
    root.parent = None

    stack = [root]
    while stack:
        parent = stack.pop()
        depth = parent.depth + 1
        for child in parent.children:
            child.depth = depth
            child.parent = parent
            if child.children:
                stack.append(child)


def build_tree(profile: "Profile") -> TreeNode:
    """Rebuild the call tree rooted at the first node of ``profile``.

    Native frames do not get a node of their own: their self time is added
    to the closest non-native ancestor, which also adopts their children.
    """
    source_root = profile.root
    root = TreeNode.clone_without_children(source_root)

    # Children are pushed in reverse so they are attached in source order.
    pairs = [(root, child_id) for child_id in reversed(source_root.children)]
    n_visited = 1
    n_folded = 0
    while pairs:
        parent, source_id = pairs.pop()
        source = profile.node_by_id(source_id)
        n_visited += 1

        if source.is_native:
            parent.self_time += source.self_time
            n_folded += 1
        else:
            target = TreeNode.clone_without_children(source)
            parent.children.append(target)
            parent = target

        pairs.extend((parent, child_id) for child_id in reversed(source.children))

    n_unreachable = len(profile.nodes) - n_visited
    if n_unreachable:
        LOGGER.warning(
            "%d profile nodes are not reachable from root node %d and were ignored",
            n_unreachable,
            source_root.id,
        )
    LOGGER.debug(
        "Built call tree from %d nodes, folded %d native frames",
        n_visited,
        n_folded,
    )

    compute_total_times(root)
    assign_depths_and_parents(root)
    return root
