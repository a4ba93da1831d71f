from ._errors import BottomUpError
from ._errors import InvalidProfile
from ._errors import MalformedInput
from ._logging import set_log_level
from ._metadata import Metadata
from ._profile import CallFrame
from ._profile import Profile
from ._profile import ProfileNode
from ._version import __version__
from .aggregation import AggregatedRecord
from .aggregation import aggregate
from .formatting import format_bottom_up
from .frame_tools import CallSite
from .tree import TreeNode
from .tree import build_tree

__all__ = [
    "AggregatedRecord",
    "BottomUpError",
    "CallFrame",
    "CallSite",
    "InvalidProfile",
    "MalformedInput",
    "Metadata",
    "Profile",
    "ProfileNode",
    "TreeNode",
    "aggregate",
    "build_tree",
    "format_bottom_up",
    "set_log_level",
    "__version__",
]
