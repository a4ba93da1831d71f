"""Utilities / Helpers for writing tests."""
import json
from pathlib import Path
from typing import Any
from typing import Dict
from typing import List
from typing import Sequence


def make_node(
    node_id: int,
    function_name: str,
    hit_count: int = 0,
    children: Sequence[int] = (),
    *,
    url: str = "app.js",
    script_id: str = "1",
    line_number: int = 0,
    column_number: int = 0,
) -> Dict[str, Any]:
    """Build a node as it appears in a ``.cpuprofile`` file."""
    node: Dict[str, Any] = {
        "id": node_id,
        "callFrame": {
            "functionName": function_name,
            "scriptId": script_id,
            "url": url,
            "lineNumber": line_number,
            "columnNumber": column_number,
        },
        "hitCount": hit_count,
    }
    if children:
        node["children"] = list(children)
    return node


def make_root(children: Sequence[int], hit_count: int = 0) -> Dict[str, Any]:
    return make_node(
        1, "(root)", hit_count, children, url="", script_id="0", line_number=-1
    )


def make_profile(
    nodes: List[Dict[str, Any]], start_time: float = 0, end_time: float = 2000
) -> Dict[str, Any]:
    return {
        "nodes": nodes,
        "startTime": start_time,
        "endTime": end_time,
        "samples": [],
        "timeDeltas": [],
    }


def recursive_profile() -> Dict[str, Any]:
    """root -> A -> B -> A, 20 hits over 2000us: a 100us sampling interval."""
    return make_profile(
        [
            make_root([2]),
            make_node(2, "A", 10, [3], line_number=1),
            make_node(3, "B", 5, [4], line_number=5),
            make_node(4, "A", 5, line_number=1),
        ]
    )


def write_profile(path: Path, profile: Dict[str, Any]) -> Path:
    path.write_text(json.dumps(profile), encoding="utf-8")
    return path
