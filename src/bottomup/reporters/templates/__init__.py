"""Templates to render reports in HTML."""
from functools import lru_cache
from typing import Any
from typing import Dict
from typing import Iterable
from typing import Optional
from typing import Union

import jinja2

from bottomup import Metadata


@lru_cache(maxsize=1)
def get_render_environment() -> jinja2.Environment:
    loader = jinja2.PackageLoader("bottomup.reporters")
    env = jinja2.Environment(loader=loader)
    env.policies["json.dumps_kwargs"] = {"sort_keys": True, "separators": (",", ":")}
    return env


def get_report_title(*, kind: str, source: Optional[str] = None) -> str:
    parts = ["bottom-up", kind, "report"]
    if source:
        parts.append(f"({source})")
    return " ".join(parts)


def render_report(
    *,
    kind: str,
    data: Union[Dict[str, Any], Iterable[Dict[str, Any]]],
    metadata: Metadata,
) -> str:
    env = get_render_environment()
    template = env.get_template(kind + ".html")

    pretty_kind = kind.replace("_", " ")
    title = get_report_title(kind=pretty_kind, source=metadata.source)
    return template.render(
        kind=pretty_kind,
        title=title,
        data=data,
        metadata=metadata,
    )
