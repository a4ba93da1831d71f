"""Tools for identifying and classifying call frames."""
from dataclasses import dataclass
from typing import Union

ScriptId = Union[str, int]

ANONYMOUS_FUNCTION_NAME = "(anonymous function)"
NATIVE_URL_PREFIX = "native "


@dataclass(frozen=True)
class CallSite:
    """The identity shared by every invocation of the same lexical function."""

    function_name: str
    script_id: ScriptId
    line_number: int

    def __str__(self) -> str:
        return f"{self.function_name}@{self.script_id}:{self.line_number}"


def normalize_function_name(function_name: str) -> str:
    return function_name or ANONYMOUS_FUNCTION_NAME


def call_site_for(
    function_name: str, script_id: ScriptId, line_number: int
) -> CallSite:
    return CallSite(normalize_function_name(function_name), script_id, line_number)


def is_native_url(url: str) -> bool:
    return bool(url) and url.startswith(NATIVE_URL_PREFIX)
