from typing import Any


class BottomUpError(Exception):
    """Exceptions raised in this package."""


class MalformedInput(BottomUpError):
    """The profile records are structurally invalid."""


class InvalidProfile(BottomUpError):
    """The profile is numerically degenerate (no sampling interval)."""


class BottomUpCommandError(BottomUpError):
    """Exceptions raised from this package's CLI commands."""

    def __init__(self, *args: Any, exit_code: int) -> None:
        super().__init__(*args)
        self.exit_code = exit_code
