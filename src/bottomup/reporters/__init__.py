from typing import Protocol
from typing import TextIO

from bottomup import Metadata


class BaseReporter(Protocol):
    def render(self, outfile: TextIO, metadata: Metadata) -> None:
        ...
