import argparse

from bottomup._errors import BottomUpCommandError

from ..reporters.transform import TransformReporter
from .common import ReportCommand


class TransformCommand(ReportCommand):
    """Export the bottom-up view of a CPU profile in different formats"""

    def __init__(self) -> None:
        self.include_url = False
        super().__init__(
            reporter_factory=lambda profile: TransformReporter.from_profile(
                profile, format=self.reporter_name, include_url=self.include_url
            ),
            reporter_name="transform",
        )

    def prepare_parser(self, parser: argparse.ArgumentParser) -> None:
        formats = ", ".join(TransformReporter.SUFFIX_MAP)
        parser.add_argument(
            "format",
            help=f"Format to use for the report. Available formats: {formats}",
        )
        parser.add_argument(
            "--include-url",
            help="Include the script URL of every call site in the JSON output",
            action="store_true",
            default=False,
        )
        super().prepare_parser(parser)

    def run(self, args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
        the_format = args.format.lower()
        suffix = TransformReporter.SUFFIX_MAP.get(the_format)
        if not suffix:
            raise BottomUpCommandError(
                f"Format not supported: {args.format}", exit_code=1
            )

        self.suffix = suffix
        self.reporter_name = the_format
        self.include_url = args.include_url
        super().run(args, parser)
