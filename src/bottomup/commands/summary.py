import argparse

from bottomup.commands.common import load_profile
from bottomup.reporters.summary import SummaryReporter


class SummaryCommand:
    """Generate a terminal-based summary of the call sites that take the most time"""

    def prepare_parser(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("results", help="CPU profile (.cpuprofile) to report on")
        parser.add_argument(
            "-s",
            "--sort",
            help="Sort by total time, self time or function name",
            choices=sorted(SummaryReporter.SORT_KEYS),
            default="total",
        )
        parser.add_argument(
            "-r",
            "--max-rows",
            help="Maximum number of rows to display",
            type=int,
            default=None,
        )
        parser.add_argument(
            "--include-url",
            help="Show the script URL and line of every call site",
            action="store_true",
            default=False,
        )

    def run(self, args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
        if args.max_rows is not None and args.max_rows < 1:
            parser.error("The --max-rows argument must be a positive integer")

        profile = load_profile(args.results)
        reporter = SummaryReporter.from_profile(profile)
        reporter.render(
            sort=args.sort, include_url=args.include_url, max_rows=args.max_rows
        )
