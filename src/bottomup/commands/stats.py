import argparse
from pathlib import Path
from typing import Optional

from bottomup._errors import BottomUpCommandError
from bottomup.commands.common import load_profile
from bottomup.reporters.stats import StatsReporter


class StatsCommand:
    """Generate high level stats of a CPU profile in the terminal"""

    def prepare_parser(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("results", help="CPU profile (.cpuprofile) to report on")

        def valid_positive_int(value: str) -> int:
            try:
                ivalue = int(value)
                if ivalue <= 0:
                    raise ValueError
            except ValueError:
                raise argparse.ArgumentTypeError(
                    f"{value} is an invalid positive int value"
                )

            return ivalue

        parser.add_argument(
            "-n",
            "--num-largest",
            help="Displays the top 'n' most expensive call sites. Default is 5",
            type=valid_positive_int,
            default=5,
        )

        parser.add_argument(
            "--json",
            help="Exports stats to a JSON file",
            action="store_true",
            default=False,
        )
        parser.add_argument(
            "-o",
            "--output",
            help="Output file name for JSON output",
            default=None,
        )
        parser.add_argument(
            "-f",
            "--force",
            help="If the JSON output file already exists, overwrite it",
            action="store_true",
            default=False,
        )

    def run(self, args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
        result_path = Path(args.results)
        profile = load_profile(args.results)

        json_output_file: Optional[Path] = None
        if args.json:
            if args.output:
                json_output_file = Path(args.output)
            else:
                filename = result_path.with_suffix(".json").name
                if filename.startswith("bottomup-"):
                    filename = filename[len("bottomup-") :]
                filename = "bottomup-stats-" + filename
                json_output_file = result_path.with_name(filename)

            if not args.force and json_output_file.exists():
                raise BottomUpCommandError(
                    f"File already exists, will not overwrite: {json_output_file}",
                    exit_code=1,
                )

        reporter = StatsReporter.from_profile(profile, args.num_largest)
        reporter.render(json_output_file=json_output_file)
        if json_output_file is not None:
            print(f"Wrote {json_output_file}")
