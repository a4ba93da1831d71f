import argparse
import logging
import os
import pathlib
from pathlib import Path
from typing import Optional
from typing import Protocol
from typing import Tuple

from bottomup import Profile
from bottomup._errors import BottomUpCommandError
from bottomup.reporters import BaseReporter

LOGGER = logging.getLogger(__name__)


class ReporterFactory(Protocol):
    def __call__(self, profile: Profile) -> BaseReporter:
        ...


def load_profile(results: str) -> Profile:
    """Read a ``.cpuprofile`` file, turning I/O failures into command errors.

    Structural and numeric problems with the profile propagate as
    :class:`bottomup.MalformedInput` and :class:`bottomup.InvalidProfile`.
    """
    result_path = Path(results)
    if not result_path.exists() or not result_path.is_file():
        raise BottomUpCommandError(f"No such file: {results}", exit_code=1)
    LOGGER.info("Reading profile from %s", result_path)
    try:
        return Profile.from_file(result_path)
    except OSError as e:
        raise BottomUpCommandError(
            f"Failed to read profile {result_path}\nReason: {e}",
            exit_code=1,
        )


class ReportCommand:
    def __init__(
        self,
        reporter_factory: ReporterFactory,
        reporter_name: str,
        suffix: str = ".html",
    ) -> None:
        self.reporter_factory = reporter_factory
        self.reporter_name = reporter_name
        self.suffix = suffix
        self.output_file: Optional[Path] = None

    def determine_output_filename(self, results_file: pathlib.Path) -> pathlib.Path:
        output_name = results_file.with_suffix(self.suffix).name
        if output_name.startswith("bottomup-"):
            output_name = output_name[len("bottomup-") :]

        return results_file.parent / f"bottomup-{self.reporter_name}-{output_name}"

    def validate_filenames(
        self, output: Optional[str], results: str, overwrite: bool = False
    ) -> Tuple[Path, Path]:
        """Ensure that the filenames provided by the user are usable."""
        result_path = Path(results)
        if not result_path.exists() or not result_path.is_file():
            raise BottomUpCommandError(f"No such file: {results}", exit_code=1)

        output_file = Path(
            output
            if output is not None
            else self.determine_output_filename(result_path)
        )
        if not overwrite and output_file.exists():
            raise BottomUpCommandError(
                f"File already exists, will not overwrite: {output_file}",
                exit_code=1,
            )
        return result_path, output_file

    def write_report(self, result_path: Path, output_file: Path) -> None:
        profile = load_profile(os.fspath(result_path))
        reporter = self.reporter_factory(profile)

        with open(os.fspath(output_file.expanduser()), "w") as f:
            reporter.render(outfile=f, metadata=profile.metadata)

    def prepare_parser(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "-o",
            "--output",
            help="Output file name",
            default=None,
        )
        parser.add_argument(
            "-f",
            "--force",
            help="If the output file already exists, overwrite it",
            action="store_true",
            default=False,
        )
        parser.add_argument("results", help="CPU profile (.cpuprofile) to report on")

    def run(self, args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
        result_path, output_file = self.validate_filenames(
            output=args.output,
            results=args.results,
            overwrite=args.force,
        )
        self.output_file = output_file
        self.write_report(result_path, output_file)

        print(f"Wrote {output_file}")
