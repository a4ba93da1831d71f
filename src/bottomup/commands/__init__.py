import argparse
import logging
import sys
import textwrap
from typing import List
from typing import Optional

from bottomup._errors import BottomUpCommandError
from bottomup._errors import BottomUpError
from bottomup._logging import set_log_level
from bottomup._version import __version__

from . import stats
from . import summary
from . import table
from . import transform
from .protocol import Command

_COMMANDS: List[Command] = [
    summary.SummaryCommand(),
    stats.StatsCommand(),
    table.TableCommand(),
    transform.TransformCommand(),
]

_EXAMPLES = [
    "$ python3 -m bottomup summary profile.cpuprofile",
    "$ python3 -m bottomup transform json profile.cpuprofile",
]

_EPILOG = textwrap.dedent(
    """\
    Profiles are the .cpuprofile files written by the V8 inspector, for
    example by `node --cpu-prof` or the Chrome DevTools performance panel.
    """
)

_SUMMARY = textwrap.fill(
    "Aggregate the time spent in every call site of a CPU profile, "
    "counting recursive calls only once."
)

_DESCRIPTION = f"""\
Bottom-up view of V8 CPU profiles

{_SUMMARY}

    Example:

    """ + """
    """.join(
    _EXAMPLES
)


def get_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=_DESCRIPTION,
        prog="bottomup",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog=_EPILOG,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity. Option is additive and can be specified up to 2 times",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=__version__,
        help="Displays the current version of bottomup",
    )

    subparsers = parser.add_subparsers(
        help="Mode of operation",
        dest="command",
        required=True,
    )

    for command in _COMMANDS:
        # Extract the CLI command name from the classes' names
        assert command.__class__.__name__.endswith("Command")
        name = command.__class__.__name__[: -len("Command")].lower()

        command_parser = subparsers.add_parser(
            name, help=command.__doc__, description=command.__doc__, epilog=_EPILOG
        )
        command_parser.set_defaults(entrypoint=command.run)
        command.prepare_parser(command_parser)

    return parser


def determine_logging_level_from_verbosity(
    verbose_level: int,
) -> int:  # pragma: no cover
    if verbose_level == 0:
        return logging.WARNING
    elif verbose_level == 1:
        return logging.INFO
    else:
        return logging.DEBUG


def main(args: Optional[List[str]] = None) -> int:
    if args is None:
        args = sys.argv[1:]

    parser = get_argument_parser()
    arg_values = parser.parse_args(args=args)
    set_log_level(determine_logging_level_from_verbosity(arg_values.verbose))

    try:
        arg_values.entrypoint(arg_values, parser)
    except BottomUpCommandError as e:
        print(e, file=sys.stderr)
        return e.exit_code
    except BottomUpError as e:
        print(e, file=sys.stderr)
        return 1
    else:
        return 0
