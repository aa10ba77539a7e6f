"""Command-line argument parsing for the GitHub PR statistics tool."""

from __future__ import annotations

import argparse
from enum import Enum
from typing import Callable, List, Optional, Sequence, Type, TypeVar

from .models import AnalysisType, OutputFormat

E = TypeVar("E", bound=Enum)

_TRUE_VALUES = {"true", "yes", "y", "1", "on"}
_FALSE_VALUES = {"false", "no", "n", "0", "off"}


def _positive_int(value: str) -> int:
    """Parse and validate a positive integer CLI value.

    Raises:
        argparse.ArgumentTypeError: If value is not a positive integer.
    """
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be an integer") from exc

    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")

    return parsed


def _choices(enum_type: Type[Enum]) -> List[str]:
    return [member.value for member in enum_type]


def _enum_value(enum_type: Type[E]) -> Callable[[str], E]:
    """Build an argparse ``type`` that maps a case-insensitive string onto ``enum_type``."""

    def parse(value: str) -> E:
        try:
            return enum_type(value.strip().lower())
        except ValueError as exc:
            raise argparse.ArgumentTypeError(
                f"invalid value '{value}', must be one of {_choices(enum_type)}"
            ) from exc

    return parse


def _bool_value(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value '{value}'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-pr-stats",
        description=(
            "Report GitHub pull-request statistics for a repository "
            "(time to first review, time to merge, open PR age)."
        ),
    )

    parser.add_argument(
        "-a",
        "--analyze",
        dest="analysis_type",
        type=_enum_value(AnalysisType),
        required=True,
        metavar="{" + ",".join(_choices(AnalysisType)) + "}",
        help="Pull request analysis to run (case-insensitive).",
    )
    parser.add_argument(
        "-l",
        "--pr-limit",
        type=_positive_int,
        default=10,
        help="Limit the amount of PRs to analyze (default: 10).",
    )
    parser.add_argument(
        "-r",
        "--repo-name",
        required=True,
        help="Repository to analyze as 'owner/name' (token must have read access).",
    )
    parser.add_argument(
        "-o",
        "--output",
        dest="output_format",
        type=_enum_value(OutputFormat),
        default=OutputFormat.TEXT,
        metavar="{" + ",".join(_choices(OutputFormat)) + "}",
        help="How to output the results (default: text).",
    )
    parser.add_argument(
        "-i",
        "--individual-stats",
        type=_bool_value,
        nargs="?",
        const=True,
        default=False,
        help="Include review statistics for each individual contributor.",
    )
    parser.add_argument(
        "-t",
        "--tickets",
        default=None,
        help="Comma-separated tickets to include in the code review report.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Invalid ``--analyze`` or ``--output`` values terminate the process with a
    descriptive usage error before any work begins.
    """
    return build_parser().parse_args(argv)
