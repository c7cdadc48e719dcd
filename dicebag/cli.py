"""Command-line dice roller.

Examples:
  dicebag 2d6+4
  dicebag "10d10kh8>=8" --repeat 3
  dicebag "/roll 1d20+5 \\ initiative" --seed 7
"""

from __future__ import annotations

import argparse
import itertools
import logging
import sys
from collections.abc import Sequence

from dicebag.config import settings
from dicebag.errors import DiceError
from dicebag.roller import Roller
from dicebag.sampler import RandomSampler

logger = logging.getLogger(__name__)


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dicebag",
        description="Roll dice using tabletop dice notation.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "notation",
        nargs="*",
        default=[settings.default_notation],
        help="Dice notation, e.g. 2d6+4, 4d6kh3, 8d10>=7, 2d[-1,0,1]",
    )
    parser.add_argument(
        "--repeat",
        type=_positive_int,
        default=settings.default_repeat,
        help="Number of times to roll each notation",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=settings.seed,
        help="Random seed for reproducible rolls",
    )
    parser.add_argument(
        "--log-level",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        default=settings.log_level,
        help="Logging verbosity",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    sampler = RandomSampler(args.seed)
    try:
        for notation in args.notation:
            roller = Roller(notation, sampler)
            for total in itertools.islice(roller, args.repeat):
                print(total)
            logger.debug("Rolled %r %d time(s)", notation, args.repeat)
    except DiceError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0
