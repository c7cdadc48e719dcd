"""Evaluate tabletop dice notation such as ``2d6+4`` or ``10d10kh8>=8``."""

from dicebag.errors import DiceError, DivisionByZeroError, ParseError
from dicebag.evaluator import evaluate
from dicebag.grammar import parse
from dicebag.roll import (
    MAX_CUSTOM_SIDES,
    MAX_ROLLS,
    MAX_SIDES,
    CustomDie,
    DropLowest,
    GreaterOrEqual,
    GreaterThan,
    KeepHighest,
    LessOrEqual,
    LessThan,
    NumericDie,
    Roll,
    RollSpec,
    roll,
)
from dicebag.roller import Roller, evaluate_notation, roll_dice
from dicebag.sampler import RandomSampler, Sampler, default_sampler

__all__ = [
    "MAX_CUSTOM_SIDES",
    "MAX_ROLLS",
    "MAX_SIDES",
    "CustomDie",
    "DiceError",
    "DivisionByZeroError",
    "DropLowest",
    "GreaterOrEqual",
    "GreaterThan",
    "KeepHighest",
    "LessOrEqual",
    "LessThan",
    "NumericDie",
    "ParseError",
    "RandomSampler",
    "Roll",
    "RollSpec",
    "Roller",
    "Sampler",
    "default_sampler",
    "evaluate",
    "evaluate_notation",
    "parse",
    "roll",
    "roll_dice",
]
