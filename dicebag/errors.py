"""Exceptions raised while parsing and evaluating dice notation."""

from __future__ import annotations


class DiceError(ValueError):
    """Base class for every error raised by dicebag."""


class ParseError(DiceError):
    """Raised when a notation string cannot be parsed.

    Attributes:
        text: The full notation that failed to parse.
        position: 0-based index of the offending character in ``text``.
    """

    def __init__(self, message: str, text: str, position: int) -> None:
        self.text = text
        self.position = position
        super().__init__(f"{message} at position {position} in {text!r}")


class DivisionByZeroError(DiceError, ZeroDivisionError):
    """Raised when an expression divides by zero."""
