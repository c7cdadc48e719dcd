"""Dice notation grammar: tokenizer and precedence-climbing parser.

    notation := command? expr comment?
    command  := '/roll' | '/r'                 (followed by whitespace)
    comment  := '\\' anything
    expr     := term (('+' | '-') term)*
    term     := factor (('*' | '/') factor)*
    factor   := signed_int | '-'? roll | '(' expr ')'
    roll     := uint 'd' die take? target?       (no whitespace inside)
    die      := uint | '[' int (',' int)* ']'   (whitespace allowed inside [])
    take     := 'k' 'h'? uint | 'd' 'l'? uint
    target   := ('>=' | '>' | '<=' | '<') uint

Letters are case-insensitive. Whitespace is skipped between tokens, never
inside a roll term, so "1 d 6" does not parse.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Union

from dicebag.errors import ParseError
from dicebag.roll import (
    TARGET_POLICIES,
    CustomDie,
    Die,
    DropLowest,
    KeepHighest,
    NumericDie,
    RollSpec,
    TakePolicy,
    TargetPolicy,
)

logger = logging.getLogger(__name__)

_UINT_RE = re.compile(r"[0-9]+")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_COMMAND_RE = re.compile(r"/(?:roll|r)(?=\s|$)", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s*")

# Binding power of each binary operator; all are left-associative.
BINARY_PRECEDENCE: dict[str, int] = {"+": 1, "-": 1, "*": 2, "/": 2}

# Deepest allowed parenthesis nesting; each level costs several stack frames.
MAX_NESTING = 100

# Longest symbols first so ">=" is not read as ">".
_TARGET_SYMBOLS = sorted(TARGET_POLICIES, key=len, reverse=True)


# ---------------------------------------------------------------------------
# Parse tree
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Integer:
    value: int


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: Node
    right: Node


@dataclass(frozen=True)
class Group:
    inner: Node


@dataclass(frozen=True)
class RollTerm:
    spec: RollSpec


@dataclass(frozen=True)
class Negate:
    """A roll term written with a negative count, e.g. ``-3d6``."""

    operand: Node


Node = Union[Integer, BinaryOp, Group, RollTerm, Negate]


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.depth = 0

    def error(self, message: str) -> ParseError:
        return ParseError(message, self.text, self.pos)

    def peek(self) -> str:
        return self.text[self.pos : self.pos + 1]

    def describe(self) -> str:
        ch = self.peek()
        return repr(ch) if ch else "end of input"

    def skip_whitespace(self) -> None:
        self.pos = _WHITESPACE_RE.match(self.text, self.pos).end()

    def parse(self) -> Node:
        self.skip_whitespace()
        self.command()
        node = self.expression(1)
        self.skip_whitespace()
        if self.peek() == "\\":
            self.pos = len(self.text)
        if self.pos < len(self.text):
            raise self.error(f"Unexpected {self.describe()}")
        return node

    def command(self) -> None:
        if self.peek() != "/":
            return
        match = _COMMAND_RE.match(self.text, self.pos)
        if match is None:
            raise self.error("Unknown command")
        self.pos = match.end()

    def expression(self, min_precedence: int) -> Node:
        left = self.factor()
        while True:
            self.skip_whitespace()
            op = self.peek()
            precedence = BINARY_PRECEDENCE.get(op)
            if precedence is None or precedence < min_precedence:
                return left
            self.pos += 1
            right = self.expression(precedence + 1)
            left = BinaryOp(op, left, right)

    def factor(self) -> Node:
        self.skip_whitespace()
        if self.peek() == "(":
            if self.depth >= MAX_NESTING:
                raise self.error("Expression nested too deeply")
            self.depth += 1
            self.pos += 1
            inner = self.expression(1)
            self.skip_whitespace()
            if self.peek() != ")":
                raise self.error(f"Expected ')' but found {self.describe()}")
            self.pos += 1
            self.depth -= 1
            return Group(inner)

        match = _INT_RE.match(self.text, self.pos)
        if match is None:
            raise self.error(f"Expected a number or '(' but found {self.describe()}")
        self.pos = match.end()
        literal = match.group()
        if self.peek().lower() != "d":
            return Integer(int(literal))

        self.pos += 1
        term = RollTerm(self.roll(abs(int(literal))))
        if literal.startswith("-"):
            return Negate(term)
        return term

    def roll(self, count: int) -> RollSpec:
        die = self.die()
        take = self.take()
        target = self.target()
        return RollSpec(count=count, die=die, take=take, target=target)

    def die(self) -> Die:
        if self.peek() != "[":
            return NumericDie(self.unsigned_int())

        self.pos += 1
        faces: list[int] = []
        self.skip_whitespace()
        if self.peek() == "]":
            self.pos += 1
            return CustomDie(())
        while True:
            self.skip_whitespace()
            faces.append(self.signed_int())
            self.skip_whitespace()
            ch = self.peek()
            if ch not in (",", "]"):
                raise self.error(f"Expected ',' or ']' but found {self.describe()}")
            self.pos += 1
            if ch == "]":
                return CustomDie(tuple(faces))

    def take(self) -> TakePolicy | None:
        ch = self.peek().lower()
        if ch == "k":
            self.pos += 1
            if self.peek().lower() == "h":
                self.pos += 1
            return KeepHighest(self.unsigned_int())
        if ch == "d":
            self.pos += 1
            if self.peek().lower() == "l":
                self.pos += 1
            return DropLowest(self.unsigned_int())
        return None

    def target(self) -> TargetPolicy | None:
        for symbol in _TARGET_SYMBOLS:
            if self.text.startswith(symbol, self.pos):
                self.pos += len(symbol)
                return TARGET_POLICIES[symbol](self.unsigned_int())
        return None

    def unsigned_int(self) -> int:
        match = _UINT_RE.match(self.text, self.pos)
        if match is None:
            raise self.error(f"Expected a non-negative number but found {self.describe()}")
        self.pos = match.end()
        return int(match.group())

    def signed_int(self) -> int:
        match = _INT_RE.match(self.text, self.pos)
        if match is None:
            raise self.error(f"Expected a number but found {self.describe()}")
        self.pos = match.end()
        return int(match.group())


def parse(text: str) -> Node:
    """Parse dice notation into a tree.

    Args:
        text: Notation such as ``"2d6+4"`` or ``"/roll 10d10kh8>=8"``.

    Returns:
        The root node of the parse tree.

    Raises:
        ParseError: If ``text`` is not valid notation.
    """
    tree = _Parser(text).parse()
    logger.debug("Parsed %r", text)
    return tree
