"""
Expression Evaluator
====================
Evaluates the text of a single matrix cell, e.g. ``cos(pi/6)`` or ``-2**0.5``.

The evaluator is a small recursive-descent parser. Only numeric literals, the
operators ``+ - * / % ** ^``, parentheses and the names listed in CONSTANTS and
FUNCTIONS are understood; everything else is a syntax error. Names may also be
written with a ``Math.`` prefix (``Math.sqrt(2)``, ``Math.PI``).

Grammar::

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/' | '%') unary)*
    unary   := ('+' | '-') unary | power
    power   := primary (('**' | '^') unary)?
    primary := NUMBER | NAME | NAME '(' [expr (',' expr)*] ')' | '(' expr ')'
"""
from __future__ import annotations

from dataclasses import dataclass
import math
import re
from typing import Callable, Optional


class ExpressionError(ValueError):
    """Raised when a cell expression cannot be evaluated to a finite number."""


def _js_round(x: float) -> float:
    # half-up, matching what users of the browser version expect
    return float(math.floor(x + 0.5))


def _sign(x: float) -> float:
    if x > 0:
        return 1.0
    if x < 0:
        return -1.0
    return 0.0


def _cbrt(x: float) -> float:
    return math.copysign(abs(x) ** (1.0 / 3.0), x)


CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
    "tau": math.tau,
    "PI": math.pi,
    "E": math.e,
    "SQRT2": math.sqrt(2.0),
    "SQRT1_2": math.sqrt(0.5),
    "LN2": math.log(2.0),
    "LN10": math.log(10.0),
    "LOG2E": 1.0 / math.log(2.0),
    "LOG10E": 1.0 / math.log(10.0),
}


@dataclass(frozen=True)
class _Function:
    fn: Callable[..., float]
    min_args: int
    max_args: Optional[int]  # None = variadic


FUNCTIONS: dict[str, _Function] = {
    "sin": _Function(math.sin, 1, 1),
    "cos": _Function(math.cos, 1, 1),
    "tan": _Function(math.tan, 1, 1),
    "asin": _Function(math.asin, 1, 1),
    "acos": _Function(math.acos, 1, 1),
    "atan": _Function(math.atan, 1, 1),
    "atan2": _Function(math.atan2, 2, 2),
    "sinh": _Function(math.sinh, 1, 1),
    "cosh": _Function(math.cosh, 1, 1),
    "tanh": _Function(math.tanh, 1, 1),
    "sqrt": _Function(math.sqrt, 1, 1),
    "cbrt": _Function(_cbrt, 1, 1),
    "exp": _Function(math.exp, 1, 1),
    "log": _Function(math.log, 1, 1),
    "log2": _Function(math.log2, 1, 1),
    "log10": _Function(math.log10, 1, 1),
    "abs": _Function(abs, 1, 1),
    "floor": _Function(math.floor, 1, 1),
    "ceil": _Function(math.ceil, 1, 1),
    "round": _Function(_js_round, 1, 1),
    "trunc": _Function(math.trunc, 1, 1),
    "sign": _Function(_sign, 1, 1),
    "min": _Function(min, 1, None),
    "max": _Function(max, 1, None),
    "pow": _Function(math.pow, 2, 2),
    "hypot": _Function(math.hypot, 1, None),
    "radians": _Function(math.radians, 1, 1),
    "degrees": _Function(math.degrees, 1, 1),
}

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
    | (?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)
    | (?P<name>[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)?)
    | (?P<op>\*\*|[-+*/%^(),])
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class Token:
    kind: str  # "number" | "name" | "op" | "end"
    text: str
    pos: int


def tokenize(text: str) -> list[Token]:
    """
    Split `text` into tokens.

    Raises:
        ExpressionError: On any character outside the accepted alphabet.
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise ExpressionError(f"Unexpected character {text[pos]!r} at position {pos}")
        kind = m.lastgroup
        if kind != "ws":
            tokens.append(Token(kind, m.group(), pos))
        pos = m.end()
    tokens.append(Token("end", "", len(text)))
    return tokens


def _resolve_name(name: str) -> str:
    if name.startswith("Math."):
        return name[len("Math."):]
    if "." in name:
        raise ExpressionError(f"Unknown name {name!r}")
    return name


class _Parser:
    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.i = 0

    # ---- token helpers ----

    @property
    def current(self) -> Token:
        return self.tokens[self.i]

    def _advance(self) -> Token:
        tok = self.tokens[self.i]
        self.i += 1
        return tok

    def _accept(self, *ops: str) -> Optional[Token]:
        tok = self.current
        if tok.kind == "op" and tok.text in ops:
            return self._advance()
        return None

    def _expect(self, op: str) -> Token:
        tok = self._accept(op)
        if tok is None:
            raise ExpressionError(f"Expected {op!r} at position {self.current.pos}")
        return tok

    # ---- grammar ----

    def parse(self) -> float:
        value = self.expr()
        if self.current.kind != "end":
            raise ExpressionError(f"Unexpected {self.current.text!r} at position {self.current.pos}")
        return value

    def expr(self) -> float:
        value = self.term()
        while True:
            tok = self._accept("+", "-")
            if tok is None:
                return value
            rhs = self.term()
            value = value + rhs if tok.text == "+" else value - rhs

    def term(self) -> float:
        value = self.unary()
        while True:
            tok = self._accept("*", "/", "%")
            if tok is None:
                return value
            rhs = self.unary()
            if tok.text == "*":
                value = value * rhs
            elif tok.text == "/":
                value = value / rhs
            else:
                # remainder takes the sign of the dividend
                value = math.fmod(value, rhs)

    def unary(self) -> float:
        tok = self._accept("+", "-")
        if tok is not None:
            operand = self.unary()
            return -operand if tok.text == "-" else operand
        return self.power()

    def power(self) -> float:
        base = self.primary()
        if self._accept("**", "^") is not None:
            exponent = self.unary()
            return math.pow(base, exponent)
        return base

    def primary(self) -> float:
        tok = self.current
        if tok.kind == "number":
            self._advance()
            return float(tok.text)

        if tok.kind == "name":
            self._advance()
            name = _resolve_name(tok.text)
            if self._accept("(") is not None:
                return self._call(name, tok)
            if name in CONSTANTS:
                return CONSTANTS[name]
            raise ExpressionError(f"Unknown name {tok.text!r}")

        if self._accept("(") is not None:
            value = self.expr()
            self._expect(")")
            return value

        if tok.kind == "end":
            raise ExpressionError("Unexpected end of expression")
        raise ExpressionError(f"Unexpected {tok.text!r} at position {tok.pos}")

    def _call(self, name: str, tok: Token) -> float:
        func = FUNCTIONS.get(name)
        if func is None:
            raise ExpressionError(f"Unknown function {tok.text!r}")

        args: list[float] = []
        if self._accept(")") is None:
            args.append(self.expr())
            while self._accept(",") is not None:
                args.append(self.expr())
            self._expect(")")

        if len(args) < func.min_args or (func.max_args is not None and len(args) > func.max_args):
            raise ExpressionError(f"Wrong number of arguments for {tok.text!r}: {len(args)}")
        return float(func.fn(*args))


def evaluate_expression(text: str) -> float:
    """
    Evaluate a cell expression.

    Args:
        text: Raw cell text. Blank text evaluates to 0.

    Returns:
        The finite value of the expression.

    Raises:
        ExpressionError: If the text is not a valid expression or its value is
            not a finite number.
    """
    if not text.strip():
        return 0.0

    try:
        value = _Parser(tokenize(text)).parse()
    except ExpressionError:
        raise
    except (ArithmeticError, ValueError, RecursionError) as e:
        # ZeroDivisionError, OverflowError, math domain errors, absurd nesting
        raise ExpressionError(f"Cannot evaluate {text!r}: {e}") from e

    if not math.isfinite(value):
        raise ExpressionError(f"Result of {text!r} is not finite")
    return value


def try_evaluate(text: str) -> Optional[float]:
    """Like `evaluate_expression`, but returns None instead of raising."""
    try:
        return evaluate_expression(text)
    except ExpressionError:
        return None
