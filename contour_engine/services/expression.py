"""Arithmetic expression evaluation without ``eval``.

Tokens are numbers, the operators ``+ - * / % ^`` and parentheses. The grammar,
lowest precedence first::

    expr   := term (("+" | "-") term)*
    term   := factor (("*" | "/" | "%") factor)*
    factor := base ("^" factor)?          # right-associative
    base   := NUMBER | "(" expr ")"

A minus at the start, after an operator or after ``(`` is folded into the
following number. Malformed input and division or modulo by zero evaluate to
``None``.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Literal, Optional

from contour_engine.core.models import CalculatorResult

OPERATORS = "+-*/%^"
_NUMBER_CHARS = frozenset("0123456789.")

_STARTS_LIKE_MATH = re.compile(r"^[\d\s\-.(]")
_BINARY_OPERATION = re.compile(r"[\d)]\s*[+\-*/%^]\s*[\d(]")
_TRAILING_OPERATION = re.compile(r"[\d)]\s*[+\-*/%^]\s*$")
_TRAILING_OPERATOR = re.compile(r"([+\-*/%^])\s*$")


@dataclass(slots=True, frozen=True)
class Token:
    """A lexical token of an arithmetic expression."""

    kind: Literal["number", "operator", "lparen", "rparen"]
    value: float | str | None = None


def _parse_number(text: str) -> Optional[float]:
    try:
        return float(text)
    except ValueError:
        return None


def tokenize(expression: str) -> list[Token]:
    """Split ``expression`` into tokens; an empty list means it is not arithmetic."""
    tokens: list[Token] = []
    i = 0
    length = len(expression)
    while i < length:
        ch = expression[i]
        if ch == " ":
            i += 1
            continue

        if ch in _NUMBER_CHARS:
            start = i
            while i < length and expression[i] in _NUMBER_CHARS:
                i += 1
            number = _parse_number(expression[start:i])
            if number is None:
                return []
            tokens.append(Token("number", number))
            continue

        if ch == "-":
            prev = tokens[-1] if tokens else None
            if prev is None or prev.kind in ("operator", "lparen"):
                start = i
                i += 1
                while i < length and expression[i] in _NUMBER_CHARS:
                    i += 1
                literal = expression[start:i]
                if literal == "-":
                    return []
                number = _parse_number(literal)
                if number is None:
                    return []
                tokens.append(Token("number", number))
                continue

        if ch in OPERATORS:
            tokens.append(Token("operator", ch))
            i += 1
            continue

        if ch == "(":
            tokens.append(Token("lparen"))
            i += 1
            continue

        if ch == ")":
            tokens.append(Token("rparen"))
            i += 1
            continue

        return []
    return tokens


class _Parser:
    """Recursive-descent evaluator over a token list."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self.pos = 0

    def _peek_operator(self, accepted: str) -> Optional[str]:
        if self.pos >= len(self._tokens):
            return None
        tok = self._tokens[self.pos]
        if tok.kind == "operator" and isinstance(tok.value, str) and tok.value in accepted:
            return tok.value
        return None

    def expr(self) -> Optional[float]:
        left = self.term()
        if left is None:
            return None
        while (op := self._peek_operator("+-")) is not None:
            self.pos += 1
            right = self.term()
            if right is None:
                return None
            left = left + right if op == "+" else left - right
        return left

    def term(self) -> Optional[float]:
        left = self.factor()
        if left is None:
            return None
        while (op := self._peek_operator("*/%")) is not None:
            self.pos += 1
            right = self.factor()
            if right is None:
                return None
            if op == "*":
                left = left * right
            elif right == 0:
                return None
            elif op == "/":
                left = left / right
            else:
                left = math.fmod(left, right)
        return left

    def factor(self) -> Optional[float]:
        base = self.base()
        if base is None:
            return None
        if self._peek_operator("^") is not None:
            self.pos += 1
            exponent = self.factor()
            if exponent is None:
                return None
            try:
                value = math.pow(base, exponent)
            except (OverflowError, ValueError):
                return None
            return value
        return base

    def base(self) -> Optional[float]:
        if self.pos >= len(self._tokens):
            return None
        tok = self._tokens[self.pos]
        if tok.kind == "number":
            self.pos += 1
            return float(tok.value)  # type: ignore[arg-type]
        if tok.kind == "lparen":
            self.pos += 1
            value = self.expr()
            if value is None:
                return None
            if self.pos >= len(self._tokens) or self._tokens[self.pos].kind != "rparen":
                return None
            self.pos += 1
            return value
        return None


def evaluate(expression: str) -> Optional[float]:
    """Evaluate ``expression`` or return ``None`` when it is not well-formed."""
    tokens = tokenize(expression)
    if not tokens:
        return None
    parser = _Parser(tokens)
    value = parser.expr()
    if value is None or parser.pos != len(tokens):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def _group(value: float, max_decimals: int) -> str:
    text = f"{value:,.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def format_number(value: float) -> str:
    """Render a result with thousands grouping and at most six decimals."""
    if float(value).is_integer():
        return f"{int(value):,}"
    rounded = round(value, 10)
    if rounded.is_integer():
        return f"{int(rounded):,}"
    return _group(rounded, 6)


def format_expression(expression: str) -> str:
    """Prettify operators for display, e.g. ``5*3`` becomes ``5 × 3``."""
    text = expression
    text = text.replace("*", " × ")
    text = text.replace("/", " ÷ ")
    text = text.replace("+", " + ")
    text = text.replace("-", " − ")
    text = text.replace("^", " ^ ")
    text = text.replace("%", " mod ")
    return re.sub(r"\s+", " ", text).strip()


def is_math_expression(text: str) -> bool:
    """True when ``text`` starts like arithmetic and contains a binary operator."""
    trimmed = text.strip()
    if not trimmed:
        return False
    if not _STARTS_LIKE_MATH.match(trimmed):
        return False
    return bool(_BINARY_OPERATION.search(trimmed) or _TRAILING_OPERATION.search(trimmed))


def evaluate_math(text: str) -> Optional[CalculatorResult]:
    """Detect and evaluate an arithmetic expression.

    A trailing operator yields a partial result computed from the prefix, with a
    display that ends in ``...``.
    """
    trimmed = text.strip()
    if not trimmed or not is_math_expression(trimmed):
        return None

    trailing = _TRAILING_OPERATOR.search(trimmed)
    if trailing:
        prefix = trimmed[: trailing.start()].strip()
        if not prefix:
            return None
        value = evaluate(prefix)
        if value is None:
            return None
        operator = trailing.group(1)
        return CalculatorResult(
            expression=trimmed,
            result=value,
            display_result=f"{format_expression(prefix)} {format_expression(operator)} ...",
            is_partial=True,
        )

    value = evaluate(trimmed)
    if value is None:
        return None
    return CalculatorResult(
        expression=trimmed,
        result=value,
        display_result=f"{format_expression(trimmed)} = {format_number(value)}",
        is_partial=False,
    )


__all__ = [
    "Token",
    "tokenize",
    "evaluate",
    "evaluate_math",
    "format_expression",
    "format_number",
    "is_math_expression",
]
