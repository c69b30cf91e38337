"""Detection and compilation of single-variable equations such as ``y = 2x + 1``.

Input is rewritten into Python expression syntax and parsed with :mod:`ast`.
Only arithmetic nodes, the variable ``x``, numeric literals and attributes of
the function table ``M`` are allowed through before the tree is compiled.
"""

from __future__ import annotations

import ast
import math
import re
from types import SimpleNamespace
from typing import Optional

from contour_engine.core.logging import get_logger
from contour_engine.core.models import GraphFunction, GraphResult

logger = get_logger(__name__)

_HAS_VARIABLE = re.compile(r"(?:^|[^a-wA-WyYzZ])x")
_EXPLICIT_FORM = re.compile(r"^[yfg]\s*(\(\s*x\s*\))?\s*=", re.IGNORECASE)
_EXPLICIT_PREFIX = re.compile(r"^\s*[yfg]\s*(\(\s*x\s*\))?\s*=\s*", re.IGNORECASE)
_OPERATOR_CHARS = re.compile(r"[+\-*/^()|]")
_FUNCTION_WORDS = re.compile(r"\b(?:sin|cos|tan|sqrt|abs|ln|log|exp|pi)\b|π")
_IMPLICIT_DIGIT_X = re.compile(r"\dx")
_ABS_BARS = re.compile(r"\|([^|]+)\|")


def _js_round(value: float) -> float:
    return float(math.floor(value + 0.5))


def _sign(value: float) -> float:
    if value > 0:
        return 1.0
    if value < 0:
        return -1.0
    return 0.0


def _cbrt(value: float) -> float:
    return math.copysign(abs(value) ** (1.0 / 3.0), value)


FUNCTIONS = SimpleNamespace(
    sqrt=math.sqrt,
    cbrt=_cbrt,
    sinh=math.sinh,
    cosh=math.cosh,
    tanh=math.tanh,
    asin=math.asin,
    acos=math.acos,
    atan2=math.atan2,
    atan=math.atan,
    sin=math.sin,
    cos=math.cos,
    tan=math.tan,
    abs=abs,
    sign=_sign,
    hypot=math.hypot,
    ln=math.log,
    log10=math.log10,
    log2=math.log2,
    exp=math.exp,
    ceil=math.ceil,
    floor=math.floor,
    round=_js_round,
    trunc=math.trunc,
    pow=math.pow,
    max=max,
    min=min,
    PI=math.pi,
    E=math.e,
    INF=math.inf,
)

# Longer names first so that e.g. ``sinh`` is not consumed by ``sin``.
_FUNCTION_REWRITES: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(pattern), replacement)
    for pattern, replacement in (
        (r"\bsqrt\b", "M.sqrt"),
        (r"\bcbrt\b", "M.cbrt"),
        (r"\bsinh\b", "M.sinh"),
        (r"\bcosh\b", "M.cosh"),
        (r"\btanh\b", "M.tanh"),
        (r"\basin\b", "M.asin"),
        (r"\bacos\b", "M.acos"),
        (r"\batan2\b", "M.atan2"),
        (r"\batan\b", "M.atan"),
        (r"\bsin\b", "M.sin"),
        (r"\bcos\b", "M.cos"),
        (r"\btan\b", "M.tan"),
        (r"\babs\b", "M.abs"),
        (r"\bsign\b", "M.sign"),
        (r"\bhypot\b", "M.hypot"),
        (r"\bln\b", "M.ln"),
        (r"\blog10\b", "M.log10"),
        (r"\blog2\b", "M.log2"),
        (r"\blog\b", "M.log10"),
        (r"\bexp\b", "M.exp"),
        (r"\bceil\b", "M.ceil"),
        (r"\bfloor\b", "M.floor"),
        (r"\bround\b", "M.round"),
        (r"\btrunc\b", "M.trunc"),
        (r"\bpow\b", "M.pow"),
        (r"\bmax\b", "M.max"),
        (r"\bmin\b", "M.min"),
        (r"\bmod\b", "%"),
    )
)

_IMPLICIT_MULTIPLICATION: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(pattern), replacement)
    for pattern, replacement in (
        (r"(\d)(x)(?!\w)", r"\1*\2"),
        (r"((?<![\w.])\d*\.?\d+)\s*\(", r"\1*("),
        (r"\)\s*\(", ")*("),
        (r"\)\s*x(?!\w)", ")*x"),
        (r"\)\s*(\d)", r")*\1"),
        (r"(?<![\w.])x\s*\(", "x*("),
        (r"(\d)\s*(M\.)", r"\1*\2"),
        (r"\)\s*(M\.)", r")*\1"),
        (r"(?<![\w.])x\s*(M\.)", r"x*\1"),
    )
)

_ALLOWED_NODES = (
    ast.Expression,
    ast.BinOp,
    ast.UnaryOp,
    ast.Constant,
    ast.Call,
    ast.Name,
    ast.Attribute,
    ast.Load,
    ast.Add,
    ast.Sub,
    ast.Mult,
    ast.Div,
    ast.Mod,
    ast.Pow,
    ast.USub,
    ast.UAdd,
)


def _has_math_ops(text: str) -> bool:
    return bool(
        _OPERATOR_CHARS.search(text)
        or _FUNCTION_WORDS.search(text)
        or _IMPLICIT_DIGIT_X.search(text)
    )


def parse_math_expr(text: str) -> str:
    """Rewrite a user equation into a Python expression over ``x`` and ``M``.

    Returns an empty string when nothing remains after the ``y =`` prefix.
    """
    if not text.strip():
        return ""
    expr = _EXPLICIT_PREFIX.sub("", text.strip(), count=1)
    if not expr.strip():
        return ""

    previous = None
    while previous != expr:
        previous = expr
        expr = _ABS_BARS.sub(r"abs(\1)", expr, count=1)

    expr = expr.replace("^", "**")
    for pattern, replacement in _FUNCTION_REWRITES:
        expr = pattern.sub(replacement, expr)

    expr = re.sub(r"\bpi\b", "M.PI", expr, flags=re.IGNORECASE)
    expr = expr.replace("π", "M.PI")
    expr = re.sub(r"\be\b", "M.E", expr)
    expr = expr.replace("∞", "M.INF")

    for pattern, replacement in _IMPLICIT_MULTIPLICATION:
        expr = pattern.sub(replacement, expr)
    return expr


class _FloatLiterals(ast.NodeTransformer):
    """Turn integer literals into floats so ``**`` overflows instead of growing."""

    def visit_Constant(self, node: ast.Constant) -> ast.AST:  # pylint: disable=invalid-name
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise ValueError("Expression constants must be numeric.")
        return ast.copy_location(ast.Constant(value=float(node.value)), node)


def _validate(tree: ast.AST) -> None:
    for node in ast.walk(tree):
        if not isinstance(node, _ALLOWED_NODES):
            raise ValueError(f"Unsupported expression node: {type(node).__name__}")
        if isinstance(node, ast.Name) and node.id not in ("x", "M"):
            raise ValueError(f"Unknown name: {node.id}")
        if isinstance(node, ast.Attribute):
            if not (isinstance(node.value, ast.Name) and node.value.id == "M"):
                raise ValueError("Only function table attributes are allowed.")
            if not hasattr(FUNCTIONS, node.attr):
                raise ValueError(f"Unknown function: {node.attr}")
        if isinstance(node, ast.Call) and (node.keywords or not isinstance(node.func, ast.Attribute)):
            raise ValueError("Only plain function calls are allowed.")


def compile_graph(equation: str) -> Optional[GraphFunction]:
    """Compile ``equation`` into ``f(x) -> float | None``.

    The returned function yields ``None`` wherever evaluation fails or the
    value is not a finite real number. ``None`` is returned when the equation
    cannot be compiled at all.
    """
    source = parse_math_expr(equation)
    if not source:
        return None
    try:
        tree = ast.parse(source, mode="eval")
        _validate(tree)
        tree = ast.fix_missing_locations(_FloatLiterals().visit(tree))
        code = compile(tree, filename="<graph>", mode="eval")
    except (SyntaxError, ValueError) as exc:
        logger.debug("[graph] cannot compile %r: %s", equation, exc)
        return None

    def evaluate(x: float) -> Optional[float]:
        try:
            value = eval(code, {"__builtins__": {}}, {"x": x, "M": FUNCTIONS})  # pylint: disable=eval-used
        except (ArithmeticError, ValueError, TypeError):
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        if not math.isfinite(value):
            return None
        return float(value)

    return evaluate


def detect_graph(text: str) -> Optional[GraphResult]:
    """Recognize a plottable equation in ``x``.

    Triggers on ``y =``/``f(x) =``/``g(x) =`` forms, on any expression with
    ``x`` plus an operator or known function, and on a lone ``x``.
    """
    trimmed = text.strip()
    if not trimmed:
        return None
    if not _HAS_VARIABLE.search(trimmed):
        return None

    matched = False
    if _EXPLICIT_FORM.match(trimmed):
        rhs = _EXPLICIT_PREFIX.sub("", trimmed, count=1).strip()
        matched = bool(rhs)
    if not matched and (_has_math_ops(trimmed) or trimmed == "x"):
        matched = True
    if not matched:
        return None

    return GraphResult(
        expression=trimmed,
        normalized=parse_math_expr(trimmed),
        function=compile_graph(trimmed),
    )


def sample(
    function: GraphFunction, x_min: float, x_max: float, steps: int = 500
) -> list[tuple[float, Optional[float]]]:
    """Evaluate ``function`` at ``steps + 1`` evenly spaced points."""
    if steps <= 0:
        raise ValueError("steps must be positive")
    points: list[tuple[float, Optional[float]]] = []
    for i in range(steps + 1):
        x = x_min + (x_max - x_min) * i / steps
        points.append((x, function(x)))
    return points


__all__ = ["FUNCTIONS", "compile_graph", "detect_graph", "parse_math_expr", "sample"]
