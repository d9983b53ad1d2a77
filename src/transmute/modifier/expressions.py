"""Parser for function expressions on the right-hand side of a modify spec.

Forms:
- `=abs`                 shorthand; the value at the current key is the argument
- `=abs(@(1,value))`     explicit argument list
- `=concat(@(1,first), ' ', @(1,last))`

Argument tokens:
- `@(N,a.b)`, `@(N)`, `@a.b`, `@`   path references (see MatchContext)
- `'text'` or `"text"`              string literal
- `true`, `false`, `null`           JSON literals
- `42`, `-1.5`, `1e3`               numbers
- anything else                     bare string
"""

import re
from dataclasses import dataclass
from typing import Any

_EXPRESSION_RE = re.compile(r"^=([A-Za-z_][A-Za-z0-9_]*)(?:\((.*)\))?$", re.DOTALL)
_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+(\.\d*)?[eE][+-]?\d+)$")
_LEVEL_RE = re.compile(r"^\d+$")

_KEYWORDS = {"true": True, "false": False, "null": None}


@dataclass(frozen=True)
class LiteralArg:
    """An argument whose value is written in the expression itself."""

    value: Any


@dataclass(frozen=True)
class PathArg:
    """A reference into the document relative to the current match.

    Attributes:
        level: 0 is the value at the current key, 1 the container holding it
        segments: Keys to walk down from there; `&N` segments name the key
            N levels up
    """

    level: int = 0
    segments: tuple[str, ...] = ()


ArgToken = LiteralArg | PathArg


@dataclass(frozen=True)
class FunctionExpression:
    """A parsed `=name(...)` value.

    Attributes:
        name: Function name (case-sensitive)
        args: Argument tokens in order
        shorthand: True for the bare `=name` form
    """

    name: str
    args: tuple[ArgToken, ...] = ()
    shorthand: bool = False


def parse_function_expression(text: Any) -> FunctionExpression | None:
    """Parse a spec value as a function expression.

    Returns None when the value is not a well-formed function expression;
    callers treat such values as literals.
    """
    if not isinstance(text, str):
        return None

    match = _EXPRESSION_RE.match(text.strip())
    if match is None:
        return None

    name, arg_text = match.group(1), match.group(2)
    if arg_text is None:
        return FunctionExpression(name=name, shorthand=True)

    try:
        tokens = split_arguments(arg_text)
    except ValueError:
        return None
    return FunctionExpression(name=name, args=tuple(parse_argument(t) for t in tokens))


def split_arguments(text: str) -> list[str]:
    """Split an argument list on top-level commas.

    Commas inside quotes or parentheses do not split.

    Raises:
        ValueError: On unbalanced quotes or parentheses
    """
    if not text.strip():
        return []

    parts: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None

    for ch in text:
        if quote:
            current.append(ch)
            if ch == quote:
                quote = None
            continue
        if ch in ("'", '"'):
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise ValueError(f"Unbalanced ')' in arguments: {text}")
        elif ch == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)

    if quote or depth:
        raise ValueError(f"Unterminated argument list: {text}")

    parts.append("".join(current).strip())
    return parts


def parse_argument(token: str) -> ArgToken:
    """Parse a single argument token."""
    if token.startswith("@"):
        return _parse_path(token[1:])

    if len(token) >= 2 and token[0] == token[-1] and token[0] in ("'", '"'):
        return LiteralArg(token[1:-1])

    if token in _KEYWORDS:
        return LiteralArg(_KEYWORDS[token])

    if _INT_RE.match(token):
        return LiteralArg(int(token))

    if _FLOAT_RE.match(token):
        return LiteralArg(float(token))

    return LiteralArg(token)


def _parse_path(body: str) -> PathArg:
    if not body:
        return PathArg()

    if body.startswith("(") and body.endswith(")"):
        inner = body[1:-1]
        level_text, _, path = inner.partition(",")
        level_text = level_text.strip()
        if _LEVEL_RE.match(level_text):
            return PathArg(level=int(level_text), segments=_segments(path))
        # `@(a.b)` without a level reads relative to the current value
        return PathArg(segments=_segments(inner))

    return PathArg(segments=_segments(body))


def _segments(path: str) -> tuple[str, ...]:
    return tuple(s.strip() for s in path.split(".") if s.strip())
