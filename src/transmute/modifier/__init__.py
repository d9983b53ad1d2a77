"""Modify transform: writes function results into a JSON document.

Usage:
    from transmute.modifier import Modifier, ModifyMode

    Modifier(ModifyMode.DEFAULT).transform(
        {"value": -1.0},
        {"absValue": "=abs(@(1,value))", "label": ["=notNull(@(1,name))", "unknown"]},
    )
    # {"value": -1.0, "absValue": 1.0, "label": "unknown"}
"""

from transmute.modifier.context import MatchContext
from transmute.modifier.expressions import (
    FunctionExpression,
    LiteralArg,
    PathArg,
    parse_function_expression,
)
from transmute.modifier.loader import load_steps, parse_steps
from transmute.modifier.service import Modifier, run_steps
from transmute.modifier.types import ModifyMode, ModifyStep, SpecError

__all__ = [
    "FunctionExpression",
    "LiteralArg",
    "MatchContext",
    "Modifier",
    "ModifyMode",
    "ModifyStep",
    "PathArg",
    "SpecError",
    "load_steps",
    "parse_function_expression",
    "parse_steps",
    "run_steps",
]
