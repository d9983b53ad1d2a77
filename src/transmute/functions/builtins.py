"""Built-in functions for transmute function expressions.

This module registers the stock functions with a FunctionRegistry.
default_registry() builds, freezes and caches one registry for the process.

Categories:
- Existence: noop, isPresent, notNull, isNull
- String: toLower, toUpper, concat
- Math: min, max, abs
- Conversion: toInteger, toDouble, toLong

Every function returns Result.empty() when it cannot handle its input;
none of them raise.
"""

import threading
from typing import Any

from transmute.functions.numbers import (
    absolute,
    numeric_args,
    to_double,
    to_int32,
    to_int64,
)
from transmute.functions.registry import (
    FunctionCategory,
    FunctionDefinition,
    FunctionParameter,
    FunctionRegistry,
)
from transmute.functions.result import ABSENT, Result
from transmute.functions.text import to_text

_default_registry: FunctionRegistry | None = None
_default_lock = threading.Lock()


def register_all_builtins(registry: FunctionRegistry) -> FunctionRegistry:
    """Register all built-in functions with the given registry."""
    _register_existence_functions(registry)
    _register_string_functions(registry)
    _register_math_functions(registry)
    _register_conversion_functions(registry)
    return registry


def default_registry() -> FunctionRegistry:
    """Return the shared, frozen registry of built-in functions."""
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = register_all_builtins(FunctionRegistry()).freeze()
    return _default_registry


_VALUE = FunctionParameter("value", "any", "The value to check")
_VALUES = FunctionParameter("values", "any", "Values to combine", variadic=True)


# -----------------------------------------------------------------------------
# Existence Functions
# -----------------------------------------------------------------------------


def _noop(*args: Any) -> Result:
    """Always absent, whatever the arguments."""
    return ABSENT


def _is_present(*args: Any) -> Result:
    """First argument, null or otherwise."""
    if not args:
        return ABSENT
    return Result.of(args[0])


def _not_null(*args: Any) -> Result:
    """First argument if it is not null."""
    if not args or args[0] is None:
        return ABSENT
    return Result.of(args[0])


def _is_null(*args: Any) -> Result:
    """First argument only if it is null."""
    if not args or args[0] is not None:
        return ABSENT
    return Result.of(args[0])


def _register_existence_functions(registry: FunctionRegistry) -> None:
    registry.register(
        FunctionDefinition(
            name="noop",
            description="Does nothing; the key is left unchanged",
            category=FunctionCategory.EXISTENCE,
            parameters=(),
            return_type="none",
            implementation=_noop,
            examples=('"key": "=noop"',),
        )
    )

    registry.register(
        FunctionDefinition(
            name="isPresent",
            description="Returns the first argument, null or otherwise",
            category=FunctionCategory.EXISTENCE,
            parameters=(_VALUE,),
            return_type="any",
            implementation=_is_present,
            examples=('"key": ["=isPresent", "otherValue"]',),
        )
    )

    registry.register(
        FunctionDefinition(
            name="notNull",
            description="Returns the first argument if it is not null",
            category=FunctionCategory.EXISTENCE,
            parameters=(_VALUE,),
            return_type="any",
            implementation=_not_null,
            examples=('"key": ["=notNull", "otherValue"]',),
        )
    )

    registry.register(
        FunctionDefinition(
            name="isNull",
            description="Returns the first argument only if it is null",
            category=FunctionCategory.EXISTENCE,
            parameters=(_VALUE,),
            return_type="null",
            implementation=_is_null,
            examples=('"key": ["=isNull", "otherValue"]',),
        )
    )


# -----------------------------------------------------------------------------
# String Functions
# -----------------------------------------------------------------------------


def _to_lower(*args: Any) -> Result:
    """Lower-cased string form of the first argument; the rest is ignored."""
    if not args or args[0] is None:
        return ABSENT
    return Result.of(to_text(args[0]).lower())


def _to_upper(*args: Any) -> Result:
    """Upper-cased string form of the first argument; the rest is ignored."""
    if not args or args[0] is None:
        return ABSENT
    return Result.of(to_text(args[0]).upper())


def _concat(*args: Any) -> Result:
    """String form of every argument, joined in order."""
    if not args:
        return ABSENT
    return Result.of("".join(to_text(a) for a in args))


def _register_string_functions(registry: FunctionRegistry) -> None:
    registry.register(
        FunctionDefinition(
            name="toLower",
            description="Lower-cases the string form of the first argument",
            category=FunctionCategory.STRING,
            parameters=(FunctionParameter("value", "any", "The value to convert"),),
            return_type="string",
            implementation=_to_lower,
            examples=('"email": "=toLower"', '"code": "=toLower(@(1,name))"'),
        )
    )

    registry.register(
        FunctionDefinition(
            name="toUpper",
            description="Upper-cases the string form of the first argument",
            category=FunctionCategory.STRING,
            parameters=(FunctionParameter("value", "any", "The value to convert"),),
            return_type="string",
            implementation=_to_upper,
            examples=('"countryCode": "=toUpper"',),
        )
    )

    registry.register(
        FunctionDefinition(
            name="concat",
            description="Concatenates the string form of all arguments",
            category=FunctionCategory.STRING,
            parameters=(_VALUES,),
            return_type="string",
            implementation=_concat,
            examples=("\"fullName\": \"=concat(@(1,first), ' ', @(1,last))\"",),
        )
    )


# -----------------------------------------------------------------------------
# Math Functions
# -----------------------------------------------------------------------------


def _min_val(*args: Any) -> Result:
    """Minimum of the numeric arguments; non-numbers are ignored."""
    values = numeric_args(args)
    if not values:
        return ABSENT
    return Result.of(min(values))


def _max_val(*args: Any) -> Result:
    """Maximum of the numeric arguments; non-numbers are ignored."""
    values = numeric_args(args)
    if not values:
        return ABSENT
    return Result.of(max(values))


def _abs(*args: Any) -> Result:
    """Absolute value of a numeric first argument, type kept."""
    return _convert(absolute, args)


def _register_math_functions(registry: FunctionRegistry) -> None:
    registry.register(
        FunctionDefinition(
            name="min",
            description="Returns the minimum of the numeric arguments, ignoring non-numbers",
            category=FunctionCategory.MATH,
            parameters=(FunctionParameter("values", "number", "Candidates", variadic=True),),
            return_type="number",
            implementation=_min_val,
            examples=('"lowest": "=min(@(1,a), @(1,b), 0)"',),
        )
    )

    registry.register(
        FunctionDefinition(
            name="max",
            description="Returns the maximum of the numeric arguments, ignoring non-numbers",
            category=FunctionCategory.MATH,
            parameters=(FunctionParameter("values", "number", "Candidates", variadic=True),),
            return_type="number",
            implementation=_max_val,
            examples=('"quantity": "=max(@(1,quantity), 1)"',),
        )
    )

    registry.register(
        FunctionDefinition(
            name="abs",
            description="Returns the absolute value of the first argument",
            category=FunctionCategory.MATH,
            parameters=(FunctionParameter("value", "number", "The number"),),
            return_type="number",
            implementation=_abs,
            examples=('"num": "=abs"', '"absValue": "=abs(@(1,value))"'),
        )
    )


# -----------------------------------------------------------------------------
# Conversion Functions
# -----------------------------------------------------------------------------


def _convert(converter: Any, args: tuple[Any, ...]) -> Result:
    """Apply a converter to the first argument; None from it means absent."""
    if not args:
        return ABSENT
    converted = converter(args[0])
    if converted is None:
        return ABSENT
    return Result.of(converted)


def _to_integer(*args: Any) -> Result:
    """32-bit integer conversion of a numeric first argument."""
    return _convert(to_int32, args)


def _to_double(*args: Any) -> Result:
    """Float conversion of a numeric first argument."""
    return _convert(to_double, args)


def _to_long(*args: Any) -> Result:
    """64-bit integer conversion of a numeric first argument."""
    return _convert(to_int64, args)


def _register_conversion_functions(registry: FunctionRegistry) -> None:
    registry.register(
        FunctionDefinition(
            name="toInteger",
            description="Converts a numeric first argument to a 32-bit integer",
            category=FunctionCategory.CONVERSION,
            parameters=(FunctionParameter("value", "number", "The number"),),
            return_type="integer",
            implementation=_to_integer,
            examples=('"count": "=toInteger"',),
        )
    )

    registry.register(
        FunctionDefinition(
            name="toDouble",
            description="Converts a numeric first argument to a double",
            category=FunctionCategory.CONVERSION,
            parameters=(FunctionParameter("value", "number", "The number"),),
            return_type="number",
            implementation=_to_double,
            examples=('"ratio": "=toDouble"',),
        )
    )

    registry.register(
        FunctionDefinition(
            name="toLong",
            description="Converts a numeric first argument to a 64-bit integer",
            category=FunctionCategory.CONVERSION,
            parameters=(FunctionParameter("value", "number", "The number"),),
            return_type="integer",
            implementation=_to_long,
            examples=('"timestamp": "=toLong"',),
        )
    )
