"""Transform functions callable from `=name(...)` spec values.

This package provides:
- Result: present/absent outcome of a function call
- FunctionRegistry: name -> FunctionDefinition lookup
- Built-in functions and the shared default registry
"""

from transmute.functions.builtins import default_registry, register_all_builtins
from transmute.functions.registry import (
    Function,
    FunctionCategory,
    FunctionDefinition,
    FunctionParameter,
    FunctionRegistry,
    RegistryFrozenError,
)
from transmute.functions.result import ABSENT, Result

__all__ = [
    # Result
    "ABSENT",
    "Result",
    # Registry
    "Function",
    "FunctionCategory",
    "FunctionDefinition",
    "FunctionParameter",
    "FunctionRegistry",
    "RegistryFrozenError",
    # Builtins
    "default_registry",
    "register_all_builtins",
]
