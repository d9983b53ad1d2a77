"""Function registry for transmute function expressions.

Functions are called from transform specs (e.g., `"num": "=abs"`,
`"name": "=concat(@(1,first), ' ', @(1,last))"`). Each function is
registered with metadata for documentation and the CLI listing.

A registry is populated once and then frozen; after freeze() it is a
read-only mapping that any number of threads may look up concurrently.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping

from transmute.functions.result import Result

# Function signature: (*args) -> Result. Must not raise for bad input.
Function = Callable[..., Result]


class RegistryFrozenError(RuntimeError):
    """Raised when registering into a registry that has been frozen."""
    pass


class FunctionCategory(Enum):
    """Categories for organizing functions in documentation."""

    EXISTENCE = "existence"
    STRING = "string"
    MATH = "math"
    CONVERSION = "conversion"


@dataclass(frozen=True)
class FunctionParameter:
    """Definition of a function parameter.

    Attributes:
        name: Parameter name
        type: Expected type ("string", "number", "any", etc.)
        description: Human-readable description
        variadic: If True, this parameter accepts multiple values
    """

    name: str
    type: str
    description: str
    variadic: bool = False


@dataclass(frozen=True)
class FunctionDefinition:
    """Complete definition of a transform function.

    Attributes:
        name: Function name as used in `=name(...)` expressions
        description: Human-readable description
        category: Category for documentation organization
        parameters: Parameter definitions
        return_type: Type of the present value
        implementation: The callable, returning a Result
        examples: Example spec values using this function
    """

    name: str
    description: str
    category: FunctionCategory
    parameters: tuple[FunctionParameter, ...]
    return_type: str
    implementation: Function
    examples: tuple[str, ...] = field(default_factory=tuple)

    def apply(self, *args: Any) -> Result:
        """Invoke the function with already-resolved argument values."""
        return self.implementation(*args)

    def to_dict(self) -> dict[str, Any]:
        """Export for the documentation listing."""
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "parameters": [
                {
                    "name": p.name,
                    "type": p.type,
                    "description": p.description,
                    "variadic": p.variadic,
                }
                for p in self.parameters
            ],
            "returnType": self.return_type,
            "examples": list(self.examples),
        }


class FunctionRegistry:
    """Registry of named transform functions.

    Example:
        registry = FunctionRegistry()
        registry.register(FunctionDefinition(name="abs", ...))
        registry.freeze()

        func = registry.lookup("abs")
        result = func.apply(-1.0)  # Result.of(1.0)
    """

    def __init__(self) -> None:
        self._functions: dict[str, FunctionDefinition] = {}
        self._view: Mapping[str, FunctionDefinition] = MappingProxyType(self._functions)
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, func_def: FunctionDefinition) -> None:
        """Register a function definition.

        Args:
            func_def: Complete function definition with implementation

        Raises:
            RegistryFrozenError: If freeze() has already been called
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '{func_def.name}': registry is frozen"
            )
        self._functions[func_def.name] = func_def

    def freeze(self) -> "FunctionRegistry":
        """Make the registry read-only. Returns self for chaining."""
        self._frozen = True
        return self

    def lookup(self, name: str) -> FunctionDefinition | None:
        """Resolve a function by exact, case-sensitive name."""
        return self._view.get(name)

    def get(self, name: str) -> FunctionDefinition:
        """Get a function definition by name.

        Raises:
            ValueError: If function is not registered
        """
        func_def = self._view.get(name)
        if func_def is None:
            raise ValueError(f"Unknown function: {name}")
        return func_def

    def is_registered(self, name: str) -> bool:
        return name in self._view

    def list_all(self) -> list[FunctionDefinition]:
        return list(self._view.values())

    def list_by_category(self, category: FunctionCategory) -> list[FunctionDefinition]:
        return [f for f in self._view.values() if f.category == category]

    def export_documentation(self) -> dict[str, Any]:
        """Export the full registry, organized by category."""
        by_category: dict[str, list[str]] = {}
        for func_def in self._view.values():
            by_category.setdefault(func_def.category.value, []).append(func_def.name)

        return {
            "functions": {name: f.to_dict() for name, f in self._view.items()},
            "byCategory": by_category,
        }

    def __contains__(self, name: object) -> bool:
        return name in self._view

    def __len__(self) -> int:
        return len(self._view)
