"""Types for the modify transform.

- ModifyMode: when a computed value may be written
- ModifyStep: one modify operation in a chain
- SpecError: a transform spec that cannot be run
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SpecError(ValueError):
    """A transform spec is structurally invalid."""
    pass


class ModifyMode(Enum):
    """Write policy for a modify operation.

    OVERWRITE: Always write a present result
    DEFAULT: Write only when the key is missing or null
    DEFINE: Write only when the key is missing
    """

    OVERWRITE = "overwrite"
    DEFAULT = "default"
    DEFINE = "define"

    @classmethod
    def parse(cls, name: str) -> "ModifyMode":
        """Accept `overwrite` as well as the `modify-overwrite` operation name."""
        normalized = str(name).strip().lower()
        if normalized.startswith("modify-"):
            normalized = normalized[len("modify-"):]
        if normalized.endswith("-beta"):
            normalized = normalized[: -len("-beta")]
        try:
            return cls(normalized)
        except ValueError:
            raise SpecError(f"Unknown modify operation: {name}") from None


@dataclass
class ModifyStep:
    """A single modify operation.

    Attributes:
        mode: Write policy
        spec: Spec tree mapping keys to function expressions, literals,
            fallback lists or nested specs
    """

    mode: ModifyMode
    spec: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any], default_mode: ModifyMode) -> "ModifyStep":
        """Create a step from a YAML/JSON dict.

        A dict with both `operation` and `spec` keys is a step. Any other
        dict is itself the spec, run with default_mode, so a document key
        named `spec` can still be targeted by a bare spec.
        """
        if not isinstance(data, dict):
            raise SpecError(f"Modify step must be a mapping, got {type(data).__name__}")

        if "operation" not in data or "spec" not in data:
            return cls(mode=default_mode, spec=data)

        spec = data["spec"]
        if not isinstance(spec, dict):
            raise SpecError(f"Modify spec must be a mapping, got {type(spec).__name__}")

        return cls(mode=ModifyMode.parse(data["operation"]), spec=spec)
