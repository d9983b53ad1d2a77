"""Load modify specs from YAML or JSON files."""

from pathlib import Path
from typing import Any

import yaml

from transmute.modifier.types import ModifyMode, ModifyStep, SpecError


def parse_steps(data: Any, default_mode: ModifyMode = ModifyMode.OVERWRITE) -> list[ModifyStep]:
    """Build modify steps from loaded spec data.

    Accepts a list of `{operation, spec}` steps, a single step, or a bare
    spec mapping (run with default_mode).
    """
    if isinstance(data, list):
        return [ModifyStep.from_dict(item, default_mode) for item in data]
    if isinstance(data, dict):
        return [ModifyStep.from_dict(data, default_mode)]
    raise SpecError(f"Spec must be a mapping or a list of steps, got {type(data).__name__}")


def load_steps(path: Path, default_mode: ModifyMode = ModifyMode.OVERWRITE) -> list[ModifyStep]:
    """Load modify steps from a spec file.

    JSON is read through the YAML loader, so either format works.

    Raises:
        SpecError: If the file cannot be read or parsed
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise SpecError(f"Cannot read spec file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise SpecError(f"Invalid spec file {path}: {e}") from e

    if data is None:
        raise SpecError(f"Spec file is empty: {path}")
    return parse_steps(data, default_mode)
