"""Textual representation of document values."""

import json
from typing import Any


def to_text(value: Any) -> str:
    """Return the string form of a document value.

    None renders as "null" and booleans as "true"/"false", matching how the
    value reads in the JSON document. Lists and dicts render as compact JSON.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)
