"""Present/absent result returned by every transform function.

A present result carries a value to write, and that value may be None
(write an explicit null). An absent result means nothing is written and
the destination key keeps whatever it held before.
"""

from dataclasses import dataclass
from typing import Any

_MISSING = object()


@dataclass(frozen=True)
class Result:
    """Outcome of a function call.

    Use Result.of(value) for a present value and Result.empty() (or the
    shared ABSENT constant) for no value at all.
    """

    _value: Any = _MISSING

    @classmethod
    def of(cls, value: Any) -> "Result":
        return cls(value)

    @classmethod
    def empty(cls) -> "Result":
        return ABSENT

    @property
    def is_present(self) -> bool:
        return self._value is not _MISSING

    @property
    def is_absent(self) -> bool:
        return self._value is _MISSING

    @property
    def value(self) -> Any:
        """The carried value.

        Raises:
            ValueError: If the result is absent
        """
        if self._value is _MISSING:
            raise ValueError("Result is absent and carries no value")
        return self._value

    def get_or(self, default: Any = None) -> Any:
        """Return the value if present, otherwise default."""
        if self._value is _MISSING:
            return default
        return self._value

    def __repr__(self) -> str:
        if self._value is _MISSING:
            return "Result.empty()"
        return f"Result.of({self._value!r})"


ABSENT = Result()
