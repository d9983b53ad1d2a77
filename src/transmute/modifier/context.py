"""Match context for a modify walk and path-argument resolution."""

import re
from dataclasses import dataclass, field
from typing import Any

from transmute.functions.result import ABSENT, Result
from transmute.modifier.expressions import PathArg

_KEY_REF_RE = re.compile(r"^&(\d+)$")


@dataclass
class MatchContext:
    """Where the walk currently is in the document.

    Attributes:
        containers: Containers from the document root down to the one
            holding the current key
        keys: Keys walked; keys[-1] is the current key, keys[i] is the key
            of containers[i + 1] in containers[i] for earlier entries
    """

    containers: list[Any] = field(default_factory=list)
    keys: list[Any] = field(default_factory=list)

    def child(self, container: Any, key: Any) -> "MatchContext":
        """Context for `key` inside `container`, one level below this one."""
        return MatchContext(
            containers=self.containers + [container],
            keys=self.keys + [key],
        )

    @property
    def container(self) -> Any:
        return self.containers[-1]

    @property
    def key(self) -> Any:
        return self.keys[-1]

    def current(self) -> Result:
        """The value at the current key, absent if the key does not exist."""
        return _step(self.container, self.key)

    def key_at(self, level: int) -> Any:
        """Key `level` steps up; 0 is the current key."""
        index = len(self.keys) - 1 - level
        if index < 0:
            return None
        return self.keys[index]

    def resolve(self, path: PathArg) -> Result:
        """Resolve a path argument against the document.

        Level 0 starts at the current value, level 1 at the container
        holding it, level N at the container N-1 steps further up.
        """
        if path.level == 0:
            start = self.current()
        else:
            index = len(self.containers) - path.level
            if index < 0:
                return ABSENT
            start = Result.of(self.containers[index])

        if start.is_absent:
            return ABSENT

        node = start.value
        for segment in path.segments:
            key_ref = _KEY_REF_RE.match(segment)
            key: Any = self.key_at(int(key_ref.group(1))) if key_ref else segment
            if key is None:
                return ABSENT
            step = _step(node, key)
            if step.is_absent:
                return ABSENT
            node = step.value
        return Result.of(node)


def _step(node: Any, key: Any) -> Result:
    if isinstance(node, dict):
        key = str(key)
        if key in node:
            return Result.of(node[key])
        return ABSENT

    if isinstance(node, list):
        try:
            index = int(key)
        except (TypeError, ValueError):
            return ABSENT
        if 0 <= index < len(node):
            return Result.of(node[index])
        return ABSENT

    return ABSENT
