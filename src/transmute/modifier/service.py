"""Modify transform driver.

Walks a modify spec over a JSON document, evaluates function expressions
at each matched key and writes present results according to the mode.
An absent result leaves the key exactly as it was.
"""

import copy
import logging
from typing import Any

from transmute.functions.builtins import default_registry
from transmute.functions.registry import FunctionRegistry
from transmute.functions.result import ABSENT, Result
from transmute.modifier.context import MatchContext
from transmute.modifier.expressions import (
    FunctionExpression,
    LiteralArg,
    parse_function_expression,
)
from transmute.modifier.types import ModifyMode, ModifyStep, SpecError

logger = logging.getLogger(__name__)

WILDCARD = "*"


class Modifier:
    """Applies a modify spec to documents.

    A Modifier holds no per-document state, so one instance can serve
    concurrent transforms.

    Usage:
        modifier = Modifier(ModifyMode.OVERWRITE)
        output = modifier.transform({"num": -1.0}, {"num": "=abs"})
        # {"num": 1.0}
    """

    def __init__(
        self,
        mode: ModifyMode = ModifyMode.OVERWRITE,
        registry: FunctionRegistry | None = None,
    ):
        self.mode = mode
        self.registry = registry if registry is not None else default_registry()

    def transform(self, document: Any, spec: dict[str, Any]) -> Any:
        """Return a modified copy of document. The input is not mutated."""
        if not isinstance(spec, dict):
            raise SpecError(f"Modify spec must be a mapping, got {type(spec).__name__}")

        output = copy.deepcopy(document)
        if isinstance(output, (dict, list)):
            self._apply(spec, output, MatchContext())
        return output

    # -------------------------------------------------------------------------
    # Tree walk
    # -------------------------------------------------------------------------

    def _apply(self, spec: dict[str, Any], node: dict | list, context: MatchContext) -> None:
        for spec_key, spec_value in spec.items():
            for key in self._match_keys(spec_key, node):
                child_context = context.child(node, key)
                if isinstance(spec_value, dict):
                    self._descend(spec_value, node, key, child_context)
                else:
                    self._write(spec_value, node, key, child_context)

    def _match_keys(self, spec_key: str, node: dict | list) -> list[Any]:
        if isinstance(node, dict):
            if spec_key == WILDCARD:
                return list(node.keys())
            return [str(spec_key)]

        if spec_key == WILDCARD:
            return list(range(len(node)))
        try:
            index = int(spec_key)
        except ValueError:
            return []
        if 0 <= index < len(node):
            return [index]
        return []

    def _descend(
        self,
        spec: dict[str, Any],
        node: dict | list,
        key: Any,
        context: MatchContext,
    ) -> None:
        existing = context.current()
        if existing.is_present:
            if isinstance(existing.value, (dict, list)):
                self._apply(spec, existing.value, context)
            return

        # Missing intermediate mapping: build it, keep it only if written to
        if isinstance(node, dict):
            created: dict[str, Any] = {}
            self._apply(spec, created, context)
            if created:
                node[key] = created

    def _write(self, spec_value: Any, node: dict | list, key: Any, context: MatchContext) -> None:
        if not self._writable(context):
            return

        result = self._evaluate(spec_value, context)
        if result.is_absent:
            logger.debug("No value for key %r from %r, leaving unchanged", key, spec_value)
            return
        node[key] = result.value

    def _writable(self, context: MatchContext) -> bool:
        if self.mode == ModifyMode.OVERWRITE:
            return True
        existing = context.current()
        if self.mode == ModifyMode.DEFINE:
            return existing.is_absent
        return existing.is_absent or existing.value is None

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def _evaluate(self, spec_value: Any, context: MatchContext) -> Result:
        """Evaluate a right-hand side: fallback list, function or literal."""
        if isinstance(spec_value, list):
            for candidate in spec_value:
                result = self._evaluate(candidate, context)
                if result.is_present:
                    return result
            return ABSENT

        expression = parse_function_expression(spec_value)
        if expression is None:
            return Result.of(copy.deepcopy(spec_value))
        return self.call(expression, context)

    def call(self, expression: FunctionExpression, context: MatchContext) -> Result:
        """Resolve arguments and invoke the named function."""
        func_def = self.registry.lookup(expression.name)
        if func_def is None:
            logger.warning(
                "Function '%s' is not registered, skipping", expression.name
            )
            return ABSENT

        return func_def.apply(*self._resolve_args(expression, context))

    def _resolve_args(self, expression: FunctionExpression, context: MatchContext) -> list[Any]:
        if expression.shorthand:
            current = context.current()
            return [current.value] if current.is_present else []

        args: list[Any] = []
        for token in expression.args:
            if isinstance(token, LiteralArg):
                args.append(token.value)
                continue
            resolved = context.resolve(token)
            if resolved.is_present:
                args.append(resolved.value)
        return args


def run_steps(
    steps: list[ModifyStep],
    document: Any,
    registry: FunctionRegistry | None = None,
) -> Any:
    """Apply modify steps in order, each to the previous step's output."""
    for step in steps:
        logger.debug("Running modify-%s step", step.mode.value)
        document = Modifier(step.mode, registry).transform(document, step.spec)
    return document
