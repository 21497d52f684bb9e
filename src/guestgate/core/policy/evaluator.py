"""Evaluator for policy expressions."""

import inspect
from typing import Any, Callable, Mapping

from .ast import BinaryOp, FunctionCall, ListLiteral, Literal, Node, UnaryOp, Variable
from .exceptions import PolicyEvaluationError


class Evaluator:
    """Evaluates a syntax tree against a context.

    Functions are supplied by the caller, so the same expression can call
    request-scoped lookups such as ``has_role``. A bound function may be
    sync or async.
    """

    def __init__(
        self,
        context: dict[str, Any],
        functions: Mapping[str, Callable[..., Any]] | None = None,
    ):
        self.context = context
        self.functions = dict(functions or {})

    async def evaluate(self, node: Node) -> Any:
        if isinstance(node, Literal):
            return node.value

        if isinstance(node, Variable):
            return self._resolve_variable(node.name)

        if isinstance(node, BinaryOp):
            return await self._evaluate_binary(node)

        if isinstance(node, UnaryOp):
            if node.operator == "not":
                return not bool(await self.evaluate(node.operand))
            raise PolicyEvaluationError(f"Unknown unary operator: {node.operator}")

        if isinstance(node, FunctionCall):
            return await self._evaluate_function(node)

        if isinstance(node, ListLiteral):
            return [await self.evaluate(item) for item in node.items]

        raise PolicyEvaluationError(f"Unknown node type: {type(node).__name__}")

    def _resolve_variable(self, name: str) -> Any:
        """Walk a dotted path through dicts and attributes; missing parts give None."""
        value: Any = self.context
        for part in name.split("."):
            if value is None:
                return None
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = getattr(value, part, None)
        return value

    async def _evaluate_binary(self, node: BinaryOp) -> Any:
        # and/or short-circuit, so lookups on the right are skipped when possible
        if node.operator == "and":
            if not bool(await self.evaluate(node.left)):
                return False
            return bool(await self.evaluate(node.right))

        if node.operator == "or":
            if bool(await self.evaluate(node.left)):
                return True
            return bool(await self.evaluate(node.right))

        left = await self.evaluate(node.left)
        right = await self.evaluate(node.right)
        op = node.operator

        if op == "==":
            return left == right
        if op == "!=":
            return left != right

        if op == "in":
            if right is None:
                return False
            try:
                return left in right
            except TypeError:
                return False

        try:
            if op == "<":
                return left < right
            if op == ">":
                return left > right
            if op == "<=":
                return left <= right
            if op == ">=":
                return left >= right
        except TypeError:
            # Incomparable values (e.g. None < 5) never match
            return False

        raise PolicyEvaluationError(f"Unknown binary operator: {op}")

    async def _evaluate_function(self, node: FunctionCall) -> Any:
        function = self.functions.get(node.name)
        if function is None:
            raise PolicyEvaluationError(f"Unknown function: {node.name}")

        args = [await self.evaluate(arg) for arg in node.arguments]
        try:
            result = function(*args)
        except TypeError as e:
            raise PolicyEvaluationError(f"Bad call to {node.name}(): {e}") from e

        if inspect.isawaitable(result):
            result = await result
        return result
