"""Policy expression engine and the access policy table."""

from typing import Any, Callable, Mapping

from .ast import Node
from .evaluator import Evaluator
from .exceptions import PolicyError, PolicyEvaluationError, PolicySyntaxError
from .lexer import Lexer
from .parser import Parser
from .policies import (
    DELETE,
    INSERT,
    OPERATIONS,
    POLICIES,
    SELECT,
    UPDATE,
    compile_policy,
    get_policy,
)


def parse_policy(expression: str) -> Node:
    """Parse a policy expression string into a syntax tree."""
    return Parser(Lexer(expression)).parse()


async def evaluate_policy(
    node: Node,
    context: dict[str, Any],
    functions: Mapping[str, Callable[..., Any]] | None = None,
) -> Any:
    """Evaluate a parsed expression against a context."""
    return await Evaluator(context, functions).evaluate(node)


__all__ = [
    "DELETE",
    "INSERT",
    "OPERATIONS",
    "POLICIES",
    "SELECT",
    "UPDATE",
    "Node",
    "PolicyError",
    "PolicyEvaluationError",
    "PolicySyntaxError",
    "compile_policy",
    "evaluate_policy",
    "get_policy",
    "parse_policy",
]
