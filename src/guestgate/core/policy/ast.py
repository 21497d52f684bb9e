"""Syntax tree nodes for policy expressions."""

from dataclasses import dataclass
from typing import Any


@dataclass
class Node:
    """Base class for all nodes."""


@dataclass
class Literal(Node):
    """String, number, boolean or null."""

    value: Any


@dataclass
class ListLiteral(Node):
    """Bracketed list, e.g. ['admin', 'staff']."""

    items: list[Node]


@dataclass
class Variable(Node):
    """Dotted context lookup, e.g. auth.uid or record.user_id."""

    name: str


@dataclass
class BinaryOp(Node):
    left: Node
    operator: str
    right: Node


@dataclass
class UnaryOp(Node):
    operator: str
    operand: Node


@dataclass
class FunctionCall(Node):
    """Call of a function bound by the evaluator, e.g. has_role(auth.uid, 'admin')."""

    name: str
    arguments: list[Node]
