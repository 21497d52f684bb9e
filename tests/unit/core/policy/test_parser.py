"""Unit tests for the policy expression parser."""

import pytest

from guestgate.core.policy import parse_policy
from guestgate.core.policy.ast import (
    BinaryOp,
    FunctionCall,
    ListLiteral,
    Literal,
    UnaryOp,
    Variable,
)
from guestgate.core.policy.exceptions import PolicySyntaxError


def test_parse_literal_and_variable():
    assert parse_policy("true") == Literal(True)
    assert parse_policy("record.user_id") == Variable("record.user_id")


def test_parse_comparison():
    node = parse_policy("record.user_id == auth.uid")

    assert node == BinaryOp(Variable("record.user_id"), "==", Variable("auth.uid"))


def test_and_binds_tighter_than_or():
    node = parse_policy("a or b and c")

    assert isinstance(node, BinaryOp)
    assert node.operator == "or"
    assert node.left == Variable("a")
    assert node.right == BinaryOp(Variable("b"), "and", Variable("c"))


def test_parentheses_override_precedence():
    node = parse_policy("(a or b) and c")

    assert node.operator == "and"
    assert node.left == BinaryOp(Variable("a"), "or", Variable("b"))


def test_parse_not():
    assert parse_policy("not a") == UnaryOp("not", Variable("a"))


def test_parse_function_call():
    node = parse_policy("has_role(auth.uid, 'admin')")

    assert node == FunctionCall("has_role", [Variable("auth.uid"), Literal("admin")])


def test_parse_function_call_without_arguments():
    assert parse_policy("now()") == FunctionCall("now", [])


def test_parse_in_list():
    node = parse_policy("role_of(auth.uid) in ['admin', 'staff']")

    assert node.operator == "in"
    assert node.right == ListLiteral([Literal("admin"), Literal("staff")])


def test_parse_empty_list():
    node = parse_policy("x in []")
    assert node.right == ListLiteral([])


@pytest.mark.parametrize(
    "expression",
    ["a ==", "(a or b", "a b", "has_role(auth.uid,", "[1, 2", ""],
)
def test_parse_errors(expression):
    with pytest.raises(PolicySyntaxError):
        parse_policy(expression)
