"""Unit tests for the policy expression evaluator."""

import pytest

from guestgate.core.policy import evaluate_policy, parse_policy
from guestgate.core.policy.exceptions import PolicyEvaluationError


async def evaluate(expression, context=None, functions=None):
    return await evaluate_policy(parse_policy(expression), context or {}, functions)


@pytest.mark.asyncio
async def test_evaluator_literals():
    assert await evaluate("true") is True
    assert await evaluate("false") is False
    assert await evaluate("42") == 42
    assert await evaluate("'hello'") == "hello"
    assert await evaluate("null") is None


@pytest.mark.asyncio
async def test_evaluator_dotted_variables():
    context = {"auth": {"uid": "u1"}, "record": {"user_id": "u1"}}

    assert await evaluate("auth.uid", context) == "u1"
    assert await evaluate("record.user_id == auth.uid", context) is True
    assert await evaluate("record.missing", context) is None
    assert await evaluate("missing.deeper.path", context) is None


@pytest.mark.asyncio
async def test_evaluator_comparisons():
    context = {"n": 5}

    assert await evaluate("n == 5", context) is True
    assert await evaluate("n != 5", context) is False
    assert await evaluate("n > 4", context) is True
    assert await evaluate("n >= 6", context) is False
    assert await evaluate("n < 10", context) is True
    assert await evaluate("n <= 5", context) is True


@pytest.mark.asyncio
async def test_incomparable_values_never_match():
    assert await evaluate("missing < 5", {}) is False
    assert await evaluate("'a' > 1", {}) is False


@pytest.mark.asyncio
async def test_in_operator():
    context = {"role": "staff", "changes": ["checked_in"]}

    assert await evaluate("role in ['admin', 'staff']", context) is True
    assert await evaluate("role in ['admin']", context) is False
    assert await evaluate("'checked_in' in changes", context) is True
    assert await evaluate("role in missing", context) is False
    assert await evaluate("role in 5", context) is False


@pytest.mark.asyncio
async def test_logic_short_circuits():
    calls = []

    def track(value):
        calls.append(value)
        return value

    functions = {"track": track}

    assert await evaluate("false and track(true)", functions=functions) is False
    assert await evaluate("true or track(false)", functions=functions) is True
    assert calls == []

    assert await evaluate("true and track(true)", functions=functions) is True
    assert calls == [True]


@pytest.mark.asyncio
async def test_not():
    assert await evaluate("not false") is True
    assert await evaluate("not null") is True
    assert await evaluate("not (1 == 1)") is False


@pytest.mark.asyncio
async def test_sync_and_async_functions():
    async def has_role(uid, role):
        return uid == "u1" and role == "admin"

    functions = {"has_role": has_role, "upper": lambda s: s.upper()}
    context = {"auth": {"uid": "u1"}}

    assert await evaluate("has_role(auth.uid, 'admin')", context, functions) is True
    assert await evaluate("has_role(auth.uid, 'staff')", context, functions) is False
    assert await evaluate("upper('x') == 'X'", context, functions) is True


@pytest.mark.asyncio
async def test_unknown_function_raises():
    with pytest.raises(PolicyEvaluationError, match="Unknown function"):
        await evaluate("nope()")


@pytest.mark.asyncio
async def test_wrong_arity_raises():
    with pytest.raises(PolicyEvaluationError, match="Bad call"):
        await evaluate("f(1, 2)", functions={"f": lambda x: x})
