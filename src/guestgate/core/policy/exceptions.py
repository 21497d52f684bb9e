"""Exceptions for policy expression parsing and evaluation."""


class PolicyError(Exception):
    """Base class for all policy expression errors."""


class PolicySyntaxError(PolicyError):
    """Raised when a policy expression cannot be parsed."""

    def __init__(self, message: str, position: int | None = None):
        self.position = position
        super().__init__(f"{message} at position {position}" if position is not None else message)


class PolicyEvaluationError(PolicyError):
    """Raised when a policy expression fails while being evaluated."""
