"""Password strength rules applied at signup and on admin password resets."""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class PasswordValidationError:
    """A single failed password rule.

    Attributes:
        field: The field name (always 'password').
        message: Human-readable error message.
        code: Machine-readable error code.
    """

    field: str
    message: str
    code: str


class PasswordValidator:
    """Validates password strength.

    Default policy: at least 8 characters with a letter and a digit. Event
    staff sign up on phones at the venue, so the policy stays modest.
    """

    def __init__(
        self,
        min_length: int = 8,
        require_letter: bool = True,
        require_digit: bool = True,
    ) -> None:
        self.min_length = min_length
        self.require_letter = require_letter
        self.require_digit = require_digit

    def validate(self, password: str) -> list[PasswordValidationError]:
        """Validate a password against the policy.

        Returns:
            List of validation errors. Empty list if password is valid.
        """
        errors: list[PasswordValidationError] = []

        if len(password) < self.min_length:
            errors.append(
                PasswordValidationError(
                    field="password",
                    message=f"Password must be at least {self.min_length} characters",
                    code="password_too_short",
                )
            )

        if self.require_letter and not re.search(r"[^\W\d_]", password):
            errors.append(
                PasswordValidationError(
                    field="password",
                    message="Password must contain at least one letter",
                    code="password_no_letter",
                )
            )

        if self.require_digit and not re.search(r"\d", password):
            errors.append(
                PasswordValidationError(
                    field="password",
                    message="Password must contain at least one digit",
                    code="password_no_digit",
                )
            )

        return errors

    def is_valid(self, password: str) -> bool:
        return not self.validate(password)
