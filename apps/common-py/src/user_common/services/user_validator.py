"""Field rules for user payloads."""

import re
from typing import NamedTuple

from user_common.models.user import User, UserPayload

EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50


class ValidationResult(NamedTuple):
    """Outcome of validating a user candidate."""

    is_valid: bool
    error_message: str | None = None


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _name_length(name: str) -> int:
    # Measured in UTF-16 code units, so characters outside the BMP count twice.
    return len(name.encode("utf-16-le", errors="surrogatepass")) // 2


def validate_user(candidate: UserPayload | User) -> ValidationResult:
    """Check a candidate user against the field rules.

    Rules are checked in order and the first failure wins.

    Args:
        candidate: Payload or user to check

    Returns:
        ValidationResult with ``is_valid`` and, on failure, the error message
    """
    if _is_blank(candidate.name):
        return ValidationResult(False, "Name is required.")
    if not NAME_MIN_LENGTH <= _name_length(candidate.name) <= NAME_MAX_LENGTH:
        return ValidationResult(False, f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters.")
    if _is_blank(candidate.email):
        return ValidationResult(False, "Email is required.")
    if not EMAIL_PATTERN.fullmatch(candidate.email):
        return ValidationResult(False, "Email is not valid.")
    return ValidationResult(True)
