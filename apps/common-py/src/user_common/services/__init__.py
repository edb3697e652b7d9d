"""Common services package."""

from user_common.services.user_store import InMemoryUserStore, UserStore, seed_users
from user_common.services.user_validator import ValidationResult, validate_user

__all__ = [
    "InMemoryUserStore",
    "UserStore",
    "ValidationResult",
    "seed_users",
    "validate_user",
]
