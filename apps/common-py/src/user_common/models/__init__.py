"""Common models package."""

from user_common.models.user import User, UserPayload

__all__ = [
    "User",
    "UserPayload",
]
