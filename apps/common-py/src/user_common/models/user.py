"""User models for the User API."""

from typing import ClassVar

from pydantic import BaseModel, Field


class User(BaseModel):
    """User entity model."""

    id: int = Field(..., gt=0, description="Unique identifier assigned by the store")
    name: str = Field(..., description="Full name of the user")
    email: str = Field(..., description="Email address of the user")

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {
            "example": {
                "id": 1,
                "name": "Alice",
                "email": "alice@example.com",
            }
        }


class UserPayload(BaseModel):
    """Inbound body for creating or updating a user.

    Both fields default to an empty string so that a missing field is
    reported by the validator rather than rejected by the schema.
    """

    name: str | None = Field("", description="Full name of the user")
    email: str | None = Field("", description="Email address of the user")

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {
            "example": {
                "name": "Dana",
                "email": "dana@example.com",
            }
        }
