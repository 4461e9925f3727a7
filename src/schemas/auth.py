"""Authentication schemas for JWT tokens and the acting user."""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


AuthProvider = Literal["local", "google"]


class Actor(BaseModel):
    """Authenticated actor extracted from a verified JWT.

    Passed explicitly into every handler that needs to know who is
    calling. The order services only use it as an authorization predicate
    and as the owner reference on new orders.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    user_id: UUID = Field(description="Unique identifier for the user (from JWT sub claim)")
    email: str | None = Field(default=None, description="User's email address if available")
    is_admin: bool = Field(default=False, description="Whether the user has the admin flag")
    auth_provider: AuthProvider = Field(default="local", description="How the user signed in")


class TokenPayload(BaseModel):
    """JWT token payload structure.

    Represents the claims contained in a token issued at login.
    Used for validation and extraction of actor information.
    """

    model_config = ConfigDict(from_attributes=True)

    sub: str = Field(description="Subject - the user's UUID")
    email: str | None = Field(default=None, description="User's email address")
    admin: bool = Field(default=False, description="Admin flag")
    auth_provider: AuthProvider = Field(default="local", description="Authentication provider")
    exp: int = Field(description="Expiration timestamp (Unix epoch)")
    iat: int = Field(description="Issued at timestamp (Unix epoch)")

    def to_actor(self) -> Actor:
        """Convert token payload to an Actor.

        Returns:
            Actor: Actor derived from token claims.
        """
        return Actor(
            user_id=UUID(self.sub),
            email=self.email,
            is_admin=self.admin,
            auth_provider=self.auth_provider,
        )
