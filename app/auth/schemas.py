"""
Pydantic schemas for auth module.
"""

from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """User resolved from a Supabase access token."""

    id: str = Field(..., description="Supabase user ID")
    email: str | None = Field(None, description="User email")
    username: str = Field(..., description="Display name")
    access_token: str = Field(..., description="Token forwarded to the record store", repr=False)


def display_name(data: dict) -> str:
    """username metadata, then the email local part, then a generic name."""
    metadata = data.get("user_metadata") or {}
    if metadata.get("username"):
        return metadata["username"]
    email = data.get("email")
    if email:
        return email.split("@")[0]
    return "User"
