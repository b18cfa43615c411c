"""
Authentication service - Access token verification against Supabase Auth.
Sign-up, login and session cookies stay with Supabase; this service only
resolves a bearer token to a user.
"""

import logging

import httpx

from app.auth.schemas import AuthenticatedUser, display_name
from app.config import Settings, get_settings
from app.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class SupabaseAuthService:
    """Resolves Supabase access tokens to users."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    async def get_user(self, access_token: str) -> AuthenticatedUser:
        """
        Get the user owning an access token.

        Args:
            access_token: Supabase JWT from the Authorization header

        Returns:
            AuthenticatedUser with the token attached

        Raises:
            AuthenticationError: If the token is rejected or Supabase is unreachable
        """
        async with httpx.AsyncClient() as client:
            try:
                response = await client.get(
                    f"{self.settings.supabase_auth_url}/user",
                    headers={
                        "apikey": self.settings.supabase_anon_key,
                        "Authorization": f"Bearer {access_token}",
                    },
                )
            except httpx.RequestError as e:
                logger.error(f"[SupabaseAuth] Request error: {e}")
                raise AuthenticationError("Failed to connect to identity provider") from e

        if response.status_code != 200:
            logger.warning(f"[SupabaseAuth] Token rejected, status: {response.status_code}")
            raise AuthenticationError("Invalid or expired access token")

        data = response.json()
        return AuthenticatedUser(
            id=data["id"],
            email=data.get("email"),
            username=display_name(data),
            access_token=access_token,
        )


def get_auth_service() -> SupabaseAuthService:
    """Factory function for SupabaseAuthService."""
    return SupabaseAuthService()
