"""
FastAPI dependencies for dependency injection.
Provides user authentication via Supabase access tokens.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.schemas import AuthenticatedUser
from app.auth.service import SupabaseAuthService, get_auth_service
from app.core.exceptions import AuthenticationError, unauthorized

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


async def get_current_user(
        credentials: Annotated[
            Optional[HTTPAuthorizationCredentials],
            Depends(security)
        ],
        auth_service: SupabaseAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency to get the current authenticated user.

    Extracts the access token from the Authorization header and resolves it
    with the identity provider.

    Raises:
        HTTPException: If authentication fails
    """
    if not credentials:
        raise unauthorized()

    try:
        return await auth_service.get_user(credentials.credentials)
    except AuthenticationError as e:
        raise unauthorized(detail=e.message)


# Type alias for cleaner dependency injection
CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
