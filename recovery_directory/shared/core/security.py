"""
Security utilities for verifying Supabase-issued access tokens.
Tokens are HS256 JWTs signed with the project's JWT secret.
"""

import logging
from functools import lru_cache
from typing import Any, Dict

from jose import ExpiredSignatureError, JWTError, jwt

from ..config.settings import get_settings
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class SecurityManager:
    """
    Verifies bearer tokens presented to the API.
    """

    def __init__(self):
        self.settings = get_settings()
        self.algorithm = self.settings.JWT_ALGORITHM
        self.secret_key = self.settings.SUPABASE_JWT_SECRET
        self.audience = self.settings.JWT_AUDIENCE

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode an access token.

        Returns:
            dict: Decoded token payload; "sub" is the auth user id

        Raises:
            AuthenticationError: If the token is invalid, expired, or has no subject
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
            )
        except ExpiredSignatureError:
            logger.info("Rejected expired access token")
            raise AuthenticationError("Token expired")
        except JWTError as e:
            logger.warning(f"JWT validation failed: {e}")
            raise AuthenticationError("Could not validate credentials")

        if not payload.get("sub"):
            logger.warning("Token missing subject (user_id)")
            raise AuthenticationError("Could not validate credentials")

        return payload


@lru_cache()
def get_security_manager() -> SecurityManager:
    """
    Get cached security manager instance.

    Returns:
        SecurityManager: Singleton security manager
    """
    return SecurityManager()
