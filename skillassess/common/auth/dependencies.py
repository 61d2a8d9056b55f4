"""
Authentication dependencies for the assessment endpoints.

This module provides FastAPI dependencies that resolve the caller's
identity from a bearer token and gate endpoints by role.
"""

from typing import Callable, Optional

from fastapi import Depends, Header, Request

from skillassess.common.exceptions import AuthenticationError, AuthorizationError
from skillassess.common.logger import app_logger
from .jwt import Identity, JWTConfig, decode_token

logger = app_logger.getChild("auth")


def get_jwt_config(request: Request) -> JWTConfig:
    """Signing configuration from the settings the application was created with."""
    settings = request.app.state.settings
    return JWTConfig(
        secret_key=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        access_token_expires=settings.JWT_ACCESS_TOKEN_EXPIRES,
    )


async def get_current_identity(
    authorization: Optional[str] = Header(None),
    config: JWTConfig = Depends(get_jwt_config),
) -> Identity:
    """
    Resolve the caller from the ``Authorization: Bearer <token>`` header.

    Raises:
        AuthenticationError: If the header is missing or the token invalid
    """
    if not authorization:
        raise AuthenticationError("Missing authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError("Invalid authorization header format")

    return decode_token(config, parts[1])


def require_roles(*roles: str) -> Callable:
    """
    Build a dependency that admits only callers holding one of ``roles``.

    Usage:
        identity: Identity = Depends(require_roles("admin", "company"))
    """
    async def checker(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role not in roles:
            logger.info(f"Rejected role '{identity.role}' for user {identity.user_id}")
            raise AuthorizationError(
                f"Only {' or '.join(roles)} users may perform this action",
                action=",".join(roles)
            )
        return identity

    return checker
