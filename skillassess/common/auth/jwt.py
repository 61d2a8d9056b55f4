"""
JWT Authentication Module

Token creation and decoding for the identity collaborator. Tokens carry
the caller's ``userId`` and ``role`` claims.
"""

import datetime
import enum
from dataclasses import dataclass
from typing import Optional

# Using PyJWT for JWT operations
import jwt

from skillassess.common.exceptions import AuthenticationError


class UserRole(enum.Enum):
    """Roles the assessment endpoints distinguish."""

    ADMIN = "admin"
    COMPANY = "company"
    STUDENT = "student"


@dataclass(frozen=True)
class Identity:
    """Who is calling and in which role."""
    user_id: str
    role: str


@dataclass
class JWTConfig:
    """
    Configuration for JWT tokens.

    Attributes:
        secret_key: Secret key used for signing tokens
        algorithm: Algorithm used for signing tokens
        access_token_expires: Access token expiration time in minutes
    """
    secret_key: str
    algorithm: str = "HS256"
    access_token_expires: int = 60  # minutes


def create_access_token(
    config: JWTConfig,
    user_id: str,
    role: str,
    expires_minutes: Optional[int] = None
) -> str:
    """
    Create a signed access token for ``user_id`` acting as ``role``.

    Args:
        config: Signing configuration
        user_id: Subject of the token
        role: Role claim
        expires_minutes: Override for the configured lifetime

    Returns:
        Encoded token string
    """
    now = datetime.datetime.now(datetime.timezone.utc)
    lifetime = config.access_token_expires if expires_minutes is None else expires_minutes
    payload = {
        "userId": user_id,
        "role": role,
        "iat": now,
        "exp": now + datetime.timedelta(minutes=lifetime),
    }
    return jwt.encode(payload, config.secret_key, algorithm=config.algorithm)


def decode_token(config: JWTConfig, token: str) -> Identity:
    """
    Decode and verify an access token.

    Raises:
        AuthenticationError: If the token is expired, malformed or lacks claims
    """
    try:
        payload = jwt.decode(token, config.secret_key, algorithms=[config.algorithm])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")

    user_id = payload.get("userId")
    role = payload.get("role")
    if not user_id or not role:
        raise AuthenticationError("Token is missing identity claims")
    return Identity(user_id=str(user_id), role=str(role))
