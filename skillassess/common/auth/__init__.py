"""
Authentication and authorization helpers.

The identity provider itself lives outside this service; here tokens are
only verified and mapped to an ``Identity``.
"""

from .jwt import Identity, JWTConfig, UserRole, create_access_token, decode_token
from .dependencies import get_current_identity, get_jwt_config, require_roles

__all__ = [
    'Identity',
    'JWTConfig',
    'UserRole',
    'create_access_token',
    'decode_token',
    'get_current_identity',
    'get_jwt_config',
    'require_roles',
]
