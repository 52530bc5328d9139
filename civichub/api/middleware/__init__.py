"""
Middleware - auth dekoratori i JWT funkcije.
"""

from .auth import jwt_required, admin_required
from .jwt_utils import (
    create_access_token,
    decode_token,
    extract_token_from_header,
    TokenType
)

__all__ = [
    # Auth dekoratori
    'jwt_required',
    'admin_required',
    # JWT funkcije
    'create_access_token',
    'decode_token',
    'extract_token_from_header',
    'TokenType',
]
