"""
JWT utilities - pomocne funkcije za rad sa JWT tokenima.

Ovaj modul pruza funkcije za kreiranje i validaciju JWT access tokena
za gradjane i administratore.

SECURITY NOTES:
- Svaki token ima 'jti' (JWT ID) claim
- 'sub' je string (PyJWT zahteva string subject)
- is_admin u tokenu je samo hint, admin_required uvek proverava bazu
"""

import jwt
import uuid
from datetime import datetime, timedelta
from typing import Optional, Tuple
from flask import current_app


class TokenType:
    """Tipovi tokena koje koristimo."""
    ACCESS = 'access'


def _generate_jti() -> str:
    return str(uuid.uuid4())


def create_access_token(user_id: int, is_admin: bool = False,
                        expires_delta: Optional[timedelta] = None) -> str:
    """
    Kreira access token za korisnika.

    Args:
        user_id: ID korisnika
        is_admin: Da li je korisnik administrator
        expires_delta: Trajanje tokena (default JWT_ACCESS_TOKEN_EXPIRES)

    Returns:
        Enkodovan JWT token string
    """
    expires_delta = expires_delta or current_app.config['JWT_ACCESS_TOKEN_EXPIRES']
    now = datetime.utcnow()

    payload = {
        'sub': str(user_id),       # Subject - ID korisnika
        'jti': _generate_jti(),    # JWT ID
        'type': TokenType.ACCESS,  # Tip tokena
        'is_admin': bool(is_admin),
        'exp': now + expires_delta,
        'iat': now,
    }

    return jwt.encode(
        payload,
        current_app.config['JWT_SECRET_KEY'],
        algorithm='HS256'
    )


def decode_token(token: str) -> Tuple[Optional[dict], Optional[str]]:
    """
    Dekodira i validira JWT token.

    Returns:
        Tuple (payload, error):
        - Ako je uspesno: (payload dict, None)
        - Ako je greska: (None, error message)
    """
    try:
        payload = jwt.decode(
            token,
            current_app.config['JWT_SECRET_KEY'],
            algorithms=['HS256']
        )
        return payload, None

    except jwt.ExpiredSignatureError:
        return None, 'Token je istekao'

    except jwt.InvalidTokenError as e:
        return None, f'Neispravan token: {str(e)}'


def extract_token_from_header(auth_header: str) -> Optional[str]:
    """
    Izvlaci token iz Authorization header-a.

    Ocekuje format: "Bearer <token>"
    """
    if not auth_header:
        return None

    parts = auth_header.split()

    if len(parts) != 2:
        return None

    if parts[0].lower() != 'bearer':
        return None

    return parts[1]
