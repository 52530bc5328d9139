"""
Auth schemas - Pydantic modeli za validaciju auth podataka.
"""

import re
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from .common import LocationSchema


USERNAME_PATTERN = re.compile(r'^[A-Za-z0-9_.-]+$')


# =============================================================================
# REQUEST SCHEMAS (ulazni podaci)
# =============================================================================

class RegisterRequest(BaseModel):
    """Schema za registraciju gradjanina."""
    username: str = Field(..., min_length=3, max_length=50, description="Korisnicko ime")
    password: str = Field(..., min_length=6, max_length=100, description="Lozinka")
    name: str = Field(..., min_length=1, max_length=100, description="Ime za prikaz")
    email: EmailStr = Field(..., description="Email adresa")

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        v = v.strip()
        if not USERNAME_PATTERN.match(v):
            raise ValueError('Username moze sadrzati samo slova, cifre, _ . i -')
        return v

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Ime ne sme biti prazno')
        return v


class LoginRequest(BaseModel):
    """Login sa username-om ili email-om."""
    username: str = Field(..., min_length=1, max_length=100, description="Username ili email")
    password: str = Field(..., min_length=1, max_length=100)


class UpdateLocationRequest(LocationSchema):
    """Poslednja poznata lokacija korisnika."""


# =============================================================================
# RESPONSE HELPERS
# =============================================================================

def user_response(user, token: Optional[str] = None) -> dict:
    data = {'user': user.to_dict()}
    if token:
        data['access_token'] = token
        data['token_type'] = 'Bearer'
    return data
