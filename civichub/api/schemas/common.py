"""
Zajednicke sheme i pomocne funkcije za validaciju.
"""

from typing import Optional
from flask import request
from pydantic import BaseModel, Field, ValidationError


class LocationSchema(BaseModel):
    lat: float = Field(..., ge=-90, le=90, description="Geografska sirina")
    lng: float = Field(..., ge=-180, le=180, description="Geografska duzina")
    address: Optional[str] = Field(None, max_length=300)


def validation_details(error: ValidationError) -> list:
    """Pydantic greske u JSON-serializabilnom obliku."""
    return [
        {
            'loc': [str(part) for part in err.get('loc', ())],
            'msg': err.get('msg'),
            'type': err.get('type'),
        }
        for err in error.errors()
    ]


def validation_error_response(error: ValidationError):
    """(body, status) za 400 odgovor na neispravan request."""
    return {
        'error': 'ValidationFailed',
        'message': 'Neispravni podaci u zahtevu',
        'details': validation_details(error),
    }, 400


def json_body():
    """Telo zahteva kao dict (prazan dict ako JSON nije poslat)."""
    body = request.get_json(silent=True)
    return body if body is not None else {}
