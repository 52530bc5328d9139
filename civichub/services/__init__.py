"""
Services - poslovna logika odvojena od API sloja.

Servisi rade nad Storage interfejsom i ne znaju koji backend je ispod.
"""

from .exceptions import (
    ServiceError, NotFoundError, ForbiddenError,
    ValidationFailedError, ConflictError, AuthError
)
from .registry import ServiceRegistry, build_services, get_services

__all__ = [
    'ServiceError',
    'NotFoundError',
    'ForbiddenError',
    'ValidationFailedError',
    'ConflictError',
    'AuthError',
    'ServiceRegistry',
    'build_services',
    'get_services',
]
