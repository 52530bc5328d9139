"""
Schemas - Pydantic modeli za validaciju request podataka.
"""

from .common import LocationSchema, json_body, validation_details, validation_error_response
from .auth import RegisterRequest, LoginRequest, UpdateLocationRequest, user_response
from .suggestion import (
    CreateSuggestionRequest, ListSuggestionsQuery, StatusUpdateRequest,
    CommentRequest, VoteRequest, ReportRequest
)

__all__ = [
    'LocationSchema',
    'json_body',
    'validation_details',
    'validation_error_response',
    'RegisterRequest',
    'LoginRequest',
    'UpdateLocationRequest',
    'user_response',
    'CreateSuggestionRequest',
    'ListSuggestionsQuery',
    'StatusUpdateRequest',
    'CommentRequest',
    'VoteRequest',
    'ReportRequest',
]
