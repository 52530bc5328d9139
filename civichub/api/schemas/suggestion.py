"""
Suggestion schemas - predlozi, komentari, glasovi i prijave.
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .common import LocationSchema


class CreateSuggestionRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)
    location: LocationSchema
    photo_url: Optional[str] = Field(None, max_length=500)

    @field_validator('title', 'description')
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError('Polje ne sme biti prazno')
        return v.strip()


class ListSuggestionsQuery(BaseModel):
    """Query parametri za GET /suggestions."""
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)
    radius: Optional[float] = Field(None, ge=0, description="Radius u km")
    q: Optional[str] = Field(None, max_length=200)
    sort: Optional[str] = Field(None, description="newest, hot ili distance")


class StatusUpdateRequest(BaseModel):
    status: str = Field(..., min_length=1)
    rejection_reason: Optional[str] = Field(None, max_length=1000)


class CommentRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)
    parent_id: Optional[int] = None


class VoteRequest(BaseModel):
    is_upvote: bool


class ReportRequest(BaseModel):
    """Tacno jedan od suggestion_id / comment_id proverava ReportService."""
    reason: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = Field('', max_length=2000)
    suggestion_id: Optional[int] = None
    comment_id: Optional[int] = None
    photo_url: Optional[str] = Field(None, max_length=500)
