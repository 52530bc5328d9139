"""
Records - nezavisni zapisi entiteta koje vraca storage sloj.

Core logika (servisi) radi iskljucivo sa ovim zapisima i nikad ne zna
da li iza njih stoji memorijski ili relacioni backend.
"""

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


class SuggestionStatus(enum.Enum):
    """
    Status predloga.

    ACTIVE - pocetni status pri kreiranju
    IN_PROGRESS - administracija radi na predlogu
    DONE - realizovano
    REJECTED - odbijeno (rejection_reason je obavezan)
    """
    ACTIVE = 'ACTIVE'
    IN_PROGRESS = 'IN_PROGRESS'
    DONE = 'DONE'
    REJECTED = 'REJECTED'


class ReportReason(enum.Enum):
    """Razlog prijave."""
    INAPPROPRIATE = 'inappropriate'
    SPAM = 'spam'
    MISLEADING = 'misleading'
    HARASSMENT = 'harassment'
    VIOLENT = 'violent'
    DUPLICATE = 'duplicate'
    UNFEASIBLE = 'unfeasible'
    INCORRECT_LOCATION = 'incorrect_location'
    PRIVATE_PROPERTY = 'private_property'
    LEGAL_ISSUE = 'legal_issue'
    OTHER = 'other'


def _iso(value):
    return value.isoformat() if value else None


@dataclass
class Location:
    """Geografska lokacija (vrednosni tip, ugradjen u User i Suggestion)."""
    lat: float
    lng: float
    address: Optional[str] = None

    @property
    def is_usable(self) -> bool:
        # Nula se tretira kao "nije postavljeno"
        return bool(self.lat) and bool(self.lng)

    def to_dict(self):
        return {'lat': self.lat, 'lng': self.lng, 'address': self.address}


@dataclass
class UserRecord:
    id: int
    username: str
    name: str
    email: str
    password_hash: Optional[str] = None
    is_admin: bool = False
    warning_count: int = 0
    is_banned: bool = False
    location: Optional[Location] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def summary(self):
        """Kratak prikaz autora uz predloge i komentare."""
        return {'id': self.id, 'name': self.name, 'username': self.username}

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'name': self.name,
            'email': self.email,
            'is_admin': self.is_admin,
            'warning_count': self.warning_count,
            'is_banned': self.is_banned,
            'location': self.location.to_dict() if self.location else None,
            'created_at': _iso(self.created_at),
        }


@dataclass
class SuggestionRecord:
    id: int
    title: str
    description: str
    user_id: int
    location: Optional[Location] = None
    status: SuggestionStatus = SuggestionStatus.ACTIVE
    rejection_reason: Optional[str] = None
    upvotes: int = 0
    downvotes: int = 0
    photo_url: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    # Popunjava se samo kod pretrage po lokaciji
    distance: Optional[float] = None

    @property
    def score(self) -> int:
        return self.upvotes - self.downvotes

    def to_dict(self):
        data = {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'user_id': self.user_id,
            'location': self.location.to_dict() if self.location else None,
            'status': self.status.value,
            'rejection_reason': self.rejection_reason,
            'upvotes': self.upvotes,
            'downvotes': self.downvotes,
            'photo_url': self.photo_url,
            'created_at': _iso(self.created_at),
        }
        if self.distance is not None:
            data['distance'] = self.distance
        return data


@dataclass
class CommentRecord:
    id: int
    content: str
    suggestion_id: int
    user_id: int
    parent_id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'content': self.content,
            'suggestion_id': self.suggestion_id,
            'user_id': self.user_id,
            'parent_id': self.parent_id,
            'created_at': _iso(self.created_at),
        }


@dataclass
class VoteRecord:
    id: int
    suggestion_id: int
    user_id: int
    is_upvote: bool

    def to_dict(self):
        return {
            'id': self.id,
            'suggestion_id': self.suggestion_id,
            'user_id': self.user_id,
            'is_upvote': self.is_upvote,
        }


@dataclass
class ReportRecord:
    id: int
    reason: ReportReason
    description: str
    user_id: int
    suggestion_id: Optional[int] = None
    comment_id: Optional[int] = None
    photo_url: Optional[str] = None
    resolved: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'reason': self.reason.value,
            'description': self.description,
            'user_id': self.user_id,
            'suggestion_id': self.suggestion_id,
            'comment_id': self.comment_id,
            'photo_url': self.photo_url,
            'resolved': self.resolved,
            'created_at': _iso(self.created_at),
        }
