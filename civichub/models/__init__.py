"""
SQLAlchemy modeli za CivicHub.

Ovaj modul exportuje sve modele kako bi bili dostupni
za import iz civichub.models.
"""

from .user import User
from .suggestion import Suggestion, SuggestionStatus
from .comment import Comment
from .vote import Vote
from .report import Report, ReportReason

__all__ = [
    'User',
    'Suggestion',
    'SuggestionStatus',
    'Comment',
    'Vote',
    'Report',
    'ReportReason',
]
