"""
Storage - pluggable persistence sloj.

MemoryStorage za demo/testove, SqlStorage za produkciju. Core logika
zavisi samo od Storage interfejsa i record tipova.
"""

from .base import Storage, StorageConflict
from .records import (
    Location, UserRecord, SuggestionRecord, SuggestionStatus,
    CommentRecord, VoteRecord, ReportRecord, ReportReason
)

__all__ = [
    'Storage',
    'StorageConflict',
    'Location',
    'UserRecord',
    'SuggestionRecord',
    'SuggestionStatus',
    'CommentRecord',
    'VoteRecord',
    'ReportRecord',
    'ReportReason',
]
