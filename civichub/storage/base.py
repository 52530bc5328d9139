"""
Storage interfejs - ugovor koji core logika ocekuje od persistence sloja.

Metode su grupisane po entitetima (users, suggestions, comments, votes,
reports) plus maintenance. Svaka write metoda je atomicna sama za sebe,
a transaction() omogucava da vise poziva prodje kao jedna celina.
"""

import abc
from contextlib import contextmanager
from typing import Iterator, List, Optional

from .records import (
    Location, UserRecord, SuggestionRecord, SuggestionStatus,
    CommentRecord, VoteRecord, ReportRecord, ReportReason
)


class StorageConflict(Exception):
    """Krsenje unique ogranicenja (npr. dupli glas ili username)."""


class Storage(abc.ABC):
    """Bazna klasa za storage backend-e."""

    @abc.abstractmethod
    @contextmanager
    def transaction(self) -> Iterator[None]:
        """
        Sve unutar bloka se primenjuje u celosti ili nimalo.

        Re-entrant: ugnjezdeni blok postaje deo spoljne transakcije.
        """

    # =========================================================================
    # USERS
    # =========================================================================

    @abc.abstractmethod
    def get_user(self, user_id: int, for_update: bool = False) -> Optional[UserRecord]:
        ...

    @abc.abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        ...

    @abc.abstractmethod
    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    @abc.abstractmethod
    def create_user(self, username: str, password_hash: str, name: str, email: str,
                    is_admin: bool = False) -> UserRecord:
        """Raises StorageConflict ako username ili email vec postoji."""

    @abc.abstractmethod
    def increment_warning_count(self, user_id: int, increment: int,
                                ban_threshold: int) -> Optional[UserRecord]:
        """
        Atomski uvecava warning_count i postavlja is_banned kada novi
        broj dostigne prag. Vraca None ako korisnik ne postoji.
        """

    @abc.abstractmethod
    def set_user_banned(self, user_id: int, banned: bool = True) -> Optional[UserRecord]:
        ...

    @abc.abstractmethod
    def set_user_location(self, user_id: int, location: Location) -> Optional[UserRecord]:
        ...

    # =========================================================================
    # SUGGESTIONS
    # =========================================================================

    @abc.abstractmethod
    def get_suggestion(self, suggestion_id: int, for_update: bool = False) -> Optional[SuggestionRecord]:
        ...

    @abc.abstractmethod
    def list_suggestions(self) -> List[SuggestionRecord]:
        ...

    @abc.abstractmethod
    def list_suggestions_by_user(self, user_id: int) -> List[SuggestionRecord]:
        ...

    @abc.abstractmethod
    def list_suggestions_by_status(self, status: SuggestionStatus) -> List[SuggestionRecord]:
        ...

    @abc.abstractmethod
    def create_suggestion(self, title: str, description: str, user_id: int,
                          location: Location, photo_url: Optional[str] = None) -> SuggestionRecord:
        ...

    @abc.abstractmethod
    def set_suggestion_status(self, suggestion_id: int, status: SuggestionStatus,
                              rejection_reason: Optional[str]) -> Optional[SuggestionRecord]:
        ...

    @abc.abstractmethod
    def adjust_vote_counters(self, suggestion_id: int, up_delta: int,
                             down_delta: int) -> Optional[SuggestionRecord]:
        """Atomski dodaje (up_delta, down_delta) na brojace predloga."""

    @abc.abstractmethod
    def delete_suggestion_cascade(self, suggestion_id: int) -> Optional[dict]:
        """
        Brise predlog zajedno sa komentarima, prijavama na te komentare,
        glasovima i prijavama na predlog - sve ili nista.

        Returns:
            Dict sa brojem obrisanih redova po tabeli, ili None ako
            predlog ne postoji.
        """

    # =========================================================================
    # COMMENTS
    # =========================================================================

    @abc.abstractmethod
    def get_comment(self, comment_id: int) -> Optional[CommentRecord]:
        ...

    @abc.abstractmethod
    def list_comments(self, suggestion_id: int) -> List[CommentRecord]:
        """Komentari predloga, najstariji prvi."""

    @abc.abstractmethod
    def create_comment(self, content: str, suggestion_id: int, user_id: int,
                       parent_id: Optional[int] = None) -> CommentRecord:
        ...

    # =========================================================================
    # VOTES
    # =========================================================================

    @abc.abstractmethod
    def get_vote(self, user_id: int, suggestion_id: int, for_update: bool = False) -> Optional[VoteRecord]:
        ...

    @abc.abstractmethod
    def list_votes(self, suggestion_id: int) -> List[VoteRecord]:
        ...

    @abc.abstractmethod
    def create_vote(self, user_id: int, suggestion_id: int, is_upvote: bool) -> VoteRecord:
        """Raises StorageConflict ako glas za (user, suggestion) vec postoji."""

    @abc.abstractmethod
    def set_vote_direction(self, vote_id: int, is_upvote: bool) -> VoteRecord:
        ...

    # =========================================================================
    # REPORTS
    # =========================================================================

    @abc.abstractmethod
    def get_report(self, report_id: int) -> Optional[ReportRecord]:
        ...

    @abc.abstractmethod
    def list_reports(self, resolved: Optional[bool] = None) -> List[ReportRecord]:
        ...

    @abc.abstractmethod
    def create_report(self, reason: ReportReason, description: str, user_id: int,
                      suggestion_id: Optional[int] = None, comment_id: Optional[int] = None,
                      photo_url: Optional[str] = None) -> ReportRecord:
        ...

    @abc.abstractmethod
    def resolve_report(self, report_id: int) -> Optional[ReportRecord]:
        ...

    # =========================================================================
    # MAINTENANCE
    # =========================================================================

    @abc.abstractmethod
    def reset(self) -> None:
        """Brise sve entitete i resetuje brojace ID-jeva."""
