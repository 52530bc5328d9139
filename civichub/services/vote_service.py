"""
Vote Service - jedan glas po (korisnik, predlog) i sinhronizovani brojaci.

Upis glasa i promena brojaca na predlogu idu u istoj transakciji:
- nov glas: +1 na odgovarajuci brojac
- isti smer: nista se ne menja (idempotentno)
- promena smera: -1 sa starog, +1 na novi brojac, zajedno ili nikako
"""

import logging
from dataclasses import dataclass

from .exceptions import NotFoundError, ForbiddenError
from ..storage.base import StorageConflict
from ..storage.records import VoteRecord, SuggestionRecord

logger = logging.getLogger(__name__)


@dataclass
class VoteResult:
    vote: VoteRecord
    suggestion: SuggestionRecord

    def to_dict(self):
        return {'vote': self.vote.to_dict(), 'suggestion': self.suggestion.to_dict()}


def counter_deltas(previous, is_upvote):
    """
    Vraca (up_delta, down_delta) za prelaz sa prethodnog glasa na novi.

    previous je None (nema glasa), True (upvote) ili False (downvote).
    """
    if previous is None:
        return (1, 0) if is_upvote else (0, 1)
    if previous == is_upvote:
        return 0, 0
    return (1, -1) if is_upvote else (-1, 1)


class VoteService:

    # Jedan ponovljen pokusaj ako paralelni zahtev upise isti glas pre nas
    MAX_ATTEMPTS = 2

    def __init__(self, storage):
        self.storage = storage

    def cast_vote(self, user_id: int, suggestion_id: int, is_upvote: bool) -> VoteResult:
        """
        Glasa za ili protiv predloga.

        Raises:
            NotFoundError: Ako predlog ili korisnik ne postoji
            ForbiddenError: Ako je korisnik banovan
        """
        user = self.storage.get_user(user_id)
        if user is None:
            raise NotFoundError(f'Korisnik {user_id} nije pronadjen')
        if user.is_banned:
            raise ForbiddenError('Banovani korisnici ne mogu da glasaju')

        for attempt in range(1, self.MAX_ATTEMPTS + 1):
            try:
                return self._apply_vote(user_id, suggestion_id, bool(is_upvote))
            except StorageConflict:
                if attempt == self.MAX_ATTEMPTS:
                    raise
                logger.info(
                    'Concurrent vote by user %s on suggestion %s, retrying',
                    user_id, suggestion_id
                )

    def _apply_vote(self, user_id, suggestion_id, is_upvote):
        with self.storage.transaction():
            suggestion = self.storage.get_suggestion(suggestion_id, for_update=True)
            if suggestion is None:
                raise NotFoundError(f'Predlog {suggestion_id} nije pronadjen')

            existing = self.storage.get_vote(user_id, suggestion_id, for_update=True)
            previous = existing.is_upvote if existing else None
            up_delta, down_delta = counter_deltas(previous, is_upvote)

            if existing is None:
                vote = self.storage.create_vote(user_id, suggestion_id, is_upvote)
            elif previous != is_upvote:
                vote = self.storage.set_vote_direction(existing.id, is_upvote)
            else:
                vote = existing

            if up_delta or down_delta:
                suggestion = self.storage.adjust_vote_counters(suggestion_id, up_delta, down_delta)
                logger.debug(
                    'Suggestion %s counters adjusted by (%+d, %+d)',
                    suggestion_id, up_delta, down_delta
                )

        return VoteResult(vote=vote, suggestion=suggestion)
