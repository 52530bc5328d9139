"""
Moderation Service - filtriranje sadrzaja i eskalacija upozorenja.

Tok za svaki tekst koji korisnik posalje:
1. detect() na ORIGINALNOM tekstu (odluka o upozorenju)
2. filter() pre upisa (u bazi je uvek maskiran tekst)
3. posle upisa sadrzaja -> escalate() ako je bilo prekrsaja

Eskalacija je nezavisna od upisa sadrzaja: ako pukne, sadrzaj ostaje.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .exceptions import NotFoundError
from ..utils.content_filter import ProfanityFilter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EscalationPolicy:
    """Koliko upozorenja nosi jedan prekrsaj i od kog broja sledi ban."""
    increment: int = 1
    ban_threshold: int = 2

    def __post_init__(self):
        # Proverava se pri startu, eskalacija posle upisa ne sme da pukne
        for name in ('increment', 'ban_threshold'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f'{name} must be a positive integer, got {value!r}')


@dataclass
class ScreenedText:
    """Rezultat provere jednog ili vise tekstova."""
    texts: tuple
    violation: bool


class ModerationService:

    def __init__(self, storage, profanity_filter: ProfanityFilter,
                 policy: Optional[EscalationPolicy] = None):
        self.storage = storage
        self.profanity_filter = profanity_filter
        self.policy = policy or EscalationPolicy()

    def screen(self, *texts) -> ScreenedText:
        """
        Proverava originalne tekstove i vraca njihove maskirane verzije.

        Detekcija ide na originalu jer odluka o upozorenju mora odrazavati
        ono sto je korisnik stvarno napisao.
        """
        violation = any(self.profanity_filter.detect(t) for t in texts)
        filtered = tuple(self.profanity_filter.filter(t) for t in texts)
        return ScreenedText(texts=filtered, violation=violation)

    def escalate(self, user_id: int, increment: Optional[int] = None):
        """
        Uvecava warning_count korisnika i banuje ga na pragu.

        Args:
            user_id: ID korisnika
            increment: Broj upozorenja (default iz politike)

        Returns:
            Azuriran UserRecord

        Raises:
            NotFoundError: Ako korisnik ne postoji
            ValueError: Ako increment nije pozitivan
        """
        increment = self.policy.increment if increment is None else increment
        if increment <= 0:
            raise ValueError('Increment must be a positive integer')

        user = self.storage.increment_warning_count(
            user_id, increment, self.policy.ban_threshold
        )
        if user is None:
            raise NotFoundError(f'Korisnik {user_id} nije pronadjen')

        logger.info(
            'User %s warned (+%s), warning_count=%s banned=%s',
            user_id, increment, user.warning_count, user.is_banned
        )
        if user.is_banned and user.warning_count - increment < self.policy.ban_threshold:
            logger.info('User %s reached ban threshold %s', user_id, self.policy.ban_threshold)
        return user

    def escalate_after_write(self, user_id: int):
        """
        Eskalacija posle vec upisanog sadrzaja.

        NotFound se samo loguje - primarna akcija (objava) je vec uspela
        i ne sme se ponistiti zbog upozorenja.
        """
        try:
            return self.escalate(user_id)
        except NotFoundError:
            logger.warning('Escalation skipped, user %s no longer exists', user_id)
            return None

    def ban_user(self, user_id: int):
        """Administratorski ban, nezavisno od broja upozorenja."""
        user = self.storage.set_user_banned(user_id, True)
        if user is None:
            raise NotFoundError(f'Korisnik {user_id} nije pronadjen')
        logger.info('User %s banned by administrator', user_id)
        return user
