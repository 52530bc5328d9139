"""
Suggestion Service - zivotni ciklus predloga.

Statusi:
- ACTIVE (pocetni) -> IN_PROGRESS -> DONE
- ACTIVE / IN_PROGRESS -> REJECTED (razlog obavezan)
- bilo koji -> ACTIVE (administratorski override)

Prelazi nisu ograniceni, jedini uslov je da ih radi admin. Ulazak u
REJECTED upisuje razlog, svaki drugi ciljni status brise razlog.
Brisanje nije status: vlasnik ili admin brise predlog zajedno sa
komentarima, glasovima i prijavama u jednoj transakciji.
"""

import logging
from typing import List, Optional

from .exceptions import NotFoundError, ForbiddenError, ValidationFailedError
from .retrieval import (
    RetrievalEngine, text_filter, sort_suggestions,
    SORT_NEWEST, SORT_DISTANCE, SORT_OPTIONS
)
from ..storage.records import Location, SuggestionRecord, SuggestionStatus

logger = logging.getLogger(__name__)


TITLE_MAX_LENGTH = 200


def parse_status(value) -> SuggestionStatus:
    """'in_progress' / 'IN_PROGRESS' / SuggestionStatus -> SuggestionStatus."""
    if isinstance(value, SuggestionStatus):
        return value
    try:
        return SuggestionStatus(str(value).strip().upper())
    except ValueError:
        allowed = ', '.join(s.value for s in SuggestionStatus)
        raise ValidationFailedError(f'Nepoznat status: {value}. Dozvoljeno: {allowed}')


def transition(target: SuggestionStatus, rejection_reason: Optional[str] = None):
    """
    Racuna (status, rejection_reason) posle prelaza.

    Svi prelazi su dozvoljeni. REJECTED zahteva neprazan razlog,
    za ostale statuse razlog se brise.
    """
    if target == SuggestionStatus.REJECTED:
        reason = (rejection_reason or '').strip()
        if not reason:
            raise ValidationFailedError('Razlog odbijanja je obavezan za status REJECTED')
        return target, reason
    return target, None


class SuggestionService:

    def __init__(self, storage, moderation, default_radius_km: float = 50):
        self.storage = storage
        self.moderation = moderation
        self.default_radius_km = default_radius_km
        self.retrieval = RetrievalEngine(storage)

    # =========================================================================
    # PRIKAZ
    # =========================================================================

    def _authors(self, user_ids):
        authors = {}
        for user_id in set(user_ids):
            user = self.storage.get_user(user_id)
            authors[user_id] = user
        return authors

    def serialize(self, suggestions: List[SuggestionRecord]) -> List[dict]:
        """Predlozi kao dict-ovi sa kratkim prikazom autora."""
        authors = self._authors(s.user_id for s in suggestions)
        result = []
        for suggestion in suggestions:
            data = suggestion.to_dict()
            author = authors.get(suggestion.user_id)
            data['author'] = author.summary() if author else None
            result.append(data)
        return result

    # =========================================================================
    # CITANJE
    # =========================================================================

    def get_suggestion(self, suggestion_id: int) -> SuggestionRecord:
        suggestion = self.storage.get_suggestion(suggestion_id)
        if suggestion is None:
            raise NotFoundError(f'Predlog {suggestion_id} nije pronadjen')
        return suggestion

    def list_suggestions(self, lat: Optional[float] = None, lng: Optional[float] = None,
                         radius_km: Optional[float] = None, query: Optional[str] = None,
                         sort: Optional[str] = None) -> List[SuggestionRecord]:
        """
        Pretraga predloga: lokacija + radius, tekst, sortiranje.

        Args:
            lat, lng: Lokacija upita (obe ili nijedna)
            radius_km: Radius u km (default iz konfiguracije)
            query: Tekst za pretragu (naslov, opis, ime autora)
            sort: newest (default), hot ili distance
        """
        sort = sort or SORT_NEWEST
        if sort not in SORT_OPTIONS:
            raise ValidationFailedError(
                f'Nepoznat nacin sortiranja: {sort}. Dozvoljeno: {", ".join(SORT_OPTIONS)}'
            )
        if (lat is None) != (lng is None):
            raise ValidationFailedError('lat i lng se zadaju zajedno')

        location = Location(lat=lat, lng=lng) if lat is not None else None
        if sort == SORT_DISTANCE and (location is None or not location.is_usable):
            raise ValidationFailedError('Sortiranje po udaljenosti zahteva lat i lng')

        radius = self.default_radius_km if radius_km is None else radius_km
        suggestions = self.retrieval.find_near(location, radius)

        if query:
            authors = self._authors(s.user_id for s in suggestions)
            suggestions = text_filter(
                suggestions, query,
                lambda user_id: authors[user_id].name if authors.get(user_id) else None
            )

        return sort_suggestions(suggestions, sort)

    def suggestions_by_status(self, status) -> List[SuggestionRecord]:
        suggestions = self.storage.list_suggestions_by_status(parse_status(status))
        return sort_suggestions(suggestions, SORT_NEWEST)

    def suggestions_by_user(self, user_id: int) -> List[SuggestionRecord]:
        return sort_suggestions(self.storage.list_suggestions_by_user(user_id), SORT_NEWEST)

    # =========================================================================
    # PISANJE
    # =========================================================================

    def create_suggestion(self, user_id: int, title: str, description: str,
                          location: Location, photo_url: Optional[str] = None) -> SuggestionRecord:
        """
        Kreira predlog sa maskiranim tekstom.

        Ako originalni naslov ili opis sadrzi zabranjene reci, autor dobija
        upozorenje tek POSLE upisa predloga.

        Raises:
            ValidationFailedError: Prazan naslov/opis ili lokacija bez koordinata
            NotFoundError: Ako autor ne postoji
            ForbiddenError: Ako je autor banovan
        """
        title = (title or '').strip()
        description = (description or '').strip()
        if not title:
            raise ValidationFailedError('Naslov je obavezan')
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationFailedError(f'Naslov moze imati najvise {TITLE_MAX_LENGTH} karaktera')
        if not description:
            raise ValidationFailedError('Opis je obavezan')
        if location is None or location.lat is None or location.lng is None:
            raise ValidationFailedError('Lokacija (lat, lng) je obavezna')

        author = self.storage.get_user(user_id)
        if author is None:
            raise NotFoundError(f'Korisnik {user_id} nije pronadjen')
        if author.is_banned:
            raise ForbiddenError('Banovani korisnici ne mogu da objavljuju predloge')

        screened = self.moderation.screen(title, description)
        clean_title, clean_description = screened.texts

        suggestion = self.storage.create_suggestion(
            title=clean_title,
            description=clean_description,
            user_id=user_id,
            location=location,
            photo_url=photo_url,
        )
        logger.info('Suggestion %s created by user %s', suggestion.id, user_id)

        if screened.violation:
            self.moderation.escalate_after_write(user_id)

        return suggestion

    def update_status(self, suggestion_id: int, status, rejection_reason: Optional[str] = None,
                      caller_is_admin: bool = False) -> SuggestionRecord:
        """
        Menja status predloga (samo admin).

        Raises:
            ForbiddenError: Ako pozivalac nije admin
            ValidationFailedError: Nepoznat status ili REJECTED bez razloga
            NotFoundError: Ako predlog ne postoji
        """
        if not caller_is_admin:
            raise ForbiddenError('Samo administrator moze menjati status predloga')

        target = parse_status(status)
        with self.storage.transaction():
            current = self.storage.get_suggestion(suggestion_id, for_update=True)
            if current is None:
                raise NotFoundError(f'Predlog {suggestion_id} nije pronadjen')

            new_status, reason = transition(target, rejection_reason)
            updated = self.storage.set_suggestion_status(suggestion_id, new_status, reason)

        logger.info(
            'Suggestion %s status %s -> %s',
            suggestion_id, current.status.value, updated.status.value
        )
        return updated

    def delete_suggestion(self, suggestion_id: int, caller_id: int, caller_is_admin: bool = False) -> dict:
        """
        Brise predlog sa komentarima, glasovima i prijavama.

        Returns:
            Broj obrisanih redova po tabeli

        Raises:
            NotFoundError: Ako predlog ne postoji
            ForbiddenError: Ako pozivalac nije vlasnik niti admin
        """
        suggestion = self.storage.get_suggestion(suggestion_id)
        if suggestion is None:
            raise NotFoundError(f'Predlog {suggestion_id} nije pronadjen')
        if not caller_is_admin and suggestion.user_id != caller_id:
            raise ForbiddenError('Samo vlasnik ili administrator moze obrisati predlog')

        removed = self.storage.delete_suggestion_cascade(suggestion_id)
        if removed is None:
            # Obrisan u medjuvremenu
            raise NotFoundError(f'Predlog {suggestion_id} nije pronadjen')

        logger.info(
            'Suggestion %s deleted by user %s (comments=%s, votes=%s, reports=%s)',
            suggestion_id, caller_id,
            removed['comments'], removed['votes'], removed['reports']
        )
        return removed
