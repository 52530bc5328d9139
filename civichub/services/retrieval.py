"""
Retrieval Engine - predlozi u blizini zadate lokacije.

find_near() samo filtrira i anotira udaljenost. Pretraga po tekstu i
sortiranje su zasebni koraci koje poziva vlasnik upita (SuggestionService).
"""

from dataclasses import replace
from typing import Callable, Iterable, List, Optional

from .exceptions import ValidationFailedError
from ..storage.records import Location, SuggestionRecord
from ..utils.geo import haversine_km


SORT_NEWEST = 'newest'
SORT_HOT = 'hot'
SORT_DISTANCE = 'distance'
SORT_OPTIONS = (SORT_NEWEST, SORT_HOT, SORT_DISTANCE)


class RetrievalEngine:

    def __init__(self, storage):
        self.storage = storage

    def find_near(self, location: Optional[Location], radius_km: float) -> List[SuggestionRecord]:
        """
        Predlozi unutar radius_km od lokacije, sa popunjenim distance poljem.

        Bez lokacije (ili sa nultim koordinatama) vraca sve predloge
        nefiltrirane. Predlozi bez upotrebljive lokacije se izostavljaju
        kada je lokacija zadata.
        """
        suggestions = self.storage.list_suggestions()
        if location is None or not location.is_usable:
            return suggestions

        if radius_km is None or radius_km < 0:
            raise ValidationFailedError('Radius mora biti nenegativan broj')

        nearby = []
        for suggestion in suggestions:
            if suggestion.location is None or not suggestion.location.is_usable:
                continue
            distance = haversine_km(
                location.lat, location.lng,
                suggestion.location.lat, suggestion.location.lng
            )
            if distance <= radius_km:
                nearby.append(replace(suggestion, distance=distance))
        return nearby


def text_filter(suggestions: Iterable[SuggestionRecord], query: Optional[str],
                author_name: Callable[[int], Optional[str]]) -> List[SuggestionRecord]:
    """
    Case-insensitive substring pretraga po naslovu, opisu i imenu autora.

    author_name je funkcija user_id -> ime (ili None).
    """
    suggestions = list(suggestions)
    if not query or not query.strip():
        return suggestions

    needle = query.strip().lower()
    result = []
    for suggestion in suggestions:
        haystack = (
            suggestion.title,
            suggestion.description,
            author_name(suggestion.user_id) or '',
        )
        if any(needle in field.lower() for field in haystack):
            result.append(suggestion)
    return result


def sort_suggestions(suggestions: Iterable[SuggestionRecord], order: str = SORT_NEWEST) -> List[SuggestionRecord]:
    """
    Sortira predloge:
    - newest: po vremenu kreiranja, najnoviji prvi
    - hot: po (upvotes - downvotes), najveci prvi
    - distance: po udaljenosti, najblizi prvi (svi moraju imati distance)
    """
    suggestions = list(suggestions)
    if order == SORT_NEWEST:
        return sorted(suggestions, key=lambda s: (s.created_at, s.id), reverse=True)
    if order == SORT_HOT:
        return sorted(suggestions, key=lambda s: (s.score, s.created_at, s.id), reverse=True)
    if order == SORT_DISTANCE:
        if any(s.distance is None for s in suggestions):
            raise ValidationFailedError('Sortiranje po udaljenosti zahteva lokaciju upita')
        return sorted(suggestions, key=lambda s: (s.distance, s.id))
    raise ValidationFailedError(f'Nepoznat nacin sortiranja: {order}')
