"""
Comment Service - komentari na predloge (sa opcionim odgovorom na komentar).

Isti moderacioni tok kao za predloge: detekcija na originalu, upis
maskiranog teksta, pa upozorenje autoru posle upisa.
"""

import logging
from typing import List, Optional

from .exceptions import NotFoundError, ForbiddenError, ValidationFailedError
from ..storage.records import CommentRecord

logger = logging.getLogger(__name__)


CONTENT_MAX_LENGTH = 2000


class CommentService:

    def __init__(self, storage, moderation):
        self.storage = storage
        self.moderation = moderation

    def list_comments(self, suggestion_id: int) -> List[CommentRecord]:
        """Komentari predloga, najstariji prvi."""
        if self.storage.get_suggestion(suggestion_id) is None:
            raise NotFoundError(f'Predlog {suggestion_id} nije pronadjen')
        return self.storage.list_comments(suggestion_id)

    def serialize(self, comments: List[CommentRecord]) -> List[dict]:
        authors = {}
        result = []
        for comment in comments:
            if comment.user_id not in authors:
                authors[comment.user_id] = self.storage.get_user(comment.user_id)
            author = authors[comment.user_id]
            data = comment.to_dict()
            data['author'] = author.summary() if author else None
            result.append(data)
        return result

    def create_comment(self, user_id: int, suggestion_id: int, content: str,
                       parent_id: Optional[int] = None) -> CommentRecord:
        """
        Dodaje komentar na predlog.

        Raises:
            ValidationFailedError: Prazan sadrzaj ili parent sa drugog predloga
            NotFoundError: Predlog, korisnik ili parent komentar ne postoji
            ForbiddenError: Ako je korisnik banovan
        """
        content = (content or '').strip()
        if not content:
            raise ValidationFailedError('Sadrzaj komentara je obavezan')
        if len(content) > CONTENT_MAX_LENGTH:
            raise ValidationFailedError(f'Komentar moze imati najvise {CONTENT_MAX_LENGTH} karaktera')

        author = self.storage.get_user(user_id)
        if author is None:
            raise NotFoundError(f'Korisnik {user_id} nije pronadjen')
        if author.is_banned:
            raise ForbiddenError('Banovani korisnici ne mogu da komentarisu')

        screened = self.moderation.screen(content)

        with self.storage.transaction():
            # Zakljucan red predloga, paralelno brisanje ceka ovaj upis
            if self.storage.get_suggestion(suggestion_id, for_update=True) is None:
                raise NotFoundError(f'Predlog {suggestion_id} nije pronadjen')

            if parent_id is not None:
                parent = self.storage.get_comment(parent_id)
                if parent is None:
                    raise NotFoundError(f'Komentar {parent_id} nije pronadjen')
                if parent.suggestion_id != suggestion_id:
                    raise ValidationFailedError('Odgovor mora biti na komentar istog predloga')

            comment = self.storage.create_comment(
                content=screened.texts[0],
                suggestion_id=suggestion_id,
                user_id=user_id,
                parent_id=parent_id,
            )

        logger.info('Comment %s added to suggestion %s by user %s', comment.id, suggestion_id, user_id)

        if screened.violation:
            self.moderation.escalate_after_write(user_id)

        return comment
