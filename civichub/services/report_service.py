"""
Report Service - prijave neprikladnog sadrzaja.

Prijava cilja TACNO jedan entitet: predlog ili komentar (nikad oba,
nikad nijedan). Admin je razresava, a brise se samo kaskadno sa
predlogom.
"""

import logging
from typing import List, Optional

from .exceptions import NotFoundError, ForbiddenError, ValidationFailedError
from ..storage.records import ReportReason, ReportRecord

logger = logging.getLogger(__name__)


def parse_reason(value) -> ReportReason:
    if isinstance(value, ReportReason):
        return value
    try:
        return ReportReason(str(value).strip().lower())
    except ValueError:
        allowed = ', '.join(r.value for r in ReportReason)
        raise ValidationFailedError(f'Nepoznat razlog prijave: {value}. Dozvoljeno: {allowed}')


class ReportService:

    def __init__(self, storage):
        self.storage = storage

    def create_report(self, user_id: int, reason, description: str = '',
                      suggestion_id: Optional[int] = None, comment_id: Optional[int] = None,
                      photo_url: Optional[str] = None) -> ReportRecord:
        """
        Kreira prijavu za predlog ili komentar.

        Raises:
            ValidationFailedError: Nula ili dva cilja, nepoznat razlog
            NotFoundError: Ciljni predlog/komentar ili korisnik ne postoji
            ForbiddenError: Ako je korisnik banovan
        """
        if (suggestion_id is None) == (comment_id is None):
            raise ValidationFailedError('Prijava mora imati tacno jedan cilj: suggestion_id ili comment_id')
        reason = parse_reason(reason)

        user = self.storage.get_user(user_id)
        if user is None:
            raise NotFoundError(f'Korisnik {user_id} nije pronadjen')
        if user.is_banned:
            raise ForbiddenError('Banovani korisnici ne mogu da prijavljuju sadrzaj')

        with self.storage.transaction():
            if suggestion_id is not None:
                if self.storage.get_suggestion(suggestion_id, for_update=True) is None:
                    raise NotFoundError(f'Predlog {suggestion_id} nije pronadjen')
            elif self.storage.get_comment(comment_id) is None:
                raise NotFoundError(f'Komentar {comment_id} nije pronadjen')

            report = self.storage.create_report(
                reason=reason,
                description=(description or '').strip(),
                user_id=user_id,
                suggestion_id=suggestion_id,
                comment_id=comment_id,
                photo_url=photo_url,
            )

        logger.info(
            'Report %s (%s) filed by user %s on %s',
            report.id, reason.value, user_id,
            f'suggestion {suggestion_id}' if suggestion_id is not None else f'comment {comment_id}'
        )
        return report

    def list_reports(self, resolved: Optional[bool] = None) -> List[ReportRecord]:
        """Prijave, najnovije prve. resolved=None vraca sve."""
        return self.storage.list_reports(resolved=resolved)

    def resolve_report(self, report_id: int, caller_is_admin: bool = False) -> ReportRecord:
        if not caller_is_admin:
            raise ForbiddenError('Samo administrator moze razresiti prijavu')
        report = self.storage.resolve_report(report_id)
        if report is None:
            raise NotFoundError(f'Prijava {report_id} nije pronadjena')
        logger.info('Report %s resolved', report_id)
        return report
