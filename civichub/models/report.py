"""
Report model - prijava predloga ili komentara administratoru.
"""

from datetime import datetime
from ..extensions import db
from ..storage.records import ReportRecord, ReportReason


class Report(db.Model):
    """Prijava sadrzaja (tacno jedan cilj: predlog ili komentar)."""
    __tablename__ = 'content_report'

    id = db.Column(db.Integer, primary_key=True)

    # Detalji
    reason = db.Column(db.Enum(ReportReason), nullable=False)
    description = db.Column(db.Text, nullable=False)
    photo_url = db.Column(db.String(500))

    # Ko prijavljuje
    user_id = db.Column(
        db.Integer,
        db.ForeignKey('civic_user.id', ondelete='CASCADE'),
        nullable=False
    )

    # Sta se prijavljuje
    suggestion_id = db.Column(
        db.Integer,
        db.ForeignKey('suggestion.id', ondelete='CASCADE'),
        index=True
    )
    comment_id = db.Column(
        db.Integer,
        db.ForeignKey('suggestion_comment.id', ondelete='CASCADE'),
        index=True
    )

    # Status
    resolved = db.Column(db.Boolean, default=False, nullable=False, index=True)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.CheckConstraint(
            '(suggestion_id IS NULL) <> (comment_id IS NULL)',
            name='check_report_single_target'
        ),
    )

    def __repr__(self):
        target = f'suggestion#{self.suggestion_id}' if self.suggestion_id else f'comment#{self.comment_id}'
        return f'<Report {self.id}: {target}>'

    def to_record(self) -> ReportRecord:
        return ReportRecord(
            id=self.id,
            reason=self.reason,
            description=self.description,
            user_id=self.user_id,
            suggestion_id=self.suggestion_id,
            comment_id=self.comment_id,
            photo_url=self.photo_url,
            resolved=self.resolved,
            created_at=self.created_at,
        )
