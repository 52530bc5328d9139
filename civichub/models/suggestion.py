"""
Suggestion model - predlog za poboljsanje vezan za lokaciju.

Brojaci upvotes/downvotes su denormalizovani agregati nad Vote tabelom
i menjaju se iskljucivo atomskim UPDATE-om iz vote ledger-a.
"""

from datetime import datetime
from ..extensions import db
from ..storage.records import SuggestionRecord, SuggestionStatus, Location


class Suggestion(db.Model):
    """Predlog gradjanina."""
    __tablename__ = 'suggestion'

    id = db.Column(db.Integer, primary_key=True)

    # Sadrzaj (vec filtriran)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    photo_url = db.Column(db.String(500))

    # Lokacija
    latitude = db.Column(db.Float, nullable=False)
    longitude = db.Column(db.Float, nullable=False)
    address = db.Column(db.String(300))

    # Autor
    user_id = db.Column(
        db.Integer,
        db.ForeignKey('civic_user.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )

    # Status
    status = db.Column(
        db.Enum(SuggestionStatus),
        default=SuggestionStatus.ACTIVE,
        nullable=False,
        index=True
    )
    rejection_reason = db.Column(db.Text)

    # Agregati glasova
    upvotes = db.Column(db.Integer, default=0, nullable=False)
    downvotes = db.Column(db.Integer, default=0, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    __table_args__ = (
        db.CheckConstraint('upvotes >= 0', name='check_suggestion_upvotes'),
        db.CheckConstraint('downvotes >= 0', name='check_suggestion_downvotes'),
    )

    def __repr__(self):
        return f'<Suggestion {self.id}: {self.status.value}>'

    def to_record(self) -> SuggestionRecord:
        return SuggestionRecord(
            id=self.id,
            title=self.title,
            description=self.description,
            user_id=self.user_id,
            location=Location(self.latitude, self.longitude, self.address),
            status=self.status,
            rejection_reason=self.rejection_reason,
            upvotes=self.upvotes,
            downvotes=self.downvotes,
            photo_url=self.photo_url,
            created_at=self.created_at,
        )
