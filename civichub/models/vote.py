"""
Vote model - jedan glas korisnika po predlogu.
"""

from ..extensions import db
from ..storage.records import VoteRecord


class Vote(db.Model):
    """Glas za ili protiv predloga."""
    __tablename__ = 'suggestion_vote'

    id = db.Column(db.Integer, primary_key=True)

    suggestion_id = db.Column(
        db.Integer,
        db.ForeignKey('suggestion.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    user_id = db.Column(
        db.Integer,
        db.ForeignKey('civic_user.id', ondelete='CASCADE'),
        nullable=False
    )
    is_upvote = db.Column(db.Boolean, nullable=False)

    __table_args__ = (
        # Najvise jedan glas po (korisnik, predlog)
        db.UniqueConstraint('user_id', 'suggestion_id', name='uq_vote_user_suggestion'),
    )

    def __repr__(self):
        direction = 'up' if self.is_upvote else 'down'
        return f'<Vote {self.id}: user={self.user_id} suggestion={self.suggestion_id} {direction}>'

    def to_record(self) -> VoteRecord:
        return VoteRecord(
            id=self.id,
            suggestion_id=self.suggestion_id,
            user_id=self.user_id,
            is_upvote=self.is_upvote,
        )
