"""
Comment model - komentar na predlog, sa opcionim roditeljem (thread).
"""

from datetime import datetime
from ..extensions import db
from ..storage.records import CommentRecord


class Comment(db.Model):
    """Komentar na predlog."""
    __tablename__ = 'suggestion_comment'

    id = db.Column(db.Integer, primary_key=True)
    content = db.Column(db.Text, nullable=False)

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
    parent_id = db.Column(
        db.Integer,
        db.ForeignKey('suggestion_comment.id', ondelete='CASCADE')
    )

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<Comment {self.id} on Suggestion {self.suggestion_id}>'

    def to_record(self) -> CommentRecord:
        return CommentRecord(
            id=self.id,
            content=self.content,
            suggestion_id=self.suggestion_id,
            user_id=self.user_id,
            parent_id=self.parent_id,
            created_at=self.created_at,
        )
