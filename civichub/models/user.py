"""
User model - gradjanin koji predlaze, glasa, komentarise i prijavljuje.
"""

from datetime import datetime
from ..extensions import db
from ..storage.records import UserRecord, Location


class User(db.Model):
    """Korisnik platforme (gradjanin ili administrator)."""
    __tablename__ = 'civic_user'

    id = db.Column(db.Integer, primary_key=True)

    # Auth
    username = db.Column(db.String(50), unique=True, nullable=False, index=True)
    email = db.Column(db.String(100), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(200), nullable=False)

    # Profil
    name = db.Column(db.String(100), nullable=False)

    # Poslednja poznata lokacija
    latitude = db.Column(db.Float)
    longitude = db.Column(db.Float)
    address = db.Column(db.String(300))

    # Uloga i moderacija
    is_admin = db.Column(db.Boolean, default=False, nullable=False)
    warning_count = db.Column(db.Integer, default=0, nullable=False)
    is_banned = db.Column(db.Boolean, default=False, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.CheckConstraint('warning_count >= 0', name='check_user_warning_count'),
    )

    def __repr__(self):
        return f'<User {self.id}: {self.username}>'

    def to_record(self) -> UserRecord:
        location = None
        if self.latitude is not None and self.longitude is not None:
            location = Location(self.latitude, self.longitude, self.address)
        return UserRecord(
            id=self.id,
            username=self.username,
            name=self.name,
            email=self.email,
            password_hash=self.password_hash,
            is_admin=self.is_admin,
            warning_count=self.warning_count,
            is_banned=self.is_banned,
            location=location,
            created_at=self.created_at,
        )
