"""
Auth Service - registracija, login i profil korisnika.

Lozinke se hesiraju bcrypt-om, a login vraca JWT access token.
"""

import logging
from typing import Optional, Tuple

import bcrypt

from .exceptions import AuthError, ConflictError, NotFoundError, ValidationFailedError
from ..api.middleware.jwt_utils import create_access_token
from ..storage.base import StorageConflict
from ..storage.records import Location, UserRecord

logger = logging.getLogger(__name__)


PASSWORD_MIN_LENGTH = 6


def hash_password(password: str) -> str:
    password_bytes = password.encode('utf-8')
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password_bytes, salt).decode('utf-8')


def check_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash or password is None:
        return False
    return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))


class AuthService:
    """
    Servis za korisnicke naloge.

    Sadrzi metode za:
    - Registraciju gradjanina (ili admina iz CLI-ja)
    - Login (username ili email + lozinka)
    - Profil i poslednju poznatu lokaciju
    """

    def __init__(self, storage):
        self.storage = storage

    def register(self, username: str, password: str, name: str, email: str,
                 is_admin: bool = False) -> UserRecord:
        """
        Registruje novog korisnika.

        Raises:
            ValidationFailedError: Prazna polja ili prekratka lozinka
            ConflictError: Username ili email vec postoji
        """
        username = (username or '').strip()
        email = (email or '').strip().lower()
        name = (name or '').strip()
        if not username or not email or not name:
            raise ValidationFailedError('Username, ime i email su obavezni')
        if not password or len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationFailedError(f'Lozinka mora imati najmanje {PASSWORD_MIN_LENGTH} karaktera')

        if self.storage.get_user_by_username(username):
            raise ConflictError('Korisnik sa ovim username-om vec postoji')
        if self.storage.get_user_by_email(email):
            raise ConflictError('Korisnik sa ovim email-om vec postoji')

        try:
            user = self.storage.create_user(
                username=username,
                password_hash=hash_password(password),
                name=name,
                email=email,
                is_admin=is_admin,
            )
        except StorageConflict:
            # Paralelna registracija sa istim podacima
            raise ConflictError('Korisnik sa ovim username-om ili email-om vec postoji')

        logger.info('User %s registered (admin=%s)', user.id, is_admin)
        return user

    def login(self, login: str, password: str) -> Tuple[UserRecord, str]:
        """
        Login sa username-om ili email-om.

        Returns:
            Tuple (UserRecord, access_token)

        Raises:
            AuthError: Pogresni kredencijali
        """
        login = (login or '').strip()
        user = None
        if login:
            user = self.storage.get_user_by_username(login)
            if user is None and '@' in login:
                user = self.storage.get_user_by_email(login)

        if user is None or not check_password(password, user.password_hash):
            raise AuthError('Pogresan username ili lozinka')

        token = create_access_token(user.id, is_admin=user.is_admin)
        return user, token

    def get_user(self, user_id: int) -> UserRecord:
        user = self.storage.get_user(user_id)
        if user is None:
            raise NotFoundError(f'Korisnik {user_id} nije pronadjen')
        return user

    def update_location(self, user_id: int, lat: float, lng: float,
                        address: Optional[str] = None) -> UserRecord:
        """Cuva poslednju poznatu lokaciju korisnika."""
        if lat is None or lng is None:
            raise ValidationFailedError('Lokacija (lat, lng) je obavezna')
        user = self.storage.set_user_location(user_id, Location(lat=lat, lng=lng, address=address))
        if user is None:
            raise NotFoundError(f'Korisnik {user_id} nije pronadjen')
        return user
