"""
Flask ekstenzije - centralizovana inicijalizacija svih ekstenzija.
Ekstenzije se inicijalizuju ovde, a povezuju sa app-om u __init__.py.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS

# SQLAlchemy - ORM za rad sa bazom podataka
# Koristi se za sve modele (User, Suggestion, Comment, Vote, Report)
db = SQLAlchemy()

# Flask-Migrate - Alembic wrapper za migracije baze
# Komande: flask db migrate, flask db upgrade
migrate = Migrate()

# Flask-CORS - Cross-Origin Resource Sharing
# Potrebno za frontend koji se hostuje na drugom domenu
cors = CORS()


STORAGE_KEY = 'civichub.storage'


def get_storage():
    """
    Vraca storage backend za trenutnu aplikaciju (lazy loading).

    Backend se bira preko STORAGE_BACKEND config kljuca:
    - 'sql': SqlStorage nad Flask-SQLAlchemy sesijom
    - 'memory': MemoryStorage (demo i testovi)
    """
    from flask import current_app

    storage = current_app.extensions.get(STORAGE_KEY)
    if storage is None:
        backend = current_app.config.get('STORAGE_BACKEND', 'sql')
        if backend == 'memory':
            from .storage.memory import MemoryStorage
            storage = MemoryStorage()
        elif backend == 'sql':
            from .storage.sql import SqlStorage
            storage = SqlStorage(db)
        else:
            raise ValueError(f'Nepoznat STORAGE_BACKEND: {backend}')
        current_app.extensions[STORAGE_KEY] = storage
    return storage
