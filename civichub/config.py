"""
Konfiguracija aplikacije - podesavanja za razlicita okruzenja.
Ucitava vrednosti iz environment varijabli sa fallback na defaults.
"""

import os
from datetime import timedelta
from dotenv import load_dotenv

# Ucitaj .env fajl ako postoji
load_dotenv()


# Podrazumevana lista zabranjenih reci - moze se zameniti preko
# PROFANITY_WORDS env varijable (reci odvojene zarezom)
DEFAULT_PROFANITY_WORDS = (
    'ass', 'asshole', 'bastard', 'bitch', 'bullshit', 'crap', 'damn', 'dick', 'douche',
    'dumbass', 'fuck', 'fucking', 'motherfucker', 'piss', 'shit', 'whore',
)


def _split_words(value):
    return tuple(w.strip() for w in value.split(',') if w.strip())


class Config:
    """
    Bazna konfiguracija - zajednicka podesavanja za sva okruzenja.
    """

    # Flask core
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')

    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv(
        'DATABASE_URL',
        'postgresql://localhost:5432/civichub'
    )
    # Heroku koristi postgres:// umesto postgresql://, moramo popraviti
    if SQLALCHEMY_DATABASE_URI.startswith('postgres://'):
        SQLALCHEMY_DATABASE_URI = SQLALCHEMY_DATABASE_URI.replace(
            'postgres://', 'postgresql://', 1
        )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,  # Proveri konekciju pre upotrebe
        'pool_recycle': 300,    # Recikliraj konekcije nakon 5 min
    }

    # Storage backend: 'sql' (produkcija) ili 'memory' (demo/testovi)
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'sql')

    # JWT Authentication
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'jwt-secret-key-change-in-production')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        seconds=int(os.getenv('JWT_ACCESS_TOKEN_EXPIRES', 28800))  # 8 sati default
    )

    # Moderacija sadrzaja
    PROFANITY_WORDS = _split_words(os.getenv('PROFANITY_WORDS', '')) or DEFAULT_PROFANITY_WORDS
    PROFANITY_MASK_CHAR = os.getenv('PROFANITY_MASK_CHAR', '*')

    # Politika upozorenja - koliko upozorenja po prekrsaju i kada se banuje
    WARNING_INCREMENT = int(os.getenv('WARNING_INCREMENT', 1))
    BAN_THRESHOLD = int(os.getenv('BAN_THRESHOLD', 2))

    # Pretraga po lokaciji
    DEFAULT_RADIUS_KM = float(os.getenv('DEFAULT_RADIUS_KM', 50))

    # Demo podaci pri prvom pokretanju
    SEED_DEMO_DATA = os.getenv('SEED_DEMO_DATA', 'false').lower() == 'true'

    # CORS
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*').split(',')

    # Insecure defaults - lista vrednosti koje nikad ne smeju biti u produkciji
    INSECURE_SECRETS = [
        'jwt-secret-key-change-in-production',
        'dev-secret-key-change-in-production',
        'changeme',
        'secret',
    ]


class DevelopmentConfig(Config):
    """
    Razvojna konfiguracija - debug mode ukljucen.
    """
    DEBUG = True
    SQLALCHEMY_ECHO = True  # Loguj SQL upite


class TestingConfig(Config):
    """
    Test konfiguracija - koristi se za pytest.
    """
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    STORAGE_BACKEND = 'sql'
    PROFANITY_WORDS = DEFAULT_PROFANITY_WORDS
    WARNING_INCREMENT = 1
    BAN_THRESHOLD = 2
    SEED_DEMO_DATA = False


def _get_production_cors_origins() -> list:
    """
    Vrati CORS origins za produkciju.
    Nikad ne vraca wildcard.
    """
    origins = os.getenv('CORS_ORIGINS', '')
    if not origins or origins.strip() == '*':
        return []
    return [o.strip() for o in origins.split(',') if o.strip()]


class ProductionConfig(Config):
    """
    Produkciona konfiguracija - stroga bezbednosna podesavanja.

    Validacija secrets se vrsi u validate_production_config() funkciji
    koja se poziva pri startu aplikacije.
    """
    DEBUG = False

    SECRET_KEY = os.getenv('SECRET_KEY', '')
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', '')

    # CORS - Nikad wildcard u produkciji
    CORS_ORIGINS = _get_production_cors_origins()

    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
        'pool_size': 10,
        'max_overflow': 20,
    }


def validate_production_config(app):
    """
    Validira production konfiguraciju pri startu aplikacije.

    Raises:
        ValueError: Ako secrets nisu postavljeni ili su nebezbedni
    """
    if app.config.get('ENV') != 'production' and os.getenv('FLASK_ENV') != 'production':
        return  # Preskoci validaciju ako nismo u produkciji

    insecure_defaults = Config.INSECURE_SECRETS

    for key in ('SECRET_KEY', 'JWT_SECRET_KEY'):
        value = app.config.get(key, '')
        if not value:
            raise ValueError(
                f"CRITICAL: {key} environment variable must be set in production!\n"
                "Generate with: python -c \"import secrets; print(secrets.token_hex(32))\""
            )
        if len(value) < 32:
            raise ValueError(f"{key} must be at least 32 characters")
        for insecure in insecure_defaults:
            if insecure.lower() in value.lower():
                raise ValueError(f"CRITICAL: {key} contains insecure default value!")


def validate_moderation_config(app):
    """
    Validira politiku upozorenja u svakom okruzenju.

    Raises:
        ValueError: Ako WARNING_INCREMENT ili BAN_THRESHOLD nije pozitivan ceo broj
    """
    for key in ('WARNING_INCREMENT', 'BAN_THRESHOLD'):
        value = app.config.get(key)
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError(f"{key} must be a positive integer, got {value!r}")


# Mapiranje imena okruzenja na config klase
config_by_name = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig,
}


def get_config():
    """
    Vraca config klasu na osnovu FLASK_ENV environment varijable.
    Default je development.
    """
    env = os.getenv('FLASK_ENV', 'development')
    return config_by_name.get(env, DevelopmentConfig)
