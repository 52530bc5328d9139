"""
Admin API Blueprint - administratorski endpointi.

Svi endpointi u ovom blueprintu zahtevaju JWT korisnika
koji je administrator.
"""

from flask import Blueprint

# Glavni blueprint za admin API
bp = Blueprint('api_admin', __name__)


def register_routes():
    """
    Registruje sve sub-blueprinte za admin API.
    Poziva se iz app factory-ja.
    """
    from . import suggestions, reports, users
    from . import maintenance  # noqa: F401 - rute su direktno na bp

    bp.register_blueprint(suggestions.bp)
    bp.register_blueprint(reports.bp)
    bp.register_blueprint(users.bp)
