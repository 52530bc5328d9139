"""
V1 API Blueprint - korisnicki endpointi (gradjani).

Citanje predloga i komentara je javno, svi write endpointi
zahtevaju JWT autentifikaciju.
"""

from flask import Blueprint

# Glavni blueprint za v1 API
bp = Blueprint('api_v1', __name__)


def register_routes():
    """
    Registruje sve sub-blueprinte za v1 API.
    Poziva se iz app factory-ja.
    """
    from . import auth, suggestions, comments, votes, reports, profile

    bp.register_blueprint(auth.bp)
    bp.register_blueprint(suggestions.bp)
    bp.register_blueprint(comments.bp)
    bp.register_blueprint(votes.bp)
    bp.register_blueprint(reports.bp)
    bp.register_blueprint(profile.bp)
