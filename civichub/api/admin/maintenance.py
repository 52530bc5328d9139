"""
Admin API - reset baze i demo podaci.
"""

from flask import jsonify
from . import bp
from ..middleware.auth import jwt_required, admin_required
from ...services import get_services


@bp.route('/reset-demo', methods=['POST'])
@jwt_required
@admin_required
def reset_demo():
    """
    Brise sve podatke i ponovo upisuje demo podatke.

    Tokom reseta svi ostali zahtevi dobijaju 503. Posle reseta
    postojeci tokeni vise ne odgovaraju korisnicima, treba se
    ponovo ulogovati (admin / admin123).

    Returns:
        200: Broj upisanih entiteta
        409: Reset je vec u toku
    """
    summary = get_services().maintenance.reset_and_seed()
    return jsonify({
        'message': 'Baza je resetovana i popunjena demo podacima',
        'seeded': summary,
    }), 200
