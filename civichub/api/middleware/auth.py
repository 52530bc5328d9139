"""
Auth middleware - dekoratori za autentifikaciju i autorizaciju.

jwt_required proverava token, admin_required proverava da je korisnik
i dalje administrator u storage-u (token moze biti stariji od promene).
"""

from functools import wraps
from flask import request, g, jsonify
from .jwt_utils import decode_token, extract_token_from_header, TokenType
from ...extensions import get_storage


def jwt_required(f):
    """
    Dekorator koji zahteva validan JWT access token.

    Postavlja g.current_user_id, g.token_payload i g.is_admin.

    Usage:
        @bp.route('/protected')
        @jwt_required
        def protected_route():
            user_id = g.current_user_id
            ...
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        auth_header = request.headers.get('Authorization')
        token = extract_token_from_header(auth_header)

        if not token:
            return jsonify({
                'error': 'Unauthorized',
                'message': 'Token nije prosledjen'
            }), 401

        payload, error = decode_token(token)

        if error:
            return jsonify({
                'error': 'Unauthorized',
                'message': error
            }), 401

        if payload.get('type') != TokenType.ACCESS:
            return jsonify({
                'error': 'Unauthorized',
                'message': 'Ocekivan je access token'
            }), 401

        try:
            user_id = int(payload.get('sub'))
        except (TypeError, ValueError):
            return jsonify({
                'error': 'Unauthorized',
                'message': 'Token ne sadrzi ispravan subject'
            }), 401

        g.current_user_id = user_id
        g.token_payload = payload
        g.is_admin = payload.get('is_admin', False)

        return f(*args, **kwargs)

    return decorated


def admin_required(f):
    """
    Dekorator koji zahteva administratorski pristup.

    MORA se koristiti POSLE @jwt_required dekoratora.
    Ucitava korisnika iz storage-a i postavlja g.current_user.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        if not hasattr(g, 'token_payload'):
            return jsonify({
                'error': 'Internal Error',
                'message': 'admin_required mora biti posle jwt_required'
            }), 500

        user = get_storage().get_user(g.current_user_id)
        if not user or not user.is_admin:
            return jsonify({
                'error': 'Forbidden',
                'message': 'Potreban je admin pristup'
            }), 403

        g.current_user = user
        g.is_admin = True

        return f(*args, **kwargs)

    return decorated
