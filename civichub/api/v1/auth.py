"""
Auth API endpoints - registracija, login i trenutni korisnik.
"""

from flask import Blueprint, jsonify, g
from pydantic import ValidationError

from ..schemas import (
    RegisterRequest, LoginRequest, json_body,
    validation_error_response, user_response
)
from ..middleware.auth import jwt_required
from ...services import get_services

# Blueprint za auth endpoints
bp = Blueprint('auth', __name__, url_prefix='/auth')


@bp.route('/register', methods=['POST'])
def register():
    """
    Registracija gradjanina.

    Request body:
        - username, password, name, email

    Returns:
        201: Kreiran korisnik + access token
        400: Validaciona greska
        409: Username ili email vec postoji
    """
    try:
        data = RegisterRequest.model_validate(json_body())
    except ValidationError as e:
        body, status = validation_error_response(e)
        return jsonify(body), status

    services = get_services()
    services.auth.register(data.username, data.password, data.name, data.email)
    user, token = services.auth.login(data.username, data.password)

    return jsonify(user_response(user, token)), 201


@bp.route('/login', methods=['POST'])
def login():
    """
    Login korisnika.

    Request body:
        - username: Username ili email
        - password: Lozinka

    Returns:
        200: Korisnik + access token
        401: Pogresni kredencijali
    """
    try:
        data = LoginRequest.model_validate(json_body())
    except ValidationError as e:
        body, status = validation_error_response(e)
        return jsonify(body), status

    user, token = get_services().auth.login(data.username, data.password)
    return jsonify(user_response(user, token)), 200


@bp.route('/me', methods=['GET'])
@jwt_required
def me():
    """Trenutno ulogovan korisnik."""
    user = get_services().auth.get_user(g.current_user_id)
    return jsonify(user_response(user)), 200
