"""
Profile API - profil korisnika i poslednja poznata lokacija.
"""

from flask import Blueprint, jsonify, g
from pydantic import ValidationError

from ..schemas import UpdateLocationRequest, json_body, validation_error_response
from ..middleware.auth import jwt_required
from ...services import get_services

bp = Blueprint('profile', __name__, url_prefix='/profile')


@bp.route('', methods=['GET'])
@jwt_required
def get_profile():
    """Korisnik i njegovi predlozi (najnoviji prvi)."""
    services = get_services()
    user = services.auth.get_user(g.current_user_id)
    suggestions = services.suggestions.suggestions_by_user(user.id)
    return jsonify({
        'user': user.to_dict(),
        'suggestions': services.suggestions.serialize(suggestions),
    }), 200


@bp.route('/location', methods=['PUT'])
@jwt_required
def update_location():
    """
    Cuva lokaciju korisnika.

    Request body:
        - lat, lng, address (opciono)
    """
    try:
        data = UpdateLocationRequest.model_validate(json_body())
    except ValidationError as e:
        body, status = validation_error_response(e)
        return jsonify(body), status

    user = get_services().auth.update_location(
        g.current_user_id, data.lat, data.lng, address=data.address
    )
    return jsonify({'user': user.to_dict()}), 200
