"""
Votes API - glasanje za ili protiv predloga.
"""

from flask import Blueprint, jsonify, g
from pydantic import ValidationError

from ..schemas import VoteRequest, json_body, validation_error_response
from ..middleware.auth import jwt_required
from ...services import get_services

bp = Blueprint('votes', __name__, url_prefix='/suggestions')


@bp.route('/<int:suggestion_id>/vote', methods=['POST'])
@jwt_required
def cast_vote(suggestion_id):
    """
    Glas za predlog. Ponovljen glas u istom smeru ne menja nista,
    glas u suprotnom smeru prebacuje brojac.

    Request body:
        - is_upvote: true / false

    Returns:
        200: {vote, suggestion} sa azuriranim brojacima
    """
    try:
        data = VoteRequest.model_validate(json_body())
    except ValidationError as e:
        body, status = validation_error_response(e)
        return jsonify(body), status

    result = get_services().votes.cast_vote(g.current_user_id, suggestion_id, data.is_upvote)
    return jsonify(result.to_dict()), 200
