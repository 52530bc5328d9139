"""
Admin API - status predloga i pregled po statusu.
"""

from flask import Blueprint, request, jsonify
from pydantic import ValidationError

from ..schemas import StatusUpdateRequest, json_body, validation_error_response
from ..middleware.auth import jwt_required, admin_required
from ...services import get_services
from ...services.suggestion_service import parse_status

bp = Blueprint('admin_suggestions', __name__, url_prefix='/suggestions')


@bp.route('', methods=['GET'])
@jwt_required
@admin_required
def list_by_status():
    """
    Predlozi po statusu.

    Query params:
        - status: ACTIVE, IN_PROGRESS, DONE, REJECTED (default ACTIVE)
    """
    status = parse_status(request.args.get('status', 'ACTIVE'))
    service = get_services().suggestions
    suggestions = service.suggestions_by_status(status)
    return jsonify({
        'status': status.value,
        'suggestions': service.serialize(suggestions),
        'total': len(suggestions),
    }), 200


@bp.route('/<int:suggestion_id>/status', methods=['PATCH'])
@jwt_required
@admin_required
def update_status(suggestion_id):
    """
    Menja status predloga.

    Request body:
        - status: ACTIVE, IN_PROGRESS, DONE, REJECTED
        - rejection_reason: Obavezan za REJECTED
    """
    try:
        data = StatusUpdateRequest.model_validate(json_body())
    except ValidationError as e:
        body, status = validation_error_response(e)
        return jsonify(body), status

    service = get_services().suggestions
    suggestion = service.update_status(
        suggestion_id, data.status,
        rejection_reason=data.rejection_reason,
        caller_is_admin=True,
    )
    return jsonify(service.serialize([suggestion])[0]), 200
