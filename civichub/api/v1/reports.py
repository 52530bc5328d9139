"""
Reports API - prijava predloga ili komentara.
"""

from flask import Blueprint, jsonify, g
from pydantic import ValidationError

from ..schemas import ReportRequest, json_body, validation_error_response
from ..middleware.auth import jwt_required
from ...services import get_services

bp = Blueprint('reports', __name__, url_prefix='/reports')


@bp.route('', methods=['POST'])
@jwt_required
def create_report():
    """
    Kreira prijavu.

    Request body:
        - reason: inappropriate, spam, misleading, harassment, violent,
          duplicate, unfeasible, incorrect_location, private_property,
          legal_issue, other
        - description (opciono)
        - suggestion_id ILI comment_id (tacno jedan)
        - photo_url (opciono)
    """
    try:
        data = ReportRequest.model_validate(json_body())
    except ValidationError as e:
        body, status = validation_error_response(e)
        return jsonify(body), status

    report = get_services().reports.create_report(
        g.current_user_id,
        data.reason,
        description=data.description,
        suggestion_id=data.suggestion_id,
        comment_id=data.comment_id,
        photo_url=data.photo_url,
    )
    return jsonify(report.to_dict()), 201
