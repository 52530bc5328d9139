"""
Comments API - komentari na predloge.
"""

from flask import Blueprint, jsonify, g
from pydantic import ValidationError

from ..schemas import CommentRequest, json_body, validation_error_response
from ..middleware.auth import jwt_required
from ...services import get_services

bp = Blueprint('comments', __name__, url_prefix='/suggestions')


@bp.route('/<int:suggestion_id>/comments', methods=['GET'])
def list_comments(suggestion_id):
    """Komentari predloga, najstariji prvi."""
    service = get_services().comments
    comments = service.list_comments(suggestion_id)
    return jsonify({'comments': service.serialize(comments)}), 200


@bp.route('/<int:suggestion_id>/comments', methods=['POST'])
@jwt_required
def create_comment(suggestion_id):
    """
    Dodaje komentar.

    Request body:
        - content: Tekst komentara
        - parent_id: ID komentara na koji se odgovara (opciono)
    """
    try:
        data = CommentRequest.model_validate(json_body())
    except ValidationError as e:
        body, status = validation_error_response(e)
        return jsonify(body), status

    service = get_services().comments
    comment = service.create_comment(
        g.current_user_id, suggestion_id, data.content, parent_id=data.parent_id
    )
    return jsonify(service.serialize([comment])[0]), 201
