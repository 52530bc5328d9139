"""
Admin API - moderacija korisnika.
"""

from flask import Blueprint, jsonify

from ..middleware.auth import jwt_required, admin_required
from ...services import get_services

bp = Blueprint('admin_users', __name__, url_prefix='/users')


@bp.route('/<int:user_id>/ban', methods=['POST'])
@jwt_required
@admin_required
def ban_user(user_id):
    """Banuje korisnika nezavisno od broja upozorenja."""
    user = get_services().moderation.ban_user(user_id)
    return jsonify({'user': user.to_dict()}), 200
