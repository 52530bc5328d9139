"""
Admin API - pregled i razresavanje prijava.
"""

from flask import Blueprint, request, jsonify

from ..middleware.auth import jwt_required, admin_required
from ...services import get_services, ValidationFailedError

bp = Blueprint('admin_reports', __name__, url_prefix='/reports')


def _parse_resolved(value):
    if value is None or value == '':
        return None
    value = value.strip().lower()
    if value in ('true', '1', 'yes'):
        return True
    if value in ('false', '0', 'no'):
        return False
    raise ValidationFailedError(f'Neispravna vrednost za resolved: {value}')


@bp.route('', methods=['GET'])
@jwt_required
@admin_required
def list_reports():
    """
    Lista prijava, najnovije prve.

    Query params:
        - resolved: true / false (opciono, bez njega sve prijave)
    """
    resolved = _parse_resolved(request.args.get('resolved'))
    reports = get_services().reports.list_reports(resolved=resolved)
    return jsonify({
        'reports': [r.to_dict() for r in reports],
        'total': len(reports),
    }), 200


@bp.route('/<int:report_id>/resolve', methods=['PATCH'])
@jwt_required
@admin_required
def resolve_report(report_id):
    report = get_services().reports.resolve_report(report_id, caller_is_admin=True)
    return jsonify(report.to_dict()), 200
