"""
Suggestions API - pretraga, pregled, kreiranje i brisanje predloga.
"""

from flask import Blueprint, request, jsonify, g
from pydantic import ValidationError

from ..schemas import (
    CreateSuggestionRequest, ListSuggestionsQuery, json_body,
    validation_error_response
)
from ..middleware.auth import jwt_required
from ...services import get_services
from ...storage.records import Location

bp = Blueprint('suggestions', __name__, url_prefix='/suggestions')


@bp.route('', methods=['GET'])
def list_suggestions():
    """
    Lista predloga.

    Query params:
        - lat, lng: Lokacija (opciono, obe zajedno)
        - radius: Radius u km (default DEFAULT_RADIUS_KM)
        - q: Pretraga po naslovu, opisu i imenu autora
        - sort: newest (default), hot, distance
    """
    try:
        query = ListSuggestionsQuery.model_validate(request.args.to_dict())
    except ValidationError as e:
        body, status = validation_error_response(e)
        return jsonify(body), status

    service = get_services().suggestions
    suggestions = service.list_suggestions(
        lat=query.lat,
        lng=query.lng,
        radius_km=query.radius,
        query=query.q,
        sort=query.sort,
    )
    return jsonify({
        'suggestions': service.serialize(suggestions),
        'total': len(suggestions),
    }), 200


@bp.route('/<int:suggestion_id>', methods=['GET'])
def get_suggestion(suggestion_id):
    """Jedan predlog sa kratkim prikazom autora."""
    service = get_services().suggestions
    suggestion = service.get_suggestion(suggestion_id)
    return jsonify(service.serialize([suggestion])[0]), 200


@bp.route('', methods=['POST'])
@jwt_required
def create_suggestion():
    """
    Kreira predlog.

    Request body:
        - title, description
        - location: {lat, lng, address?}
        - photo_url (opciono)

    Returns:
        201: Kreiran predlog (tekst je maskiran ako je sadrzao zabranjene reci)
        403: Banovan korisnik
    """
    try:
        data = CreateSuggestionRequest.model_validate(json_body())
    except ValidationError as e:
        body, status = validation_error_response(e)
        return jsonify(body), status

    service = get_services().suggestions
    suggestion = service.create_suggestion(
        g.current_user_id,
        data.title,
        data.description,
        Location(lat=data.location.lat, lng=data.location.lng, address=data.location.address),
        photo_url=data.photo_url,
    )
    return jsonify(service.serialize([suggestion])[0]), 201


@bp.route('/<int:suggestion_id>', methods=['DELETE'])
@jwt_required
def delete_suggestion(suggestion_id):
    """Brise predlog (vlasnik ili admin) sa svim komentarima, glasovima i prijavama."""
    services = get_services()
    caller = services.auth.get_user(g.current_user_id)
    removed = services.suggestions.delete_suggestion(
        suggestion_id, caller.id, caller_is_admin=caller.is_admin
    )
    return jsonify({
        'message': 'Predlog obrisan',
        'deleted': removed,
    }), 200
