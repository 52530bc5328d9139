"""
Service registry - servisi jedne aplikacije, povezani sa njenim storage-om.

Registry se pravi lenjo pri prvom pozivu get_services() i cuva u
app.extensions, isto kao storage backend.
"""

from dataclasses import dataclass
from functools import partial

from flask import current_app

from .auth_service import AuthService
from .comment_service import CommentService
from .demo_data import seed_demo_data
from .maintenance_service import MaintenanceService
from .moderation_service import ModerationService, EscalationPolicy
from .report_service import ReportService
from .suggestion_service import SuggestionService
from .vote_service import VoteService
from ..utils.content_filter import ProfanityFilter


SERVICES_KEY = 'civichub.services'


@dataclass
class ServiceRegistry:
    storage: object
    moderation: ModerationService
    auth: AuthService
    suggestions: SuggestionService
    comments: CommentService
    votes: VoteService
    reports: ReportService
    maintenance: MaintenanceService = None


def build_services(storage, config) -> ServiceRegistry:
    """Povezuje servise sa storage-om i config vrednostima (dict-like)."""
    profanity_filter = ProfanityFilter(
        config.get('PROFANITY_WORDS', ()),
        mask_char=config.get('PROFANITY_MASK_CHAR', '*'),
    )
    policy = EscalationPolicy(
        increment=config.get('WARNING_INCREMENT', 1),
        ban_threshold=config.get('BAN_THRESHOLD', 2),
    )
    moderation = ModerationService(storage, profanity_filter, policy)

    registry = ServiceRegistry(
        storage=storage,
        moderation=moderation,
        auth=AuthService(storage),
        suggestions=SuggestionService(
            storage, moderation, default_radius_km=config.get('DEFAULT_RADIUS_KM', 50)
        ),
        comments=CommentService(storage, moderation),
        votes=VoteService(storage),
        reports=ReportService(storage),
    )
    registry.maintenance = MaintenanceService(storage, partial(seed_demo_data, registry))
    return registry


def get_services() -> ServiceRegistry:
    """Vraca registry za trenutnu aplikaciju (lazy loading)."""
    from ..extensions import get_storage

    services = current_app.extensions.get(SERVICES_KEY)
    if services is None:
        services = build_services(get_storage(), current_app.config)
        current_app.extensions[SERVICES_KEY] = services
    return services
