"""
Demo podaci - administrator, dva gradjanina i predlozi oko centra Bengalurua.

Podaci prolaze kroz iste servise kao i pravi zahtevi, pa brojaci glasova
i moderacija vaze i za demo sadrzaj.
"""

import logging

from ..storage.records import Location, SuggestionStatus

logger = logging.getLogger(__name__)


DEMO_PASSWORD = 'password123'
ADMIN_PASSWORD = 'admin123'

DEMO_USERS = (
    # (username, name, email, password, is_admin)
    ('admin', 'Admin User', 'admin@example.com', ADMIN_PASSWORD, True),
    ('janesmith', 'Jane Smith', 'jane@example.com', DEMO_PASSWORD, False),
    ('johndoe', 'John Doe', 'john@example.com', DEMO_PASSWORD, False),
)

# key, autor, naslov, opis, (lat, lng, adresa), status, razlog odbijanja
DEMO_SUGGESTIONS = (
    ('pothole', 'janesmith', 'Fix pothole on Main Street',
     "There's a large pothole that needs to be fixed urgently. It's causing damage to vehicles.",
     (12.9716, 77.5946, 'Main Street, Downtown'), SuggestionStatus.ACTIVE, None),
    ('lights', 'johndoe', 'Install new street lights',
     'The street lights on Park Avenue are not working properly. We need new LED lights '
     'installed for better visibility.',
     (12.9815, 77.6072, 'Park Avenue'), SuggestionStatus.ACTIVE, None),
    ('bike_lane', 'janesmith', 'Add bike lane on Hill Road',
     'With increasing cyclists, we need a dedicated bike lane on Hill Road for safety.',
     (12.9892, 77.5900, 'Hill Road'), SuggestionStatus.IN_PROGRESS, None),
    ('trees', 'johndoe', 'Plant trees near the community center',
     'The area around the community center lacks greenery. We should plant native trees '
     'to improve the environment.',
     (12.9702, 77.6099, 'Community Center'), SuggestionStatus.DONE, None),
    ('skate_park', 'janesmith', 'Build a skate park in residential area',
     'We need a skate park for the youth in our residential area. It would provide a good '
     'recreational activity.',
     (12.9659, 77.5976, 'Residential Zone'), SuggestionStatus.REJECTED,
     'Location not suitable due to noise concerns in residential area'),
    ('garden', 'johndoe', 'Create a community garden in Central Park',
     'A community garden would allow residents to grow fresh produce and flowers while '
     'building community connections.',
     (12.9750, 77.5930, 'Central Park'), SuggestionStatus.ACTIVE, None),
    ('wifi', 'janesmith', 'Install public WiFi hotspots in downtown area',
     'Free public WiFi would benefit local businesses, students, tourists, and residents alike.',
     (12.9680, 77.5910, 'Downtown Square'), SuggestionStatus.ACTIVE, None),
    ('dog_park', 'johndoe', 'Create a dog park near Riverside',
     "Many residents have dogs but there's no dedicated space for them to play off-leash.",
     (12.9810, 77.5990, 'Riverside Park'), SuggestionStatus.ACTIVE, None),
    ('playground', 'janesmith', 'Renovate the old playground on Oak Street',
     'The playground equipment is outdated and some items are becoming unsafe.',
     (12.9680, 77.6020, 'Oak Street Park'), SuggestionStatus.ACTIVE, None),
    ('recycling', 'johndoe', 'Add more recycling bins in public areas',
     'To promote environmental responsibility, we need more recycling bins in parks and plazas.',
     (12.9730, 77.6050, 'City-wide'), SuggestionStatus.ACTIVE, None),
)

DEMO_COMMENTS = (
    ('pothole', 'johndoe', 'I noticed this too! The pothole is getting bigger every day.'),
    ('lights', 'janesmith', 'I support this initiative. The current lights are too dim.'),
    ('bike_lane', 'johndoe', 'This would be great for cyclist safety!'),
    ('garden', 'janesmith', "This is exactly what our community needs! I'd love to help with the initial planting."),
    ('garden', 'johndoe', "I can volunteer some time to help maintain the garden once it's established."),
    ('wifi', 'johndoe', "Public WiFi would be fantastic for small businesses like mine."),
    ('wifi', 'janesmith', "I'm concerned about the security implications. Would there be any content filtering?"),
    ('dog_park', 'janesmith', "My dog would love this! There's nowhere safe to let him run currently."),
    ('playground', 'johndoe', 'The playground equipment is definitely showing its age.'),
)

DEMO_VOTES = (
    # (suggestion key, username, is_upvote)
    ('pothole', 'johndoe', True),
    ('lights', 'janesmith', True),
    ('bike_lane', 'johndoe', True),
    ('garden', 'janesmith', True),
    ('garden', 'johndoe', True),
    ('garden', 'admin', True),
    ('wifi', 'johndoe', True),
    ('wifi', 'janesmith', True),
    ('wifi', 'admin', False),
)


def seed_demo_data(services, skip_if_present: bool = False) -> dict:
    """
    Upisuje demo podatke.

    Args:
        services: ServiceRegistry
        skip_if_present: Ne radi nista ako vec postoje predlozi

    Returns:
        Broj upisanih entiteta po tipu
    """
    storage = services.storage
    if skip_if_present and storage.list_suggestions():
        logger.info('Demo data already present, skipping seed')
        return {'users': 0, 'suggestions': 0, 'comments': 0, 'votes': 0}

    users = {}
    for username, name, email, password, is_admin in DEMO_USERS:
        users[username] = services.auth.register(username, password, name, email, is_admin=is_admin)

    suggestions = {}
    for key, author, title, description, (lat, lng, address), status, reason in DEMO_SUGGESTIONS:
        suggestion = services.suggestions.create_suggestion(
            users[author].id, title, description, Location(lat=lat, lng=lng, address=address)
        )
        if status != SuggestionStatus.ACTIVE:
            services.suggestions.update_status(
                suggestion.id, status, rejection_reason=reason, caller_is_admin=True
            )
        suggestions[key] = suggestion

    for key, author, content in DEMO_COMMENTS:
        services.comments.create_comment(users[author].id, suggestions[key].id, content)

    for key, username, is_upvote in DEMO_VOTES:
        services.votes.cast_vote(users[username].id, suggestions[key].id, is_upvote)

    summary = {
        'users': len(users),
        'suggestions': len(suggestions),
        'comments': len(DEMO_COMMENTS),
        'votes': len(DEMO_VOTES),
    }
    logger.info('Demo data seeded: %s', summary)
    return summary
