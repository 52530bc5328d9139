"""
Moderacija - upozorenja, ban na pragu i maskiranje pri objavi.
"""
import pytest

from civichub import create_app
from civichub.config import TestingConfig
from civichub.services import build_services, NotFoundError, ForbiddenError
from civichub.services.moderation_service import EscalationPolicy
from tests.conftest import SERVICE_SETTINGS, CENTER


class TestEscalation:

    def test_first_warning_does_not_ban(self, services, jane):
        user = services.moderation.escalate(jane.id)
        assert user.warning_count == 1
        assert user.is_banned is False

    def test_second_warning_bans(self, services, jane):
        services.moderation.escalate(jane.id)
        user = services.moderation.escalate(jane.id)
        assert user.warning_count == 2
        assert user.is_banned is True

    def test_larger_increment(self, services, jane):
        user = services.moderation.escalate(jane.id, increment=2)
        assert user.warning_count == 2
        assert user.is_banned is True

    def test_increment_must_be_positive(self, services, jane):
        with pytest.raises(ValueError):
            services.moderation.escalate(jane.id, increment=0)
        assert services.storage.get_user(jane.id).warning_count == 0

    def test_missing_user(self, services):
        with pytest.raises(NotFoundError):
            services.moderation.escalate(9999)

    def test_after_write_swallows_missing_user(self, services):
        assert services.moderation.escalate_after_write(9999) is None

    def test_configurable_threshold(self, storage, jane):
        services = build_services(storage, dict(SERVICE_SETTINGS, BAN_THRESHOLD=3))
        services.moderation.escalate(jane.id)
        user = services.moderation.escalate(jane.id)
        assert user.is_banned is False
        user = services.moderation.escalate(jane.id)
        assert user.is_banned is True

    def test_admin_ban(self, services, john):
        user = services.moderation.ban_user(john.id)
        assert user.is_banned is True
        assert user.warning_count == 0

    def test_admin_ban_missing_user(self, services):
        with pytest.raises(NotFoundError):
            services.moderation.ban_user(9999)


class TestModeratedPosting:

    def test_profane_suggestion_is_masked_and_warned(self, services, jane):
        suggestion = services.suggestions.create_suggestion(
            jane.id, 'This shit road', 'Fix the damn pothole', CENTER
        )
        assert suggestion.title == 'This **** road'
        assert suggestion.description == 'Fix the **** pothole'

        stored = services.storage.get_suggestion(suggestion.id)
        assert stored.title == 'This **** road'
        assert services.storage.get_user(jane.id).warning_count == 1

    def test_clean_suggestion_no_warning(self, services, jane):
        services.suggestions.create_suggestion(jane.id, 'Street lights', 'Please add more', CENTER)
        assert services.storage.get_user(jane.id).warning_count == 0

    def test_second_violation_bans_and_blocks_writes(self, services, jane, suggestion):
        services.suggestions.create_suggestion(jane.id, 'crap', 'first', CENTER)
        services.comments.create_comment(jane.id, suggestion.id, 'what a bullshit idea')

        user = services.storage.get_user(jane.id)
        assert user.warning_count == 2
        assert user.is_banned is True

        with pytest.raises(ForbiddenError):
            services.suggestions.create_suggestion(jane.id, 'Clean title', 'Clean text', CENTER)
        with pytest.raises(ForbiddenError):
            services.comments.create_comment(jane.id, suggestion.id, 'clean comment')
        with pytest.raises(ForbiddenError):
            services.votes.cast_vote(jane.id, suggestion.id, True)
        with pytest.raises(ForbiddenError):
            services.reports.create_report(jane.id, 'spam', suggestion_id=suggestion.id)

    def test_banned_user_can_still_read(self, services, jane, suggestion):
        services.moderation.ban_user(jane.id)
        assert services.suggestions.get_suggestion(suggestion.id).id == suggestion.id
        assert services.comments.list_comments(suggestion.id) == []


class TestEscalationPolicy:

    @pytest.mark.parametrize('settings', [
        {'WARNING_INCREMENT': 0},
        {'WARNING_INCREMENT': -1},
        {'BAN_THRESHOLD': 0},
    ])
    def test_invalid_policy_rejected_before_any_write(self, storage, jane, settings):
        with pytest.raises(ValueError):
            build_services(storage, dict(SERVICE_SETTINGS, **settings))
        assert storage.list_suggestions() == []

    def test_policy_defaults(self):
        policy = EscalationPolicy()
        assert (policy.increment, policy.ban_threshold) == (1, 2)

    def test_policy_rejects_non_integers(self):
        with pytest.raises(ValueError):
            EscalationPolicy(increment=1.5)
        with pytest.raises(ValueError):
            EscalationPolicy(ban_threshold=True)

    def test_app_refuses_to_start(self):
        class BrokenConfig(TestingConfig):
            WARNING_INCREMENT = 0

        with pytest.raises(ValueError):
            create_app(BrokenConfig)

    def test_violation_with_valid_policy_never_fails_write(self, storage, jane):
        services = build_services(storage, dict(SERVICE_SETTINGS, WARNING_INCREMENT=3, BAN_THRESHOLD=5))
        suggestion = services.suggestions.create_suggestion(jane.id, 'shit title', 'text', CENTER)
        assert storage.get_suggestion(suggestion.id).title == '**** title'
        assert storage.get_user(jane.id).warning_count == 3
