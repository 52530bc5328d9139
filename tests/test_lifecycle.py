"""
Zivotni ciklus predloga - statusi, razlog odbijanja i kaskadno brisanje.
"""
import pytest

from civichub.services import NotFoundError, ForbiddenError, ValidationFailedError
from civichub.services.suggestion_service import parse_status, transition
from civichub.storage.records import SuggestionStatus, Location
from tests.conftest import CENTER, NEARBY


class TestTransitions:

    def test_new_suggestion_is_active(self, suggestion):
        assert suggestion.status == SuggestionStatus.ACTIVE
        assert suggestion.rejection_reason is None
        assert (suggestion.upvotes, suggestion.downvotes) == (0, 0)

    def test_progress_then_done(self, services, suggestion):
        s = services.suggestions.update_status(suggestion.id, 'IN_PROGRESS', caller_is_admin=True)
        assert s.status == SuggestionStatus.IN_PROGRESS
        s = services.suggestions.update_status(suggestion.id, SuggestionStatus.DONE, caller_is_admin=True)
        assert s.status == SuggestionStatus.DONE

    def test_non_admin_cannot_change_status(self, services, suggestion):
        with pytest.raises(ForbiddenError):
            services.suggestions.update_status(suggestion.id, 'DONE', caller_is_admin=False)
        assert services.storage.get_suggestion(suggestion.id).status == SuggestionStatus.ACTIVE

    def test_reject_requires_reason(self, services, suggestion):
        with pytest.raises(ValidationFailedError):
            services.suggestions.update_status(suggestion.id, 'REJECTED', caller_is_admin=True)
        with pytest.raises(ValidationFailedError):
            services.suggestions.update_status(
                suggestion.id, 'REJECTED', rejection_reason='   ', caller_is_admin=True
            )
        assert services.storage.get_suggestion(suggestion.id).status == SuggestionStatus.ACTIVE

    def test_reject_records_reason(self, services, suggestion):
        s = services.suggestions.update_status(
            suggestion.id, 'REJECTED', rejection_reason='Noise concerns', caller_is_admin=True
        )
        assert s.status == SuggestionStatus.REJECTED
        assert s.rejection_reason == 'Noise concerns'
        assert services.storage.get_suggestion(suggestion.id).rejection_reason == 'Noise concerns'

    def test_leaving_rejected_clears_reason(self, services, suggestion):
        services.suggestions.update_status(
            suggestion.id, 'REJECTED', rejection_reason='Noise concerns', caller_is_admin=True
        )
        s = services.suggestions.update_status(suggestion.id, 'ACTIVE', caller_is_admin=True)
        assert s.status == SuggestionStatus.ACTIVE
        assert s.rejection_reason is None

    def test_reason_ignored_for_other_targets(self, services, suggestion):
        s = services.suggestions.update_status(
            suggestion.id, 'DONE', rejection_reason='irrelevant', caller_is_admin=True
        )
        assert s.rejection_reason is None

    def test_done_back_to_active_allowed(self, services, suggestion):
        services.suggestions.update_status(suggestion.id, 'DONE', caller_is_admin=True)
        s = services.suggestions.update_status(suggestion.id, 'ACTIVE', caller_is_admin=True)
        assert s.status == SuggestionStatus.ACTIVE

    def test_unknown_status(self, services, suggestion):
        with pytest.raises(ValidationFailedError):
            services.suggestions.update_status(suggestion.id, 'ARCHIVED', caller_is_admin=True)

    def test_missing_suggestion(self, services):
        with pytest.raises(NotFoundError):
            services.suggestions.update_status(9999, 'DONE', caller_is_admin=True)

    def test_by_status_listing(self, services, jane, suggestion):
        other = services.suggestions.create_suggestion(jane.id, 'Bike lane', 'Hill Road', NEARBY)
        services.suggestions.update_status(other.id, 'IN_PROGRESS', caller_is_admin=True)

        active = services.suggestions.suggestions_by_status('ACTIVE')
        in_progress = services.suggestions.suggestions_by_status('in_progress')
        assert [s.id for s in active] == [suggestion.id]
        assert [s.id for s in in_progress] == [other.id]


class TestTransitionFunction:

    def test_parse_status_is_case_insensitive(self):
        assert parse_status('in_progress') == SuggestionStatus.IN_PROGRESS
        assert parse_status(SuggestionStatus.DONE) == SuggestionStatus.DONE

    def test_transition_results(self):
        assert transition(SuggestionStatus.REJECTED, ' too loud ') == (SuggestionStatus.REJECTED, 'too loud')
        assert transition(SuggestionStatus.ACTIVE, 'x') == (SuggestionStatus.ACTIVE, None)


class TestCreateValidation:

    def test_blank_title(self, services, jane):
        with pytest.raises(ValidationFailedError):
            services.suggestions.create_suggestion(jane.id, '  ', 'text', CENTER)

    def test_missing_location(self, services, jane):
        with pytest.raises(ValidationFailedError):
            services.suggestions.create_suggestion(jane.id, 'Title', 'text', None)

    def test_missing_author(self, services):
        with pytest.raises(NotFoundError):
            services.suggestions.create_suggestion(9999, 'Title', 'text', CENTER)


class TestDelete:

    def test_stranger_cannot_delete(self, services, john, suggestion):
        with pytest.raises(ForbiddenError):
            services.suggestions.delete_suggestion(suggestion.id, john.id, caller_is_admin=False)
        assert services.storage.get_suggestion(suggestion.id) is not None

    def test_owner_can_delete(self, services, jane, suggestion):
        services.suggestions.delete_suggestion(suggestion.id, jane.id)
        assert services.storage.get_suggestion(suggestion.id) is None

    def test_admin_can_delete(self, services, admin, suggestion):
        services.suggestions.delete_suggestion(suggestion.id, admin.id, caller_is_admin=True)
        assert services.storage.get_suggestion(suggestion.id) is None

    def test_missing_suggestion(self, services, jane):
        with pytest.raises(NotFoundError):
            services.suggestions.delete_suggestion(9999, jane.id, caller_is_admin=True)

    def test_cascade_removes_children_only_of_deleted_suggestion(self, services, jane, john, admin, suggestion):
        storage = services.storage

        first = services.comments.create_comment(john.id, suggestion.id, 'I noticed this too!')
        services.comments.create_comment(jane.id, suggestion.id, 'Thanks', parent_id=first.id)
        for user, is_upvote in ((jane, True), (john, True), (admin, False)):
            services.votes.cast_vote(user.id, suggestion.id, is_upvote)
        services.reports.create_report(admin.id, 'spam', comment_id=first.id)
        services.reports.create_report(john.id, 'duplicate', suggestion_id=suggestion.id)

        # Drugi predlog sa svojim komentarom, glasom i prijavom ostaje netaknut
        other = services.suggestions.create_suggestion(john.id, 'Street lights', 'Park Avenue', NEARBY)
        other_comment = services.comments.create_comment(jane.id, other.id, 'Agreed')
        services.votes.cast_vote(jane.id, other.id, True)
        other_report = services.reports.create_report(jane.id, 'other', comment_id=other_comment.id)

        removed = services.suggestions.delete_suggestion(suggestion.id, jane.id)

        assert removed == {'comments': 2, 'votes': 3, 'reports': 2}
        assert storage.get_suggestion(suggestion.id) is None
        assert storage.list_comments(suggestion.id) == []
        assert storage.list_votes(suggestion.id) == []
        assert storage.get_comment(first.id) is None
        assert [r.id for r in storage.list_reports()] == [other_report.id]

        assert storage.get_suggestion(other.id).upvotes == 1
        assert [c.id for c in storage.list_comments(other.id)] == [other_comment.id]
        assert len(storage.list_votes(other.id)) == 1


class TestTransaction:

    def test_failed_block_leaves_no_writes(self, services, jane, suggestion):
        storage = services.storage
        with pytest.raises(RuntimeError):
            with storage.transaction():
                storage.create_comment('half written', suggestion.id, jane.id)
                storage.adjust_vote_counters(suggestion.id, 1, 0)
                raise RuntimeError('boom')

        assert storage.list_comments(suggestion.id) == []
        assert storage.get_suggestion(suggestion.id).upvotes == 0

    def test_nested_blocks_commit_together(self, services, jane, suggestion):
        storage = services.storage
        with storage.transaction():
            with storage.transaction():
                storage.create_comment('inner', suggestion.id, jane.id)
            storage.create_comment('outer', suggestion.id, jane.id)

        assert [c.content for c in storage.list_comments(suggestion.id)] == ['inner', 'outer']

    def test_location_with_address_is_stored(self, services, jane):
        s = services.suggestions.create_suggestion(
            jane.id, 'Title', 'text', Location(12.9892, 77.59, 'Hill Road')
        )
        stored = services.storage.get_suggestion(s.id)
        assert stored.location.address == 'Hill Road'
        assert stored.location.lat == pytest.approx(12.9892)

    def test_failed_block_restores_updates_and_deletes(self, services, jane, john, suggestion):
        storage = services.storage
        comment = services.comments.create_comment(john.id, suggestion.id, 'Agreed')
        services.votes.cast_vote(john.id, suggestion.id, True)

        with pytest.raises(RuntimeError):
            with storage.transaction():
                storage.increment_warning_count(jane.id, 1, 2)
                storage.set_suggestion_status(suggestion.id, SuggestionStatus.DONE, None)
                storage.delete_suggestion_cascade(suggestion.id)
                raise RuntimeError('boom')

        restored = storage.get_suggestion(suggestion.id)
        assert restored.status == SuggestionStatus.ACTIVE
        assert restored.upvotes == 1
        assert [c.id for c in storage.list_comments(suggestion.id)] == [comment.id]
        assert len(storage.list_votes(suggestion.id)) == 1
        assert storage.get_user(jane.id).warning_count == 0
