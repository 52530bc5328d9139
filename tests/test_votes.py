"""
Vote ledger - jedan glas po (korisnik, predlog) i brojaci u sinhronizaciji.
"""
import threading

import pytest

from civichub.services import NotFoundError
from civichub.services.vote_service import VoteService, counter_deltas
from civichub.storage.base import StorageConflict
from civichub.storage.memory import MemoryStorage
from tests.conftest import CENTER


def assert_counters_match_votes(storage, suggestion_id):
    """upvotes/downvotes moraju biti jednaki broju glasova po smeru."""
    suggestion = storage.get_suggestion(suggestion_id)
    votes = storage.list_votes(suggestion_id)
    assert suggestion.upvotes == sum(1 for v in votes if v.is_upvote)
    assert suggestion.downvotes == sum(1 for v in votes if not v.is_upvote)


class TestCounterDeltas:

    def test_new_vote(self):
        assert counter_deltas(None, True) == (1, 0)
        assert counter_deltas(None, False) == (0, 1)

    def test_same_direction(self):
        assert counter_deltas(True, True) == (0, 0)
        assert counter_deltas(False, False) == (0, 0)

    def test_flip(self):
        assert counter_deltas(False, True) == (1, -1)
        assert counter_deltas(True, False) == (-1, 1)


class TestCastVote:

    def test_first_upvote(self, services, john, suggestion):
        result = services.votes.cast_vote(john.id, suggestion.id, True)
        assert result.vote.is_upvote is True
        assert result.suggestion.upvotes == 1
        assert result.suggestion.downvotes == 0
        assert_counters_match_votes(services.storage, suggestion.id)

    def test_first_downvote(self, services, john, suggestion):
        result = services.votes.cast_vote(john.id, suggestion.id, False)
        assert result.suggestion.upvotes == 0
        assert result.suggestion.downvotes == 1

    def test_repeat_is_idempotent(self, services, john, suggestion):
        first = services.votes.cast_vote(john.id, suggestion.id, True)
        second = services.votes.cast_vote(john.id, suggestion.id, True)

        assert second.vote.id == first.vote.id
        assert second.suggestion.upvotes == 1
        assert len(services.storage.list_votes(suggestion.id)) == 1

    def test_flip_moves_count(self, services, john, suggestion):
        services.votes.cast_vote(john.id, suggestion.id, True)
        result = services.votes.cast_vote(john.id, suggestion.id, False)

        assert result.vote.is_upvote is False
        assert result.suggestion.upvotes == 0
        assert result.suggestion.downvotes == 1
        assert len(services.storage.list_votes(suggestion.id)) == 1
        assert_counters_match_votes(services.storage, suggestion.id)

    def test_many_flips_keep_invariant(self, services, jane, john, admin, suggestion):
        sequence = [
            (john, True), (admin, False), (john, False), (jane, True),
            (admin, False), (admin, True), (john, True), (jane, False),
        ]
        for user, is_upvote in sequence:
            services.votes.cast_vote(user.id, suggestion.id, is_upvote)
            assert_counters_match_votes(services.storage, suggestion.id)

        final = services.storage.get_suggestion(suggestion.id)
        # john up, admin up, jane down
        assert (final.upvotes, final.downvotes) == (2, 1)

    def test_missing_suggestion(self, services, john):
        with pytest.raises(NotFoundError):
            services.votes.cast_vote(john.id, 9999, True)
        assert services.storage.get_vote(john.id, 9999) is None

    def test_missing_user(self, services, suggestion):
        with pytest.raises(NotFoundError):
            services.votes.cast_vote(9999, suggestion.id, True)

    def test_votes_are_per_suggestion(self, services, jane, john, suggestion):
        other = services.suggestions.create_suggestion(jane.id, 'Bike lane', 'Hill Road', CENTER)
        services.votes.cast_vote(john.id, suggestion.id, True)
        services.votes.cast_vote(john.id, other.id, False)

        assert services.storage.get_suggestion(suggestion.id).upvotes == 1
        assert services.storage.get_suggestion(other.id).downvotes == 1


class _ConflictOnceStorage(MemoryStorage):
    """Simulira paralelni zahtev koji upise isti glas pre nas."""

    def __init__(self, conflicts=1):
        super().__init__()
        self.conflicts = conflicts

    def create_vote(self, user_id, suggestion_id, is_upvote):
        if self.conflicts:
            self.conflicts -= 1
            raise StorageConflict('duplicate vote')
        return super().create_vote(user_id, suggestion_id, is_upvote)


class TestVoteConflictRetry:

    def _setup(self, storage):
        user = storage.create_user('johndoe', 'x', 'John Doe', 'john@example.com')
        suggestion = storage.create_suggestion('Title', 'Text', user.id, CENTER)
        return user, suggestion

    def test_retries_once(self):
        storage = _ConflictOnceStorage(conflicts=1)
        user, suggestion = self._setup(storage)

        result = VoteService(storage).cast_vote(user.id, suggestion.id, True)

        assert result.suggestion.upvotes == 1
        assert_counters_match_votes(storage, suggestion.id)

    def test_gives_up_after_second_conflict(self):
        storage = _ConflictOnceStorage(conflicts=2)
        user, suggestion = self._setup(storage)

        with pytest.raises(StorageConflict):
            VoteService(storage).cast_vote(user.id, suggestion.id, True)

        # Neuspeli pokusaji ne ostavljaju trag
        assert storage.get_suggestion(suggestion.id).upvotes == 0
        assert storage.list_votes(suggestion.id) == []


class TestConcurrentVotes:

    def test_parallel_flips_keep_counters_in_sync(self):
        storage = MemoryStorage()
        owner = storage.create_user('owner', 'x', 'Owner', 'owner@example.com')
        suggestion = storage.create_suggestion('Title', 'Text', owner.id, CENTER)
        voters = [
            storage.create_user(f'voter{i}', 'x', f'Voter {i}', f'voter{i}@example.com')
            for i in range(40)
        ]
        service = VoteService(storage)
        start = threading.Barrier(len(voters))
        errors = []

        def flip(user):
            try:
                start.wait()
                # Poslednji glas u nizu je upvote
                for is_upvote in (True, False, True, False, True):
                    service.cast_vote(user.id, suggestion.id, is_upvote)
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=flip, args=(user,)) for user in voters]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        final = storage.get_suggestion(suggestion.id)
        assert (final.upvotes, final.downvotes) == (40, 0)
        assert len(storage.list_votes(suggestion.id)) == 40
        assert_counters_match_votes(storage, suggestion.id)
