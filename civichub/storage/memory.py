"""
MemoryStorage - storage backend u memoriji procesa.

Koristi se za demo i testove. Entiteti se cuvaju u dict-ovima po
integer ID-u sa monotonim brojacima. Jedan RLock serijalizuje sve
operacije, a transaction() vodi undo log izmenjenih redova i vraca ih
ako blok pukne.
"""

import threading
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime

from .base import Storage, StorageConflict
from .records import (
    UserRecord, SuggestionRecord, SuggestionStatus,
    CommentRecord, VoteRecord, ReportRecord
)


_TABLES = ('users', 'suggestions', 'comments', 'votes', 'reports')

# Oznaka u undo logu za red koji pre transakcije nije postojao
_MISSING = object()


class MemoryStorage(Storage):

    def __init__(self):
        self._lock = threading.RLock()
        self._depth = 0
        self._undo = None
        self._init_tables()

    def _init_tables(self):
        for name in _TABLES:
            setattr(self, f'_{name}', {})
        self._counters = {name: 1 for name in _TABLES}

    def _next_id(self, table):
        value = self._counters[table]
        self._counters[table] = value + 1
        return value

    def _touch(self, table, row_id):
        """Pamti stanje reda pre prve izmene u tekucoj transakciji."""
        if self._undo is None or (table, row_id) in self._undo:
            return
        row = getattr(self, f'_{table}').get(row_id)
        self._undo[(table, row_id)] = replace(row) if row is not None else _MISSING

    def _rollback(self, undo, counters):
        for (table, row_id), previous in undo.items():
            rows = getattr(self, f'_{table}')
            if previous is _MISSING:
                rows.pop(row_id, None)
            else:
                rows[row_id] = previous
        self._counters = counters

    @contextmanager
    def transaction(self):
        with self._lock:
            outermost = self._depth == 0
            if outermost:
                self._undo = {}
                counters = dict(self._counters)
            self._depth += 1
            try:
                yield
            except Exception:
                if outermost:
                    self._rollback(self._undo, counters)
                raise
            finally:
                self._depth -= 1
                if outermost:
                    self._undo = None

    # =========================================================================
    # USERS
    # =========================================================================

    def get_user(self, user_id, for_update=False):
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user else None

    def get_user_by_username(self, username):
        with self._lock:
            for user in self._users.values():
                if user.username.lower() == username.lower():
                    return replace(user)
        return None

    def get_user_by_email(self, email):
        with self._lock:
            for user in self._users.values():
                if user.email.lower() == email.lower():
                    return replace(user)
        return None

    def create_user(self, username, password_hash, name, email, is_admin=False):
        with self.transaction():
            if self.get_user_by_username(username) or self.get_user_by_email(email):
                raise StorageConflict(f'User {username}/{email} already exists')
            user = UserRecord(
                id=self._next_id('users'),
                username=username,
                name=name,
                email=email,
                password_hash=password_hash,
                is_admin=is_admin,
            )
            self._touch('users', user.id)
            self._users[user.id] = user
            return replace(user)

    def increment_warning_count(self, user_id, increment, ban_threshold):
        with self.transaction():
            user = self._users.get(user_id)
            if not user:
                return None
            self._touch('users', user_id)
            user.warning_count += increment
            if user.warning_count >= ban_threshold:
                user.is_banned = True
            return replace(user)

    def set_user_banned(self, user_id, banned=True):
        with self.transaction():
            user = self._users.get(user_id)
            if not user:
                return None
            self._touch('users', user_id)
            user.is_banned = banned
            return replace(user)

    def set_user_location(self, user_id, location):
        with self.transaction():
            user = self._users.get(user_id)
            if not user:
                return None
            self._touch('users', user_id)
            user.location = replace(location)
            return replace(user)

    # =========================================================================
    # SUGGESTIONS
    # =========================================================================

    def get_suggestion(self, suggestion_id, for_update=False):
        with self._lock:
            suggestion = self._suggestions.get(suggestion_id)
            return replace(suggestion) if suggestion else None

    def list_suggestions(self):
        with self._lock:
            return [replace(s) for s in self._suggestions.values()]

    def list_suggestions_by_user(self, user_id):
        with self._lock:
            return [replace(s) for s in self._suggestions.values() if s.user_id == user_id]

    def list_suggestions_by_status(self, status):
        with self._lock:
            return [replace(s) for s in self._suggestions.values() if s.status == status]

    def create_suggestion(self, title, description, user_id, location, photo_url=None):
        with self.transaction():
            suggestion = SuggestionRecord(
                id=self._next_id('suggestions'),
                title=title,
                description=description,
                user_id=user_id,
                location=replace(location) if location else None,
                status=SuggestionStatus.ACTIVE,
                photo_url=photo_url,
                created_at=datetime.utcnow(),
            )
            self._touch('suggestions', suggestion.id)
            self._suggestions[suggestion.id] = suggestion
            return replace(suggestion)

    def set_suggestion_status(self, suggestion_id, status, rejection_reason):
        with self.transaction():
            suggestion = self._suggestions.get(suggestion_id)
            if not suggestion:
                return None
            self._touch('suggestions', suggestion_id)
            suggestion.status = status
            suggestion.rejection_reason = rejection_reason
            return replace(suggestion)

    def adjust_vote_counters(self, suggestion_id, up_delta, down_delta):
        with self.transaction():
            suggestion = self._suggestions.get(suggestion_id)
            if not suggestion:
                return None
            self._touch('suggestions', suggestion_id)
            if suggestion.upvotes + up_delta < 0 or suggestion.downvotes + down_delta < 0:
                raise ValueError(f'Vote counters of suggestion {suggestion_id} would go negative')
            suggestion.upvotes += up_delta
            suggestion.downvotes += down_delta
            return replace(suggestion)

    def delete_suggestion_cascade(self, suggestion_id):
        with self.transaction():
            if suggestion_id not in self._suggestions:
                return None

            comment_ids = {c.id for c in self._comments.values() if c.suggestion_id == suggestion_id}
            report_ids = [
                r.id for r in self._reports.values()
                if r.suggestion_id == suggestion_id or r.comment_id in comment_ids
            ]
            vote_ids = [v.id for v in self._votes.values() if v.suggestion_id == suggestion_id]

            for report_id in report_ids:
                self._touch('reports', report_id)
                del self._reports[report_id]
            for vote_id in vote_ids:
                self._touch('votes', vote_id)
                del self._votes[vote_id]
            for comment_id in comment_ids:
                self._touch('comments', comment_id)
                del self._comments[comment_id]
            self._touch('suggestions', suggestion_id)
            del self._suggestions[suggestion_id]

            return {
                'comments': len(comment_ids),
                'votes': len(vote_ids),
                'reports': len(report_ids),
            }

    # =========================================================================
    # COMMENTS
    # =========================================================================

    def get_comment(self, comment_id):
        with self._lock:
            comment = self._comments.get(comment_id)
            return replace(comment) if comment else None

    def list_comments(self, suggestion_id):
        with self._lock:
            comments = [replace(c) for c in self._comments.values() if c.suggestion_id == suggestion_id]
        return sorted(comments, key=lambda c: (c.created_at, c.id))

    def create_comment(self, content, suggestion_id, user_id, parent_id=None):
        with self.transaction():
            comment = CommentRecord(
                id=self._next_id('comments'),
                content=content,
                suggestion_id=suggestion_id,
                user_id=user_id,
                parent_id=parent_id,
                created_at=datetime.utcnow(),
            )
            self._touch('comments', comment.id)
            self._comments[comment.id] = comment
            return replace(comment)

    # =========================================================================
    # VOTES
    # =========================================================================

    def get_vote(self, user_id, suggestion_id, for_update=False):
        with self._lock:
            for vote in self._votes.values():
                if vote.user_id == user_id and vote.suggestion_id == suggestion_id:
                    return replace(vote)
        return None

    def list_votes(self, suggestion_id):
        with self._lock:
            return [replace(v) for v in self._votes.values() if v.suggestion_id == suggestion_id]

    def create_vote(self, user_id, suggestion_id, is_upvote):
        with self.transaction():
            if self.get_vote(user_id, suggestion_id):
                raise StorageConflict(f'Vote for user {user_id} on suggestion {suggestion_id} exists')
            vote = VoteRecord(
                id=self._next_id('votes'),
                suggestion_id=suggestion_id,
                user_id=user_id,
                is_upvote=is_upvote,
            )
            self._touch('votes', vote.id)
            self._votes[vote.id] = vote
            return replace(vote)

    def set_vote_direction(self, vote_id, is_upvote):
        with self.transaction():
            vote = self._votes[vote_id]
            self._touch('votes', vote_id)
            vote.is_upvote = is_upvote
            return replace(vote)

    # =========================================================================
    # REPORTS
    # =========================================================================

    def get_report(self, report_id):
        with self._lock:
            report = self._reports.get(report_id)
            return replace(report) if report else None

    def list_reports(self, resolved=None):
        with self._lock:
            reports = [
                replace(r) for r in self._reports.values()
                if resolved is None or r.resolved == resolved
            ]
        return sorted(reports, key=lambda r: (r.created_at, r.id), reverse=True)

    def create_report(self, reason, description, user_id, suggestion_id=None,
                      comment_id=None, photo_url=None):
        with self.transaction():
            report = ReportRecord(
                id=self._next_id('reports'),
                reason=reason,
                description=description,
                user_id=user_id,
                suggestion_id=suggestion_id,
                comment_id=comment_id,
                photo_url=photo_url,
                created_at=datetime.utcnow(),
            )
            self._touch('reports', report.id)
            self._reports[report.id] = report
            return replace(report)

    def resolve_report(self, report_id):
        with self.transaction():
            report = self._reports.get(report_id)
            if not report:
                return None
            self._touch('reports', report_id)
            report.resolved = True
            return replace(report)

    # =========================================================================
    # MAINTENANCE
    # =========================================================================

    def reset(self):
        with self._lock:
            self._init_tables()
