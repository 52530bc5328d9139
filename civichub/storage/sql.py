"""
SqlStorage - relacioni storage backend nad Flask-SQLAlchemy sesijom.

Atomicnost:
- brojaci glasova se menjaju SQL izrazom (upvotes = upvotes + :delta)
- jedinstvenost glasa cuva UniqueConstraint(user_id, suggestion_id)
- kaskadno brisanje ide kroz jednu transakciju (commit ili rollback)
"""

import threading
from contextlib import contextmanager

from sqlalchemy import case, func, select
from sqlalchemy.exc import IntegrityError

from .base import Storage, StorageConflict
from ..models import User, Suggestion, Comment, Vote, Report


class SqlStorage(Storage):

    def __init__(self, db):
        self.db = db
        self._local = threading.local()

    @property
    def session(self):
        return self.db.session

    @contextmanager
    def transaction(self):
        depth = getattr(self._local, 'depth', 0)
        self._local.depth = depth + 1
        try:
            yield
            if depth == 0:
                self.session.commit()
        except Exception:
            if depth == 0:
                self.session.rollback()
            raise
        finally:
            self._local.depth = depth

    def _locked(self, query, for_update):
        return query.with_for_update() if for_update else query

    def _insert(self, obj):
        """Dodaje red; krsenje unique ogranicenja postaje StorageConflict."""
        self.session.add(obj)
        try:
            self.session.flush()
        except IntegrityError as e:
            # Transakcija je neupotrebljiva, spoljni transaction() radi rollback
            raise StorageConflict(str(e.orig)) from e

    def _refreshed(self, model, pk):
        obj = self.session.get(model, pk)
        if obj is not None:
            self.session.refresh(obj)
        return obj

    # =========================================================================
    # USERS
    # =========================================================================

    def get_user(self, user_id, for_update=False):
        user = self._locked(User.query.filter_by(id=user_id), for_update).first()
        return user.to_record() if user else None

    def get_user_by_username(self, username):
        user = User.query.filter(func.lower(User.username) == username.lower()).first()
        return user.to_record() if user else None

    def get_user_by_email(self, email):
        user = User.query.filter(func.lower(User.email) == email.lower()).first()
        return user.to_record() if user else None

    def create_user(self, username, password_hash, name, email, is_admin=False):
        with self.transaction():
            user = User(
                username=username,
                password_hash=password_hash,
                name=name,
                email=email,
                is_admin=is_admin,
            )
            self._insert(user)
            return user.to_record()

    def increment_warning_count(self, user_id, increment, ban_threshold):
        with self.transaction():
            new_count = User.warning_count + increment
            updated = User.query.filter_by(id=user_id).update({
                User.warning_count: new_count,
                User.is_banned: case((new_count >= ban_threshold, True), else_=User.is_banned),
            }, synchronize_session=False)
            if not updated:
                return None
            return self._refreshed(User, user_id).to_record()

    def set_user_banned(self, user_id, banned=True):
        with self.transaction():
            user = self.session.get(User, user_id)
            if not user:
                return None
            user.is_banned = banned
            self.session.flush()
            return user.to_record()

    def set_user_location(self, user_id, location):
        with self.transaction():
            user = self.session.get(User, user_id)
            if not user:
                return None
            user.latitude = location.lat
            user.longitude = location.lng
            user.address = location.address
            self.session.flush()
            return user.to_record()

    # =========================================================================
    # SUGGESTIONS
    # =========================================================================

    def get_suggestion(self, suggestion_id, for_update=False):
        suggestion = self._locked(Suggestion.query.filter_by(id=suggestion_id), for_update).first()
        return suggestion.to_record() if suggestion else None

    def list_suggestions(self):
        return [s.to_record() for s in Suggestion.query.order_by(Suggestion.id).all()]

    def list_suggestions_by_user(self, user_id):
        suggestions = Suggestion.query.filter_by(user_id=user_id).order_by(Suggestion.id).all()
        return [s.to_record() for s in suggestions]

    def list_suggestions_by_status(self, status):
        suggestions = Suggestion.query.filter_by(status=status).order_by(Suggestion.id).all()
        return [s.to_record() for s in suggestions]

    def create_suggestion(self, title, description, user_id, location, photo_url=None):
        with self.transaction():
            suggestion = Suggestion(
                title=title,
                description=description,
                user_id=user_id,
                latitude=location.lat,
                longitude=location.lng,
                address=location.address,
                photo_url=photo_url,
                upvotes=0,
                downvotes=0,
            )
            self.session.add(suggestion)
            self.session.flush()
            return suggestion.to_record()

    def set_suggestion_status(self, suggestion_id, status, rejection_reason):
        with self.transaction():
            suggestion = self.session.get(Suggestion, suggestion_id)
            if not suggestion:
                return None
            suggestion.status = status
            suggestion.rejection_reason = rejection_reason
            self.session.flush()
            return suggestion.to_record()

    def adjust_vote_counters(self, suggestion_id, up_delta, down_delta):
        with self.transaction():
            updated = Suggestion.query.filter_by(id=suggestion_id).update({
                Suggestion.upvotes: Suggestion.upvotes + up_delta,
                Suggestion.downvotes: Suggestion.downvotes + down_delta,
            }, synchronize_session=False)
            if not updated:
                return None
            return self._refreshed(Suggestion, suggestion_id).to_record()

    def delete_suggestion_cascade(self, suggestion_id):
        with self.transaction():
            if not Suggestion.query.filter_by(id=suggestion_id).count():
                return None

            comment_ids = select(Comment.id).where(Comment.suggestion_id == suggestion_id)

            reports = Report.query.filter(
                (Report.suggestion_id == suggestion_id) |
                Report.comment_id.in_(comment_ids)
            ).delete(synchronize_session=False)
            votes = Vote.query.filter_by(
                suggestion_id=suggestion_id
            ).delete(synchronize_session=False)
            # Odgovori pre roditelja zbog self-referencing FK
            replies = Comment.query.filter(
                Comment.suggestion_id == suggestion_id,
                Comment.parent_id.isnot(None)
            ).delete(synchronize_session=False)
            roots = Comment.query.filter_by(
                suggestion_id=suggestion_id
            ).delete(synchronize_session=False)
            Suggestion.query.filter_by(id=suggestion_id).delete(synchronize_session=False)

            return {
                'comments': replies + roots,
                'votes': votes,
                'reports': reports,
            }

    # =========================================================================
    # COMMENTS
    # =========================================================================

    def get_comment(self, comment_id):
        comment = self.session.get(Comment, comment_id)
        return comment.to_record() if comment else None

    def list_comments(self, suggestion_id):
        comments = Comment.query.filter_by(
            suggestion_id=suggestion_id
        ).order_by(Comment.created_at, Comment.id).all()
        return [c.to_record() for c in comments]

    def create_comment(self, content, suggestion_id, user_id, parent_id=None):
        with self.transaction():
            comment = Comment(
                content=content,
                suggestion_id=suggestion_id,
                user_id=user_id,
                parent_id=parent_id,
            )
            self.session.add(comment)
            self.session.flush()
            return comment.to_record()

    # =========================================================================
    # VOTES
    # =========================================================================

    def get_vote(self, user_id, suggestion_id, for_update=False):
        query = Vote.query.filter_by(user_id=user_id, suggestion_id=suggestion_id)
        vote = self._locked(query, for_update).first()
        return vote.to_record() if vote else None

    def list_votes(self, suggestion_id):
        return [v.to_record() for v in Vote.query.filter_by(suggestion_id=suggestion_id).all()]

    def create_vote(self, user_id, suggestion_id, is_upvote):
        with self.transaction():
            vote = Vote(user_id=user_id, suggestion_id=suggestion_id, is_upvote=is_upvote)
            self._insert(vote)
            return vote.to_record()

    def set_vote_direction(self, vote_id, is_upvote):
        with self.transaction():
            vote = self.session.get(Vote, vote_id)
            vote.is_upvote = is_upvote
            self.session.flush()
            return vote.to_record()

    # =========================================================================
    # REPORTS
    # =========================================================================

    def get_report(self, report_id):
        report = self.session.get(Report, report_id)
        return report.to_record() if report else None

    def list_reports(self, resolved=None):
        query = Report.query
        if resolved is not None:
            query = query.filter_by(resolved=resolved)
        reports = query.order_by(Report.created_at.desc(), Report.id.desc()).all()
        return [r.to_record() for r in reports]

    def create_report(self, reason, description, user_id, suggestion_id=None,
                      comment_id=None, photo_url=None):
        with self.transaction():
            report = Report(
                reason=reason,
                description=description,
                user_id=user_id,
                suggestion_id=suggestion_id,
                comment_id=comment_id,
                photo_url=photo_url,
            )
            self.session.add(report)
            self.session.flush()
            return report.to_record()

    def resolve_report(self, report_id):
        with self.transaction():
            report = self.session.get(Report, report_id)
            if not report:
                return None
            report.resolved = True
            self.session.flush()
            return report.to_record()

    # =========================================================================
    # MAINTENANCE
    # =========================================================================

    def reset(self):
        self.session.remove()
        self.db.drop_all()
        self.db.create_all()
