"""Initial schema: users, suggestions, comments, votes, reports

Revision ID: c1v1c0000001
Revises:
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'c1v1c0000001'
down_revision = None
branch_labels = None
depends_on = None


suggestion_status = sa.Enum('ACTIVE', 'IN_PROGRESS', 'DONE', 'REJECTED', name='suggestionstatus')
report_reason = sa.Enum(
    'INAPPROPRIATE', 'SPAM', 'MISLEADING', 'HARASSMENT', 'VIOLENT', 'DUPLICATE',
    'UNFEASIBLE', 'INCORRECT_LOCATION', 'PRIVATE_PROPERTY', 'LEGAL_ISSUE', 'OTHER',
    name='reportreason'
)


def upgrade():
    """Create civic_user, suggestion, suggestion_comment, suggestion_vote, content_report."""

    op.create_table(
        'civic_user',
        sa.Column('id', sa.Integer(), primary_key=True),
        # Auth
        sa.Column('username', sa.String(50), nullable=False),
        sa.Column('email', sa.String(100), nullable=False),
        sa.Column('password_hash', sa.String(200), nullable=False),
        # Profil
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('latitude', sa.Float()),
        sa.Column('longitude', sa.Float()),
        sa.Column('address', sa.String(300)),
        # Uloga i moderacija
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('warning_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_banned', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('warning_count >= 0', name='check_user_warning_count'),
    )
    op.create_index('ix_civic_user_username', 'civic_user', ['username'], unique=True)
    op.create_index('ix_civic_user_email', 'civic_user', ['email'], unique=True)

    op.create_table(
        'suggestion',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('photo_url', sa.String(500)),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('address', sa.String(300)),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('civic_user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', suggestion_status, nullable=False, server_default='ACTIVE'),
        sa.Column('rejection_reason', sa.Text()),
        sa.Column('upvotes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('downvotes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('upvotes >= 0', name='check_suggestion_upvotes'),
        sa.CheckConstraint('downvotes >= 0', name='check_suggestion_downvotes'),
    )
    op.create_index('ix_suggestion_user_id', 'suggestion', ['user_id'])
    op.create_index('ix_suggestion_status', 'suggestion', ['status'])
    op.create_index('ix_suggestion_created_at', 'suggestion', ['created_at'])

    op.create_table(
        'suggestion_comment',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('suggestion_id', sa.Integer(), sa.ForeignKey('suggestion.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('civic_user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('parent_id', sa.Integer(), sa.ForeignKey('suggestion_comment.id', ondelete='CASCADE')),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_suggestion_comment_suggestion_id', 'suggestion_comment', ['suggestion_id'])

    op.create_table(
        'suggestion_vote',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('suggestion_id', sa.Integer(), sa.ForeignKey('suggestion.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('civic_user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_upvote', sa.Boolean(), nullable=False),
        # Najvise jedan glas po (korisnik, predlog)
        sa.UniqueConstraint('user_id', 'suggestion_id', name='uq_vote_user_suggestion'),
    )
    op.create_index('ix_suggestion_vote_suggestion_id', 'suggestion_vote', ['suggestion_id'])

    op.create_table(
        'content_report',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('reason', report_reason, nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('photo_url', sa.String(500)),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('civic_user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('suggestion_id', sa.Integer(), sa.ForeignKey('suggestion.id', ondelete='CASCADE')),
        sa.Column('comment_id', sa.Integer(), sa.ForeignKey('suggestion_comment.id', ondelete='CASCADE')),
        sa.Column('resolved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint(
            '(suggestion_id IS NULL) <> (comment_id IS NULL)',
            name='check_report_single_target'
        ),
    )
    op.create_index('ix_content_report_suggestion_id', 'content_report', ['suggestion_id'])
    op.create_index('ix_content_report_comment_id', 'content_report', ['comment_id'])
    op.create_index('ix_content_report_resolved', 'content_report', ['resolved'])


def downgrade():
    """Drop all tables and enum types."""
    op.drop_table('content_report')
    op.drop_table('suggestion_vote')
    op.drop_table('suggestion_comment')
    op.drop_table('suggestion')
    op.drop_table('civic_user')

    report_reason.drop(op.get_bind(), checkfirst=True)
    suggestion_status.drop(op.get_bind(), checkfirst=True)
