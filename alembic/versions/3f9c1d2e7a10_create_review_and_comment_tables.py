"""Create review and comment tables

Revision ID: 3f9c1d2e7a10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c1d2e7a10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('review',
        sa.Column('review_id', sa.Integer(), nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False, comment='Movie id in the external metadata API'),
        sa.Column('user_id', sa.String(length=128), nullable=False, comment='Identity provider subject id'),
        sa.Column('rating', sa.Float(), nullable=False, comment='Rating from 0-10'),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('displayname', sa.String(length=200), nullable=True),
        sa.Column('photoUrl', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('rating >= 0 AND rating <= 10', name='ck_review_rating_range'),
        sa.PrimaryKeyConstraint('review_id')
    )
    op.create_index(op.f('ix_review_review_id'), 'review', ['review_id'], unique=False)
    op.create_index(op.f('ix_review_movie_id'), 'review', ['movie_id'], unique=False)
    op.create_index(op.f('ix_review_user_id'), 'review', ['user_id'], unique=False)

    op.create_table('comment',
        sa.Column('comment_id', sa.Integer(), nullable=False),
        sa.Column('review_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=128), nullable=False),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.Column('displayname', sa.String(length=200), nullable=True),
        sa.Column('photoUrl', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['review_id'], ['review.review_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('comment_id')
    )
    op.create_index(op.f('ix_comment_comment_id'), 'comment', ['comment_id'], unique=False)
    op.create_index(op.f('ix_comment_review_id'), 'comment', ['review_id'], unique=False)
    op.create_index(op.f('ix_comment_user_id'), 'comment', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_comment_user_id'), table_name='comment')
    op.drop_index(op.f('ix_comment_review_id'), table_name='comment')
    op.drop_index(op.f('ix_comment_comment_id'), table_name='comment')
    op.drop_table('comment')
    op.drop_index(op.f('ix_review_user_id'), table_name='review')
    op.drop_index(op.f('ix_review_movie_id'), table_name='review')
    op.drop_index(op.f('ix_review_review_id'), table_name='review')
    op.drop_table('review')
