"""create scores table

Revision ID: 4c1d9e7a2b30
Revises:
Create Date: 2026-10-19 00:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c1d9e7a2b30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)

    # Databases created by the Node.js server already have the table; only add indexes
    if 'scores' not in set(insp.get_table_names()):
        op.create_table(
            'scores',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('initials', sa.Text(), nullable=False),
            sa.Column('score', sa.Integer(), nullable=False),
            sa.Column('uniqueid', sa.Text(), nullable=False),
            sa.Column('timestamp', sa.Integer(), nullable=False),
            sa.CheckConstraint('score >= 0', name='ck_scores_score_non_negative'),
            sqlite_autoincrement=True,
        )

    indexes = {ix['name'] for ix in insp.get_indexes('scores')} if 'scores' in set(insp.get_table_names()) else set()
    if 'ix_scores_uniqueid' not in indexes:
        op.create_index('ix_scores_uniqueid', 'scores', ['uniqueid'])
    if 'ix_scores_score' not in indexes:
        op.create_index('ix_scores_score', 'scores', ['score'])


def downgrade():
    op.drop_index('ix_scores_score', table_name='scores')
    op.drop_index('ix_scores_uniqueid', table_name='scores')
    op.drop_table('scores')
