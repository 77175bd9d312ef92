"""create account, highscore and question tables

Revision ID: 3a7c9e1f2b40
Revises:
Create Date: 2026-10-18 10:20:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3a7c9e1f2b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    # Databases created with `flask db-reset` already have the tables
    if 'account' not in existing_tables:
        op.create_table(
            'account',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=64), nullable=False),
            sa.Column('password_hash', sa.String(length=128), nullable=False),
            sa.Column('access_token', sa.String(length=256), nullable=True),
            sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_account_name', 'account', ['name'], unique=True)
        op.create_index('ix_account_access_token', 'account', ['access_token'], unique=True)

    if 'highscore' not in existing_tables:
        op.create_table(
            'highscore',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=64), nullable=False),
            sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_highscore_name', 'highscore', ['name'], unique=True)

    if 'question' not in existing_tables:
        op.create_table(
            'question',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('question', sa.Text(), nullable=True),
            sa.Column('answers', sa.JSON(), nullable=True),
            sa.Column('correct_answer', sa.JSON(), nullable=True),
            sa.Column('why', sa.Text(), nullable=True),
            sa.PrimaryKeyConstraint('id'),
        )


def downgrade():
    op.drop_table('question')
    op.drop_index('ix_highscore_name', table_name='highscore')
    op.drop_table('highscore')
    op.drop_index('ix_account_access_token', table_name='account')
    op.drop_index('ix_account_name', table_name='account')
    op.drop_table('account')
