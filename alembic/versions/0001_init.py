"""init

Revision ID: 0001
Revises:
Create Date: 2025-07-04 10:12:41.532871

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('color', sa.String(), nullable=True),
        sa.Column('password', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_users_name', 'users', ['name'])

    # Create weights table
    op.create_table(
        'weights',
        sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('weight_kg', sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'date', name='uq_weights_user_id_date'),
    )
    op.create_index('idx_weights_date', 'weights', ['date'])


def downgrade():
    op.drop_index('idx_weights_date', table_name='weights')
    op.drop_table('weights')
    op.drop_index('idx_users_name', table_name='users')
    op.drop_table('users')
