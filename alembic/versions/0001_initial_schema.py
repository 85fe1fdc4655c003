"""initial schema: users, teams, team_members, issues

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# 64-bit ids; SQLite only autoincrements INTEGER PRIMARY KEY
ID = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def upgrade() -> None:
    """Create the tables of the User, Team and Issue modules."""
    op.create_table(
        'users',
        sa.Column('id', ID, primary_key=True, autoincrement=True),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('created_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )

    op.create_table(
        'teams',
        sa.Column('id', ID, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_date', sa.DateTime(timezone=True), nullable=False),
    )

    # team_id references teams inside the Team module; user_id belongs to
    # the User module and is deliberately not a foreign key.
    op.create_table(
        'team_members',
        sa.Column('id', ID, primary_key=True, autoincrement=True),
        sa.Column(
            'team_id',
            ID,
            sa.ForeignKey('teams.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('user_id', ID, nullable=False),
        sa.Column('joined_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('role', sa.Integer(), nullable=False),
        sa.UniqueConstraint('team_id', 'user_id', name='uq_team_members_team_user'),
    )
    op.create_index('ix_team_members_user_id', 'team_members', ['user_id'])

    op.create_table(
        'issues',
        sa.Column('id', ID, primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('priority', sa.Integer(), nullable=False),
        sa.Column('assigned_user_id', ID, nullable=True),
        sa.Column('assigned_team_id', ID, nullable=True),
        sa.Column('created_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('resolved_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_modified_date', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_issues_assigned_user_id', 'issues', ['assigned_user_id'])
    op.create_index('ix_issues_assigned_team_id', 'issues', ['assigned_team_id'])
    op.create_index('ix_issues_created_date', 'issues', ['created_date'])


def downgrade() -> None:
    """Drop all ticket system tables."""
    op.drop_index('ix_issues_created_date', table_name='issues')
    op.drop_index('ix_issues_assigned_team_id', table_name='issues')
    op.drop_index('ix_issues_assigned_user_id', table_name='issues')
    op.drop_table('issues')
    op.drop_index('ix_team_members_user_id', table_name='team_members')
    op.drop_table('team_members')
    op.drop_table('teams')
    op.drop_table('users')
