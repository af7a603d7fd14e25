"""Create directory, credit config, weekly score, quarter score and audit tables

Revision ID: 0001_create_credit_tables
Revises:
Create Date: 2026-10-17
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_create_credit_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    table_names = set(inspector.get_table_names())

    if 'teams' not in table_names:
        op.create_table(
            'teams',
            sa.Column('id', sa.String(64), primary_key=True),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('lead_id', sa.String(64), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
        )
        op.create_index(op.f('ix_teams_id'), 'teams', ['id'], unique=False)

    if 'users' not in table_names:
        op.create_table(
            'users',
            sa.Column('id', sa.String(64), primary_key=True),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=True),
            sa.Column('role', sa.String(20), nullable=False),
            sa.Column('team_id', sa.String(64), sa.ForeignKey('teams.id'), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
        )
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
        op.create_index(op.f('ix_users_team_id'), 'users', ['team_id'], unique=False)

    if 'team_credit_configs' not in table_names:
        op.create_table(
            'team_credit_configs',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('team_id', sa.String(64), sa.ForeignKey('teams.id'), nullable=False),
            sa.Column('ec_weight', sa.Integer(), nullable=False),
            sa.Column('oc_weight', sa.Integer(), nullable=False),
            sa.Column('cc_weight', sa.Integer(), nullable=False),
            sa.Column('updated_by', sa.String(64), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
        )
        op.create_index(op.f('ix_team_credit_configs_team_id'), 'team_credit_configs', ['team_id'], unique=True)

    if 'performance_ratings' not in table_names:
        op.create_table(
            'performance_ratings',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('user_id', sa.String(64), sa.ForeignKey('users.id'), nullable=False),
            sa.Column('multiplier', sa.Float(), nullable=False),
            sa.Column('notes', sa.Text(), nullable=True),
            sa.Column('updated_by', sa.String(64), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
        )
        op.create_index(op.f('ix_performance_ratings_user_id'), 'performance_ratings', ['user_id'], unique=True)

    if 'weekly_scores' not in table_names:
        op.create_table(
            'weekly_scores',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('user_id', sa.String(64), sa.ForeignKey('users.id'), nullable=False),
            sa.Column('week_id', sa.String(8), nullable=False),
            sa.Column('year', sa.Integer(), nullable=False),
            sa.Column('week_number', sa.Integer(), nullable=False),
            sa.Column('hours_worked', sa.Float(), nullable=True),
            sa.Column('ec', sa.Float(), nullable=False),
            sa.Column('oc', sa.Float(), nullable=False),
            sa.Column('cc', sa.Float(), nullable=False),
            sa.Column('wcs', sa.Float(), nullable=False),
            sa.Column('check_mark', sa.Boolean(), nullable=False),
            sa.Column('version', sa.Integer(), nullable=False),
            sa.Column('entered_by', sa.String(64), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.UniqueConstraint('user_id', 'week_id', name='uq_weekly_scores_user_week'),
            sa.CheckConstraint('length(week_id) = 8', name='ck_weekly_scores_week_id_len'),
        )
        op.create_index(op.f('ix_weekly_scores_user_id'), 'weekly_scores', ['user_id'], unique=False)
        op.create_index('idx_weekly_scores_user_year_week', 'weekly_scores', ['user_id', 'year', 'week_number'])

    if 'quarter_scores' not in table_names:
        op.create_table(
            'quarter_scores',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('user_id', sa.String(64), sa.ForeignKey('users.id'), nullable=False),
            sa.Column('year', sa.Integer(), nullable=False),
            sa.Column('quarter', sa.Integer(), nullable=False),
            sa.Column('qs', sa.Float(), nullable=False),
            sa.Column('weeks_counted', sa.Integer(), nullable=False),
            sa.Column('cumulative_check_marks', sa.Integer(), nullable=False),
            sa.Column('assessment', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.UniqueConstraint('user_id', 'year', 'quarter', name='uq_quarter_scores_user_quarter'),
        )
        op.create_index(op.f('ix_quarter_scores_user_id'), 'quarter_scores', ['user_id'], unique=False)

    if 'audit_log' not in table_names:
        op.create_table(
            'audit_log',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('event_type', sa.String(), nullable=False),
            sa.Column('actor_id', sa.String(64), nullable=False),
            sa.Column('user_id', sa.String(64), nullable=True),
            sa.Column('week_id', sa.String(8), nullable=True),
            sa.Column('timestamp', sa.DateTime(), nullable=True),
            sa.Column('request_payload', sa.JSON(), nullable=True),
        )
        op.create_index(op.f('ix_audit_log_event_type'), 'audit_log', ['event_type'], unique=False)
        op.create_index(op.f('ix_audit_log_user_id'), 'audit_log', ['user_id'], unique=False)
        op.create_index(op.f('ix_audit_log_timestamp'), 'audit_log', ['timestamp'], unique=False)


def downgrade():
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    table_names = set(inspector.get_table_names())

    # Children first
    for table in (
        'audit_log',
        'quarter_scores',
        'weekly_scores',
        'performance_ratings',
        'team_credit_configs',
        'users',
        'teams',
    ):
        if table in table_names:
            op.drop_table(table)
