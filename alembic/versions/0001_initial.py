"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


role_name = postgresql.ENUM('ROLE_TRANSLATOR', 'ROLE_USER', 'ROLE_ADMIN', name='role_name', create_type=False)
call_status = postgresql.ENUM(
    'CONNECT_NOT_SET', 'SUCCESSFUL', 'MISSED_CALL', 'REJECTED', 'FAILED', name='call_status', create_type=False
)
# deposits / withdrawals 공용
transaction_status = postgresql.ENUM('PENDING', 'APPROVED', 'REJECTED', name='transaction_status', create_type=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    role_name.create(bind, checkfirst=True)
    call_status.create(bind, checkfirst=True)
    transaction_status.create(bind, checkfirst=True)

    op.create_table(
        'roles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', role_name, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', name='uq_roles_name'),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=20), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=200), nullable=True),
        sa.Column('last_name', sa.String(length=200), nullable=True),
        sa.Column('balance', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('on_boarding_status', sa.SmallInteger(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'user_roles',
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('role_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id', 'role_id'),
    )

    op.create_table(
        'refresh_tokens',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('token', sa.String(length=512), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_refresh_tokens_token', 'refresh_tokens', ['token'], unique=True)
    op.create_index('ix_refresh_tokens_user_id', 'refresh_tokens', ['user_id'])

    op.create_table(
        'user_profiles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('is_free_call_made', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', name='uq_user_profiles_user_id'),
    )

    op.create_table(
        'languages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', name='uq_languages_name'),
    )

    op.create_table(
        'themes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', name='uq_themes_name'),
    )

    op.create_table(
        'translator_profiles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('email', sa.String(length=320), nullable=True),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('is_online', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('level_of_korean', sa.String(length=200), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', name='uq_translator_profiles_user_id'),
        sa.UniqueConstraint('email', name='uq_translator_profiles_email'),
    )

    op.create_table(
        'translator_languages',
        sa.Column('translator_profile_id', sa.Integer(), nullable=False),
        sa.Column('language_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['translator_profile_id'], ['translator_profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['language_id'], ['languages.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('translator_profile_id', 'language_id'),
    )

    op.create_table(
        'translator_themes',
        sa.Column('translator_profile_id', sa.Integer(), nullable=False),
        sa.Column('theme_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['translator_profile_id'], ['translator_profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['theme_id'], ['themes.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('translator_profile_id', 'theme_id'),
    )

    op.create_table(
        'calls',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('caller_id', sa.Integer(), nullable=False),
        sa.Column('recipient_id', sa.Integer(), nullable=False),
        sa.Column('theme_id', sa.Integer(), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('sum_decimal', sa.Numeric(10, 2), nullable=True),
        sa.Column('commission', sa.Numeric(10, 2), nullable=True),
        sa.Column('translator_has_joined', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('user_has_rated', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('channel_name', sa.String(length=50), nullable=True),
        sa.Column('call_status', call_status, nullable=False, server_default='CONNECT_NOT_SET'),
        sa.Column('is_end_call', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        *_timestamps(),
        sa.ForeignKeyConstraint(['caller_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recipient_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['theme_id'], ['themes.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_calls_caller_id', 'calls', ['caller_id'])
    op.create_index('ix_calls_recipient_id', 'calls', ['recipient_id'])

    op.create_table(
        'ratings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('translator_profile_id', sa.Integer(), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['translator_profile_id'], ['translator_profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('score BETWEEN 1 AND 5', name='ck_ratings_score_range'),
    )
    op.create_index('ix_ratings_user_id', 'ratings', ['user_id'])
    op.create_index('ix_ratings_translator_profile_id', 'ratings', ['translator_profile_id'])

    op.create_table(
        'deposits',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('account_holder', sa.String(length=200), nullable=True),
        sa.Column('name_of_bank', sa.String(length=200), nullable=True),
        sa.Column('coin_decimal', sa.Numeric(10, 2), nullable=True),
        sa.Column('won_decimal', sa.Numeric(10, 2), nullable=True),
        sa.Column('status', transaction_status, nullable=False, server_default='PENDING'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_deposits_user_id', 'deposits', ['user_id'])

    op.create_table(
        'withdrawals',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('account_number', sa.String(length=200), nullable=False),
        sa.Column('account_holder', sa.String(length=200), nullable=False),
        sa.Column('name_of_bank', sa.String(length=200), nullable=False),
        sa.Column('sum_decimal', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', transaction_status, nullable=False, server_default='PENDING'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_withdrawals_user_id', 'withdrawals', ['user_id'])


def downgrade() -> None:
    op.drop_index('ix_withdrawals_user_id', table_name='withdrawals')
    op.drop_table('withdrawals')
    op.drop_index('ix_deposits_user_id', table_name='deposits')
    op.drop_table('deposits')
    op.drop_index('ix_ratings_translator_profile_id', table_name='ratings')
    op.drop_index('ix_ratings_user_id', table_name='ratings')
    op.drop_table('ratings')
    op.drop_index('ix_calls_recipient_id', table_name='calls')
    op.drop_index('ix_calls_caller_id', table_name='calls')
    op.drop_table('calls')
    op.drop_table('translator_themes')
    op.drop_table('translator_languages')
    op.drop_table('translator_profiles')
    op.drop_table('themes')
    op.drop_table('languages')
    op.drop_table('user_profiles')
    op.drop_index('ix_refresh_tokens_user_id', table_name='refresh_tokens')
    op.drop_index('ix_refresh_tokens_token', table_name='refresh_tokens')
    op.drop_table('refresh_tokens')
    op.drop_table('user_roles')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
    op.drop_table('roles')

    bind = op.get_bind()
    transaction_status.drop(bind, checkfirst=True)
    call_status.drop(bind, checkfirst=True)
    role_name.drop(bind, checkfirst=True)
