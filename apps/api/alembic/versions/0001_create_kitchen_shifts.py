"""create members, admins and kitchen shift tables

Revision ID: create_kitchen_shifts
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = 'create_kitchen_shifts'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

WEEKDAYS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday')
SHIFT_TIMES = ('morning', 'evening')
SHIFT_ROLES = ('manager', 'volunteer')

ENUMS = {
    'weekday': WEEKDAYS,
    'shift_time': SHIFT_TIMES,
    'shift_role': SHIFT_ROLES,
}


def _enum(name: str) -> sa.Enum:
    # Postgres types are created once up front and shared by both tables
    values = ENUMS[name]
    return sa.Enum(*values, name=name).with_variant(
        postgresql.ENUM(*values, name=name, create_type=False), 'postgresql'
    )


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        for name, values in ENUMS.items():
            postgresql.ENUM(*values, name=name).create(bind, checkfirst=True)

    op.create_table(
        'members',
        sa.Column('member_id', sa.Uuid(), nullable=False),
        sa.Column('first_name', sa.String(), nullable=False),
        sa.Column('last_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('camp_role', sa.String(), nullable=True),
        sa.Column('is_approved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('member_id'),
    )
    op.create_index(op.f('ix_members_email'), 'members', ['email'], unique=True)

    op.create_table(
        'admins',
        sa.Column('admin_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('admin_id'),
    )
    op.create_index(op.f('ix_admins_email'), 'admins', ['email'], unique=True)

    slots = op.create_table(
        'kitchen_shift_slots',
        sa.Column('day', _enum('weekday'), nullable=False),
        sa.Column('shift_time', _enum('shift_time'), nullable=False),
        sa.PrimaryKeyConstraint('day', 'shift_time'),
    )
    op.bulk_insert(slots, [{'day': d, 'shift_time': t} for d in WEEKDAYS for t in SHIFT_TIMES])

    op.create_table(
        'kitchen_shifts',
        sa.Column('shift_id', sa.Uuid(), nullable=False),
        sa.Column('member_id', sa.Uuid(), nullable=False),
        sa.Column('member_name', sa.String(length=100), nullable=False),
        sa.Column('member_email', sa.String(), nullable=False),
        sa.Column('day', _enum('weekday'), nullable=False),
        sa.Column('shift_time', _enum('shift_time'), nullable=False),
        sa.Column('role', _enum('shift_role'), nullable=False),
        sa.Column('registered_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('shift_id'),
        sa.UniqueConstraint('member_id', 'day', 'shift_time', name='uq_kitchen_shifts_member_slot'),
    )
    op.create_index(op.f('ix_kitchen_shifts_member_id'), 'kitchen_shifts', ['member_id'], unique=False)
    op.create_index('ix_kitchen_shifts_day_shift_time', 'kitchen_shifts', ['day', 'shift_time'], unique=False)
    # At most one manager per slot
    op.create_index(
        'uq_kitchen_shifts_one_manager',
        'kitchen_shifts',
        ['day', 'shift_time'],
        unique=True,
        postgresql_where=sa.text("role = 'manager'"),
        sqlite_where=sa.text("role = 'manager'"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('uq_kitchen_shifts_one_manager', table_name='kitchen_shifts')
    op.drop_index('ix_kitchen_shifts_day_shift_time', table_name='kitchen_shifts')
    op.drop_index(op.f('ix_kitchen_shifts_member_id'), table_name='kitchen_shifts')
    op.drop_table('kitchen_shifts')
    op.drop_table('kitchen_shift_slots')
    op.drop_index(op.f('ix_admins_email'), table_name='admins')
    op.drop_table('admins')
    op.drop_index(op.f('ix_members_email'), table_name='members')
    op.drop_table('members')

    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        for name in ENUMS:
            postgresql.ENUM(name=name).drop(bind, checkfirst=True)
