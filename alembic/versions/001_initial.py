"""Initial migration

Revision ID: 001
Revises: 
Create Date: 2026-02-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create reservations table
    op.create_table(
        'reservations',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('reservation_number', sa.String(20), unique=True),
        sa.Column('customer_name', sa.String(255), nullable=False),
        sa.Column('customer_phone', sa.String(30), nullable=False),
        sa.Column('customer_email', sa.String(255)),
        sa.Column('reservation_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.String(5), nullable=False),
        sa.Column('end_time', sa.String(5)),
        sa.Column('party_size', sa.Integer(), nullable=False),
        sa.Column('guests_confirmed', sa.Integer()),
        sa.Column('event_type', sa.String(50), default='RESERVA_NORMAL'),
        sa.Column('menu_code', sa.String(50)),
        sa.Column('menu_payload', sa.JSON()),
        sa.Column('dishes_status', sa.String(20), default='pending'),
        sa.Column('status', sa.String(50), nullable=False, default='hold_blocked'),
        sa.Column('canceled_reason', sa.Text()),
        sa.Column('total_amount', sa.Float()),
        sa.Column('deposit_amount', sa.Float()),
        sa.Column('deposit_paid', sa.Boolean(), default=False),
        sa.Column('notes', sa.Text()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )
    op.create_index('ix_reservations_customer_phone', 'reservations', ['customer_phone'])

    # Create messages table
    op.create_table(
        'messages',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('reservation_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('reservations.id'), nullable=False),
        sa.Column('direction', sa.String(20), nullable=False),
        sa.Column('channel', sa.String(20), default='whatsapp'),
        sa.Column('body', sa.Text()),
        sa.Column('raw_payload', sa.JSON()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
    )

    # Create call_logs table
    op.create_table(
        'call_logs',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('reservation_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('reservations.id')),
        sa.Column('phone', sa.String(30)),
        sa.Column('status', sa.String(50), default='initiated'),
        sa.Column('summary', sa.Text()),
        sa.Column('transcript', sa.Text()),
        sa.Column('raw_payload', sa.JSON()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )
    op.create_index('ix_call_logs_created_at', 'call_logs', ['created_at'])

    # Create payments table
    op.create_table(
        'payments',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('reservation_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('reservations.id'), nullable=False),
        sa.Column('method', sa.String(20), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('status', sa.String(20), default='completed'),
        sa.Column('stripe_session_id', sa.String(255)),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
    )
    op.create_index('ix_payments_created_at', 'payments', ['created_at'])

    # Create settings table
    op.create_table(
        'settings',
        sa.Column('key', sa.String(100), primary_key=True),
        sa.Column('value', sa.Text(), nullable=False, default=''),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create employees table
    op.create_table(
        'employees',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('role', sa.String(50), default='camarero'),
        sa.Column('phone', sa.String(30)),
        sa.Column('email', sa.String(255)),
        sa.Column('pin', sa.String(10)),
        sa.Column('active', sa.Boolean(), default=True),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
    )

    # Create shifts table
    op.create_table(
        'shifts',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('employee_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('employees.id'), nullable=False),
        sa.Column('week_start', sa.Date(), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.String(5), nullable=False),
        sa.Column('end_time', sa.String(5), nullable=False),
        sa.Column('notes', sa.Text()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.UniqueConstraint('employee_id', 'week_start', 'day_of_week', name='uq_shift_employee_week_day'),
    )

    # Create menu_catalog table
    op.create_table(
        'menu_catalog',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('code', sa.String(50), unique=True, nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('drinks', sa.String(255)),
        sa.Column('event_types', sa.JSON()),
        sa.Column('choices', sa.JSON()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
    )

    # Create menu_selections table
    op.create_table(
        'menu_selections',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('reservation_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('reservations.id'), nullable=False),
        sa.Column('guest_number', sa.Integer(), nullable=False),
        sa.Column('guest_name', sa.String(255)),
        sa.Column('first_course', sa.String(100)),
        sa.Column('second_course', sa.String(100)),
        sa.Column('dessert', sa.String(100)),
        sa.Column('allergies', sa.Text()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
        sa.UniqueConstraint('reservation_id', 'guest_number', name='uq_selection_reservation_guest'),
    )


def downgrade() -> None:
    op.drop_table('menu_selections')
    op.drop_table('menu_catalog')
    op.drop_table('shifts')
    op.drop_table('employees')
    op.drop_table('settings')
    op.drop_table('payments')
    op.drop_table('call_logs')
    op.drop_table('messages')
    op.drop_table('reservations')
