"""create scheduling tables

Revision ID: a1c4e2f9b7d3
Revises:
Create Date: 2026-10-18 09:12:44.381205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'a1c4e2f9b7d3'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # 1. Tenants
    op.create_table(
        'businesses',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('industry', sa.String(100), nullable=True),
        sa.Column('is_active', sa.Boolean, nullable=True, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now())
    )

    # 2. Providers
    op.create_table(
        'providers',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('business_id', sa.Integer, sa.ForeignKey('businesses.id'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('specialty', sa.String(200), nullable=True),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('is_deleted', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now())
    )
    op.create_index('ix_providers_business_id', 'providers', ['business_id'])
    op.create_index('ix_providers_business_active', 'providers', ['business_id', 'is_active', 'is_deleted'])

    # 3. Customers and services
    op.create_table(
        'customers',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('business_id', sa.Integer, sa.ForeignKey('businesses.id'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('is_deleted', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now())
    )
    op.create_index('ix_customers_business_id', 'customers', ['business_id'])

    op.create_table(
        'services',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('business_id', sa.Integer, sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('default_duration', sa.Integer, nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=True),
        sa.Column('is_deleted', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now())
    )
    op.create_index('ix_services_business_id', 'services', ['business_id'])

    # 4. Appointments
    op.create_table(
        'appointments',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('business_id', sa.Integer, sa.ForeignKey('businesses.id'), nullable=False),
        sa.Column('provider_id', sa.Integer, sa.ForeignKey('providers.id'), nullable=False),
        sa.Column('customer_id', sa.Integer, sa.ForeignKey('customers.id'), nullable=True),
        sa.Column('service_id', sa.Integer, sa.ForeignKey('services.id'), nullable=True),
        sa.Column('start_time', sa.DateTime, nullable=False),
        sa.Column('end_time', sa.DateTime, nullable=False),
        sa.Column('notes', sa.Text, nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('is_deleted', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('end_time > start_time', name='ck_appointments_end_after_start')
    )
    op.create_index('ix_appointments_provider_window', 'appointments', ['provider_id', 'start_time', 'end_time'])
    op.create_index('ix_appointments_business_start', 'appointments', ['business_id', 'start_time'])
    op.create_index('ix_appointments_status', 'appointments', ['status'])

    # Two live appointments of one provider may not overlap; [) ranges let them touch
    if op.get_bind().dialect.name == 'postgresql':
        op.execute('CREATE EXTENSION IF NOT EXISTS btree_gist')
        op.execute("""
            ALTER TABLE appointments
            ADD CONSTRAINT ex_appointments_provider_no_overlap
            EXCLUDE USING gist (
                provider_id WITH =,
                tsrange(start_time, end_time, '[)') WITH &&
            )
            WHERE (NOT is_deleted)
        """)

    # 5. Provider schedule versions
    op.create_table(
        'provider_schedules',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('provider_id', sa.Integer, sa.ForeignKey('providers.id'), nullable=False),
        sa.Column('day_of_week', sa.Integer, nullable=False),
        sa.Column('start_time', sa.Time, nullable=False),
        sa.Column('end_time', sa.Time, nullable=False),
        sa.Column('valid_from', sa.Date, nullable=False),
        sa.Column('valid_until', sa.Date, nullable=True),
        sa.Column('is_deleted', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_provider_schedules_day_of_week'),
        sa.CheckConstraint('end_time > start_time', name='ck_provider_schedules_end_after_start')
    )
    op.create_index('ix_provider_schedules_provider_day', 'provider_schedules', ['provider_id', 'day_of_week'])
    op.create_index('ix_provider_schedules_validity', 'provider_schedules',
                    ['provider_id', 'valid_from', 'valid_until'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_provider_schedules_validity', table_name='provider_schedules')
    op.drop_index('ix_provider_schedules_provider_day', table_name='provider_schedules')
    op.drop_table('provider_schedules')

    op.drop_index('ix_appointments_status', table_name='appointments')
    op.drop_index('ix_appointments_business_start', table_name='appointments')
    op.drop_index('ix_appointments_provider_window', table_name='appointments')
    op.drop_table('appointments')

    op.drop_index('ix_services_business_id', table_name='services')
    op.drop_table('services')
    op.drop_index('ix_customers_business_id', table_name='customers')
    op.drop_table('customers')

    op.drop_index('ix_providers_business_active', table_name='providers')
    op.drop_index('ix_providers_business_id', table_name='providers')
    op.drop_table('providers')
    op.drop_table('businesses')
