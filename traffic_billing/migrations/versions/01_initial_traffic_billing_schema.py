"""01_initial_traffic_billing_schema

Revision ID: 3f1c9a27d4e0
Revises:
Create Date: 2026-10-19 09:12:40.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a27d4e0'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'driver',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('license_number', sa.String(length=20), nullable=False),
        sa.Column('first_name', sa.String(length=50), nullable=False),
        sa.Column('last_name', sa.String(length=50), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('address', sa.String(length=200), nullable=False),
        sa.Column('city', sa.String(length=50), nullable=False),
        sa.Column('state', sa.String(length=30), nullable=False),
        sa.Column('zip_code', sa.String(length=10), nullable=False),
        sa.Column('phone', sa.String(length=15), nullable=False),
        sa.Column('email', sa.String(length=100), nullable=True),
        sa.Column('license_issue_date', sa.Date(), nullable=False),
        sa.Column('license_expiry_date', sa.Date(), nullable=False),
        sa.Column('license_class', sa.String(length=10), nullable=False),
        *timestamps(),
        sa.CheckConstraint('license_expiry_date > license_issue_date', name='chk_license_dates'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_driver_license_number', 'driver', ['license_number'], unique=True)
    op.create_index('idx_drivers_name', 'driver', ['last_name', 'first_name'])

    op.create_table(
        'officer',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('badge_number', sa.String(length=15), nullable=False),
        sa.Column('first_name', sa.String(length=50), nullable=False),
        sa.Column('last_name', sa.String(length=50), nullable=False),
        sa.Column('department', sa.String(length=50), nullable=False),
        sa.Column('officer_rank', sa.String(length=30), nullable=True),
        sa.Column('hire_date', sa.Date(), nullable=False),
        sa.Column('active_status', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('fk_supervisor_id', sa.Integer(), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(['fk_supervisor_id'], ['officer.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('badge_number'),
    )

    op.create_table(
        'violation_type',
        sa.Column('violation_code', sa.String(length=10), nullable=False),
        sa.Column('description', sa.String(length=200), nullable=False),
        sa.Column('base_fine_amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('is_moving_violation', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('points_assigned', sa.SmallInteger(), nullable=False, server_default='0'),
        *timestamps(),
        sa.CheckConstraint('base_fine_amount > 0', name='chk_fine_amount'),
        sa.CheckConstraint('points_assigned >= 0', name='chk_points'),
        sa.PrimaryKeyConstraint('violation_code'),
    )

    op.create_table(
        'vehicle',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('vin', sa.String(length=17), nullable=False),
        sa.Column('license_plate', sa.String(length=15), nullable=False),
        sa.Column('make', sa.String(length=30), nullable=False),
        sa.Column('model', sa.String(length=30), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('color', sa.String(length=20), nullable=False),
        sa.Column('fk_registered_owner_id', sa.Integer(), nullable=False),
        sa.Column('registration_expiry', sa.Date(), nullable=False),
        sa.Column('insurance_policy_number', sa.String(length=30), nullable=True),
        sa.Column('insurance_expiry', sa.Date(), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(['fk_registered_owner_id'], ['driver.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('vin'),
    )
    op.create_index('ix_vehicle_license_plate', 'vehicle', ['license_plate'], unique=True)

    op.create_table(
        'citation',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('citation_number', sa.String(length=20), nullable=False),
        sa.Column('fk_driver_id', sa.Integer(), nullable=False),
        sa.Column('fk_vehicle_id', sa.Integer(), nullable=True),
        sa.Column('fk_officer_id', sa.Integer(), nullable=False),
        sa.Column('fk_violation_code', sa.String(length=10), nullable=False),
        sa.Column('violation_date', sa.DateTime(), nullable=False),
        sa.Column('violation_location', sa.String(length=200), nullable=False),
        sa.Column('actual_fine_amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('issued_date', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='issued'),
        sa.Column('notes', sa.Text(), nullable=True),
        *timestamps(),
        sa.CheckConstraint('violation_date <= issued_date', name='chk_violation_date'),
        sa.ForeignKeyConstraint(['fk_driver_id'], ['driver.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['fk_vehicle_id'], ['vehicle.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['fk_officer_id'], ['officer.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['fk_violation_code'], ['violation_type.violation_code'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_citation_citation_number', 'citation', ['citation_number'], unique=True)
    op.create_index('ix_citation_fk_driver_id', 'citation', ['fk_driver_id'])
    op.create_index('ix_citation_status', 'citation', ['status'])
    op.create_index('ix_citation_violation_date', 'citation', ['violation_date'])

    op.create_table(
        'payment',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('fk_citation_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('payment_date', sa.DateTime(), nullable=False),
        sa.Column('payment_method', sa.String(length=20), nullable=False),
        sa.Column('received_by', sa.String(length=50), nullable=True),
        sa.Column('transaction_reference', sa.String(length=50), nullable=True),
        *timestamps(),
        sa.CheckConstraint('amount > 0', name='chk_payment_amount'),
        sa.ForeignKeyConstraint(['fk_citation_id'], ['citation.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_payment_fk_citation_id', 'payment', ['fk_citation_id'])

    op.create_table(
        'driver_point',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('fk_driver_id', sa.Integer(), nullable=False),
        sa.Column('fk_citation_id', sa.Integer(), nullable=False),
        sa.Column('points_added', sa.SmallInteger(), nullable=False),
        sa.Column('effective_date', sa.Date(), nullable=False),
        sa.Column('expiration_date', sa.Date(), nullable=False),
        *timestamps(),
        sa.CheckConstraint('expiration_date > effective_date', name='chk_points_date_range'),
        sa.ForeignKeyConstraint(['fk_driver_id'], ['driver.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['fk_citation_id'], ['citation.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_driver_point_fk_driver_id', 'driver_point', ['fk_driver_id'])

    op.create_table(
        'warrant',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('fk_citation_id', sa.Integer(), nullable=False),
        sa.Column('issued_date', sa.Date(), nullable=False),
        sa.Column('amount_due', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
        sa.Column('notes', sa.Text(), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(['fk_citation_id'], ['citation.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_warrant_fk_citation_id', 'warrant', ['fk_citation_id'])


def downgrade() -> None:
    op.drop_index('ix_warrant_fk_citation_id', table_name='warrant')
    op.drop_table('warrant')
    op.drop_index('ix_driver_point_fk_driver_id', table_name='driver_point')
    op.drop_table('driver_point')
    op.drop_index('ix_payment_fk_citation_id', table_name='payment')
    op.drop_table('payment')
    op.drop_index('ix_citation_violation_date', table_name='citation')
    op.drop_index('ix_citation_status', table_name='citation')
    op.drop_index('ix_citation_fk_driver_id', table_name='citation')
    op.drop_index('ix_citation_citation_number', table_name='citation')
    op.drop_table('citation')
    op.drop_index('ix_vehicle_license_plate', table_name='vehicle')
    op.drop_table('vehicle')
    op.drop_table('violation_type')
    op.drop_table('officer')
    op.drop_index('idx_drivers_name', table_name='driver')
    op.drop_index('ix_driver_license_number', table_name='driver')
    op.drop_table('driver')
