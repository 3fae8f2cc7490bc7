"""Initial medication schema

Revision ID: 3c1d9a7e52f0
Revises:
Create Date: 2026-10-19 09:12:44.205318

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c1d9a7e52f0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('user_id', sa.Uuid(), primary_key=True),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50)),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('device_token', sa.String(512)),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_table(
        'patient_clinician',
        sa.Column('patient_id', sa.Uuid(), sa.ForeignKey('users.user_id', ondelete='CASCADE'), primary_key=True),
        sa.Column('clinician_id', sa.Uuid(), sa.ForeignKey('users.user_id', ondelete='CASCADE'), primary_key=True),
        sa.Column('assigned_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_table(
        'patient_family',
        sa.Column('patient_id', sa.Uuid(), sa.ForeignKey('users.user_id', ondelete='CASCADE'), primary_key=True),
        sa.Column('family_id', sa.Uuid(), sa.ForeignKey('users.user_id', ondelete='CASCADE'), primary_key=True),
        sa.Column('assigned_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_table(
        'medication',
        sa.Column('medication_id', sa.Uuid(), primary_key=True),
        sa.Column('patient_id', sa.Uuid(), sa.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False),
        sa.Column('prescriber_id', sa.Uuid(), sa.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('dosage', sa.String(255), nullable=False),
        sa.Column('schedule', sa.Text()),
        sa.Column('description', sa.Text()),
        sa.Column('photo_ref', sa.String(255)),
        sa.Column('notify_family', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_medication_patient_id', 'medication', ['patient_id'])
    op.create_table(
        'consumption_record',
        sa.Column('consumption_id', sa.Uuid(), primary_key=True),
        sa.Column('medication_id', sa.Uuid(), sa.ForeignKey('medication.medication_id', ondelete='CASCADE'),
                  nullable=False),
        sa.Column('patient_id', sa.Uuid(), sa.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('notes', sa.Text()),
        sa.Column('consumed_at', sa.DateTime(), nullable=False),
        sa.Column('scheduled_date', sa.Date(), nullable=False),
        sa.Column('scheduled_time', sa.String(5)),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_consumption_record_scheduled_date', 'consumption_record', ['scheduled_date'])
    op.create_table(
        'notification',
        sa.Column('notification_id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('medication_id', sa.Uuid(), sa.ForeignKey('medication.medication_id', ondelete='CASCADE')),
        sa.Column('scheduled_time', sa.String(5)),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('is_read', sa.Boolean(), server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )


def downgrade():
    op.drop_table('notification')
    op.drop_index('ix_consumption_record_scheduled_date', table_name='consumption_record')
    op.drop_table('consumption_record')
    op.drop_index('ix_medication_patient_id', table_name='medication')
    op.drop_table('medication')
    op.drop_table('patient_family')
    op.drop_table('patient_clinician')
    op.drop_table('users')
