"""Patient location

Revision ID: 8f4b2e61d0a3
Revises: 3c1d9a7e52f0
Create Date: 2026-10-19 15:40:07.918244

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '8f4b2e61d0a3'
down_revision = '3c1d9a7e52f0'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'patient_location',
        sa.Column('location_id', sa.Uuid(), primary_key=True),
        sa.Column('patient_id', sa.Uuid(), sa.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('recorded_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_patient_location_patient_id', 'patient_location', ['patient_id'])


def downgrade():
    op.drop_index('ix_patient_location_patient_id', table_name='patient_location')
    op.drop_table('patient_location')
