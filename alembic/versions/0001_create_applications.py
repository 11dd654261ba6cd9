"""create applications table

Revision ID: 0001_create_applications
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_create_applications'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'applications',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('company', sa.String(length=512), nullable=False),
        sa.Column('position', sa.String(length=512), nullable=False),
        sa.Column('location', sa.String(length=512), nullable=True),
        sa.Column('job_link', sa.String(length=2048), nullable=True),
        sa.Column('source', sa.String(length=255), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('applied_date', sa.Date(), nullable=True),
        sa.Column('follow_up_date', sa.Date(), nullable=True),
        sa.Column('salary_min', sa.Float(), nullable=True),
        sa.Column('salary_max', sa.Float(), nullable=True),
        sa.Column('contact_name', sa.String(length=255), nullable=True),
        sa.Column('contact_email', sa.String(length=320), nullable=True),
        sa.Column('resume_version', sa.String(length=255), nullable=True),
        sa.Column('priority', sa.String(length=16), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        # ids are never handed out twice, even after the newest row is deleted
        sqlite_autoincrement=True,
    )

    # Newest-first listing and status filtering
    op.create_index('ix_applications_created_at', 'applications', ['created_at'])
    op.create_index('ix_applications_status', 'applications', ['status'])


def downgrade() -> None:
    op.drop_index('ix_applications_status', table_name='applications')
    op.drop_index('ix_applications_created_at', table_name='applications')
    op.drop_table('applications')
