"""Create initial tables

Revision ID: 000_initial_tables
Revises: 
Create Date: 2026-10-17

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '000_initial_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Organizations first (no foreign keys)
    op.create_table('casa_orgs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('display_name', sa.String(length=255), nullable=True),
        sa.Column('fund_request_email', sa.String(length=120), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )

    # Users of every role share one table
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=256), nullable=True),
        sa.Column('display_name', sa.String(length=255), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('casa_org_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('last_sign_in_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['casa_org_id'], ['casa_orgs.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )
    op.create_index('ix_users_casa_org_id_type', 'users', ['casa_org_id', 'type'])

    op.create_table('casa_cases',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('case_number', sa.String(length=100), nullable=False),
        sa.Column('slug', sa.String(length=120), nullable=False),
        sa.Column('casa_org_id', sa.Integer(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['casa_org_id'], ['casa_orgs.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('case_number', 'casa_org_id', name='uq_casa_cases_case_number_org'),
        sa.UniqueConstraint('slug', 'casa_org_id', name='uq_casa_cases_slug_org')
    )

    op.create_table('case_assignments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('casa_case_id', sa.Integer(), nullable=False),
        sa.Column('volunteer_id', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['casa_case_id'], ['casa_cases.id'], ),
        sa.ForeignKeyConstraint(['volunteer_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_case_assignments_volunteer_id', 'case_assignments', ['volunteer_id'])

    op.create_table('supervisor_volunteers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('supervisor_id', sa.Integer(), nullable=False),
        sa.Column('volunteer_id', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['supervisor_id'], ['users.id'], ),
        sa.ForeignKeyConstraint(['volunteer_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_supervisor_volunteers_volunteer_id_is_active',
                    'supervisor_volunteers', ['volunteer_id', 'is_active'])

    op.create_table('case_contacts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('casa_case_id', sa.Integer(), nullable=False),
        sa.Column('creator_id', sa.Integer(), nullable=False),
        sa.Column('occurred_at', sa.Date(), nullable=False),
        sa.Column('contact_made', sa.Boolean(), nullable=False),
        sa.Column('medium_type', sa.String(length=50), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['casa_case_id'], ['casa_cases.id'], ),
        sa.ForeignKeyConstraint(['creator_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_case_contacts_case_creator_occurred',
                    'case_contacts', ['casa_case_id', 'creator_id', 'occurred_at'])

    op.create_table('fund_requests',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('casa_case_id', sa.Integer(), nullable=True),
        sa.Column('submitter_email', sa.String(length=120), nullable=False),
        sa.Column('youth_name', sa.String(length=255), nullable=True),
        sa.Column('payment_amount', sa.String(length=100), nullable=True),
        sa.Column('deadline', sa.String(length=100), nullable=True),
        sa.Column('request_purpose', sa.Text(), nullable=True),
        sa.Column('payee_name', sa.String(length=255), nullable=True),
        sa.Column('requested_by_and_relationship', sa.String(length=255), nullable=True),
        sa.Column('other_funding_source_sought', sa.Text(), nullable=True),
        sa.Column('impact', sa.Text(), nullable=True),
        sa.Column('extra_information', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['casa_case_id'], ['casa_cases.id'], ),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade():
    op.drop_table('fund_requests')
    op.drop_index('ix_case_contacts_case_creator_occurred', table_name='case_contacts')
    op.drop_table('case_contacts')
    op.drop_index('ix_supervisor_volunteers_volunteer_id_is_active', table_name='supervisor_volunteers')
    op.drop_table('supervisor_volunteers')
    op.drop_index('ix_case_assignments_volunteer_id', table_name='case_assignments')
    op.drop_table('case_assignments')
    op.drop_table('casa_cases')
    op.drop_index('ix_users_casa_org_id_type', table_name='users')
    op.drop_table('users')
    op.drop_table('casa_orgs')
