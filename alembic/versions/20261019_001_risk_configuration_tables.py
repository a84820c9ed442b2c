"""Risk configuration and matrix tables - v1.0

Revision ID: 001_risk_configuration_tables
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_risk_configuration_tables'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the configuration tree and matrix tables."""

    # ===== 1. RISK CONFIGURATIONS =====
    op.create_table(
        'risk_configurations',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('organization_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('impact_scale_max', sa.Integer(), nullable=False),
        sa.Column('probability_scale_max', sa.Integer(), nullable=False),
        sa.Column('calculation_method', sa.String(10), nullable=False),
        sa.Column('use_criteria', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_risk_configurations_organization_id', 'risk_configurations', ['organization_id'])
    op.create_index('idx_risk_configurations_org_name', 'risk_configurations', ['organization_id', 'name'])

    # ===== 2. RISK CRITERIA =====
    op.create_table(
        'risk_criteria',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('risk_configuration_id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['risk_configuration_id'], ['risk_configurations.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_risk_criteria_risk_configuration_id', 'risk_criteria', ['risk_configuration_id'])

    # ===== 3. RISK MATRIX CONFIGURATIONS =====
    op.create_table(
        'risk_matrix_configurations',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('organization_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('rows', sa.Integer(), nullable=False),
        sa.Column('columns', sa.Integer(), nullable=False),
        sa.Column('number_of_levels', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_custom', sa.Boolean(), nullable=False),
        sa.Column('preset_used', sa.String(20), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index(
        'ix_risk_matrix_configurations_organization_id',
        'risk_matrix_configurations',
        ['organization_id'],
    )
    # One active matrix per organization
    op.create_index(
        'uq_risk_matrix_active_org',
        'risk_matrix_configurations',
        ['organization_id'],
        unique=True,
        sqlite_where=sa.text('is_active = 1'),
        postgresql_where=sa.text('is_active'),
    )

    # ===== 4. SCALE LEVELS =====
    op.create_table(
        'scale_levels',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('kind', sa.String(20), nullable=False),
        sa.Column('risk_configuration_id', sa.String(36), nullable=True),
        sa.Column('criterion_id', sa.String(36), nullable=True),
        sa.Column('label', sa.String(255), nullable=False),
        sa.Column('score', sa.Numeric(5, 2), nullable=False),
        sa.Column('color', sa.String(7), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['risk_configuration_id'], ['risk_configurations.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['criterion_id'], ['risk_criteria.id'], ondelete='CASCADE'),
        sa.CheckConstraint(
            '(risk_configuration_id IS NULL) <> (criterion_id IS NULL)',
            name='ck_scale_levels_single_owner',
        ),
        sa.UniqueConstraint('risk_configuration_id', 'kind', 'order', name='uq_scale_levels_config_order'),
        sa.UniqueConstraint('criterion_id', 'order', name='uq_scale_levels_criterion_order'),
    )
    op.create_index('ix_scale_levels_risk_configuration_id', 'scale_levels', ['risk_configuration_id'])
    op.create_index('ix_scale_levels_criterion_id', 'scale_levels', ['criterion_id'])

    # ===== 5. SCORE BANDS =====
    op.create_table(
        'score_bands',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('risk_configuration_id', sa.String(36), nullable=True),
        sa.Column('matrix_configuration_id', sa.String(36), nullable=True),
        sa.Column('label', sa.String(255), nullable=False),
        sa.Column('min', sa.Integer(), nullable=False),
        sa.Column('max', sa.Integer(), nullable=False),
        sa.Column('color', sa.String(7), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['risk_configuration_id'], ['risk_configurations.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(
            ['matrix_configuration_id'], ['risk_matrix_configurations.id'], ondelete='CASCADE'
        ),
        sa.CheckConstraint(
            '(risk_configuration_id IS NULL) <> (matrix_configuration_id IS NULL)',
            name='ck_score_bands_single_owner',
        ),
        sa.CheckConstraint('"min" <= "max"', name='ck_score_bands_min_max'),
        sa.UniqueConstraint('risk_configuration_id', 'order', name='uq_score_bands_config_order'),
        sa.UniqueConstraint('matrix_configuration_id', 'order', name='uq_score_bands_matrix_order'),
    )
    op.create_index('ix_score_bands_risk_configuration_id', 'score_bands', ['risk_configuration_id'])
    op.create_index('ix_score_bands_matrix_configuration_id', 'score_bands', ['matrix_configuration_id'])


def downgrade() -> None:
    """Drop all tables in reverse order."""
    op.drop_table('score_bands')
    op.drop_table('scale_levels')
    op.drop_index('uq_risk_matrix_active_org', table_name='risk_matrix_configurations')
    op.drop_table('risk_matrix_configurations')
    op.drop_table('risk_criteria')
    op.drop_table('risk_configurations')
