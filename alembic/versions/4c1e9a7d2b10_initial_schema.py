"""initial_schema

Revision ID: 4c1e9a7d2b10
Revises:
Create Date: 2026-10-19 09:12:44.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '4c1e9a7d2b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.Enum('user', 'admin', name='user_role'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('timezone', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'plants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.Enum('vegetable', 'herb', 'fruit', name='plant_category_enum'), nullable=False),
        sa.Column('days_to_sprout', sa.Integer(), nullable=False),
        sa.Column('days_to_harvest', sa.Integer(), nullable=False),
        sa.Column('season', sa.String(length=100), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_plants_name'), 'plants', ['name'], unique=False)

    op.create_table(
        'gardens',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_gardens_user_id'), 'gardens', ['user_id'], unique=False)

    op.create_table(
        'garden_collaborators',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('garden_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('role', sa.Enum('viewer', 'editor', name='collaborator_role'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['garden_id'], ['gardens.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('garden_id', 'user_id', name='uq_garden_collaborator'),
    )
    op.create_index(op.f('ix_garden_collaborators_garden_id'), 'garden_collaborators', ['garden_id'], unique=False)
    op.create_index(op.f('ix_garden_collaborators_user_id'), 'garden_collaborators', ['user_id'], unique=False)

    op.create_table(
        'locations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('garden_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['garden_id'], ['gardens.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_locations_garden_id'), 'locations', ['garden_id'], unique=False)

    op.create_table(
        'plantings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('garden_id', sa.Integer(), nullable=False),
        sa.Column('plant_id', sa.Integer(), nullable=False),
        sa.Column('location', sa.String(length=200), nullable=False),
        sa.Column('location_id', sa.Integer(), nullable=True),
        sa.Column('planted_date', sa.Date(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column(
            'status',
            sa.Enum('planted', 'sprouting', 'growing', 'ready', 'harvested', name='planting_status_enum'),
            nullable=False,
        ),
        sa.Column('harvested_date', sa.Date(), nullable=True),
        sa.Column('harvested_quantity', sa.Integer(), nullable=True),
        sa.Column('harvested_notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['garden_id'], ['gardens.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['location_id'], ['locations.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['plant_id'], ['plants.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_plantings_garden_id'), 'plantings', ['garden_id'], unique=False)
    op.create_index(op.f('ix_plantings_plant_id'), 'plantings', ['plant_id'], unique=False)
    op.create_index(op.f('ix_plantings_location_id'), 'plantings', ['location_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_plantings_location_id'), table_name='plantings')
    op.drop_index(op.f('ix_plantings_plant_id'), table_name='plantings')
    op.drop_index(op.f('ix_plantings_garden_id'), table_name='plantings')
    op.drop_table('plantings')
    op.drop_index(op.f('ix_locations_garden_id'), table_name='locations')
    op.drop_table('locations')
    op.drop_index(op.f('ix_garden_collaborators_user_id'), table_name='garden_collaborators')
    op.drop_index(op.f('ix_garden_collaborators_garden_id'), table_name='garden_collaborators')
    op.drop_table('garden_collaborators')
    op.drop_index(op.f('ix_gardens_user_id'), table_name='gardens')
    op.drop_table('gardens')
    op.drop_index(op.f('ix_plants_name'), table_name='plants')
    op.drop_table('plants')
    op.drop_table('users')

    sa.Enum(name='planting_status_enum').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='collaborator_role').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='plant_category_enum').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='user_role').drop(op.get_bind(), checkfirst=True)
