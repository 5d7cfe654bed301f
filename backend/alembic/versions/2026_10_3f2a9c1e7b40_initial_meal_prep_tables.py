"""initial meal prep tables

Revision ID: 3f2a9c1e7b40
Revises:
Create Date: 2026-10-19 09:12:44.118305

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1e7b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

json_list = postgresql.JSONB().with_variant(sa.JSON(), "sqlite")


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=100), nullable=False),
        sa.Column('password', sa.String(length=200), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)

    op.create_table(
        'user_profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('dietary_goals', sa.String(length=50), nullable=False),
        sa.Column('diet_type', sa.String(length=50), nullable=True),
        sa.Column('calories_target', sa.Integer(), nullable=False),
        sa.Column('allergies', json_list, nullable=False),
        sa.Column('cuisine_preferences', json_list, nullable=False,
                  comment='Ordered, first entry is the strongest preference'),
        sa.Column('dislikes', json_list, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index(op.f('ix_user_profiles_id'), 'user_profiles', ['id'], unique=False)

    op.create_table(
        'meal_plans',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('total_weekly_calories', sa.Float(), nullable=False),
        sa.Column('total_weekly_protein', sa.Float(), nullable=False),
        sa.Column('total_weekly_carbs', sa.Float(), nullable=False),
        sa.Column('total_weekly_fat', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_meal_plans_user_id'), 'meal_plans', ['user_id'], unique=False)
    op.create_index(op.f('ix_meal_plans_created_at'), 'meal_plans', ['created_at'], unique=False)

    op.create_table(
        'meals',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('meal_plan_id', sa.String(length=36), nullable=False),
        sa.Column('day', sa.Integer(), nullable=False),
        sa.Column('meal_type', sa.String(length=20), nullable=False),
        sa.Column('recipe_name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=False),
        sa.Column('calories', sa.Float(), nullable=False),
        sa.Column('protein', sa.Float(), nullable=False),
        sa.Column('carbs', sa.Float(), nullable=False),
        sa.Column('fat', sa.Float(), nullable=False),
        sa.Column('is_swapped', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['meal_plan_id'], ['meal_plans.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_meals_meal_plan_id'), 'meals', ['meal_plan_id'], unique=False)

    op.create_table(
        'grocery_lists',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('meal_plan_id', sa.String(length=36), nullable=False),
        sa.Column('meal_id', sa.String(length=36), nullable=True),
        sa.Column('ingredient_name', sa.String(length=255), nullable=False),
        sa.Column('quantity', sa.String(length=100), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('estimated_price', sa.Float(), nullable=False),
        sa.Column('is_bought', sa.Boolean(), nullable=False),
        sa.Column('is_unassigned', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['meal_plan_id'], ['meal_plans.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['meal_id'], ['meals.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_grocery_lists_meal_plan_id'), 'grocery_lists', ['meal_plan_id'], unique=False)
    op.create_index(op.f('ix_grocery_lists_meal_id'), 'grocery_lists', ['meal_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_grocery_lists_meal_id'), table_name='grocery_lists')
    op.drop_index(op.f('ix_grocery_lists_meal_plan_id'), table_name='grocery_lists')
    op.drop_table('grocery_lists')
    op.drop_index(op.f('ix_meals_meal_plan_id'), table_name='meals')
    op.drop_table('meals')
    op.drop_index(op.f('ix_meal_plans_created_at'), table_name='meal_plans')
    op.drop_index(op.f('ix_meal_plans_user_id'), table_name='meal_plans')
    op.drop_table('meal_plans')
    op.drop_index(op.f('ix_user_profiles_id'), table_name='user_profiles')
    op.drop_table('user_profiles')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
