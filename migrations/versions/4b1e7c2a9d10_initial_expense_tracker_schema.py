"""Initial expense tracker schema

Revision ID: 4b1e7c2a9d10
Revises:
Create Date: 2026-10-18 09:12:41.118305

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4b1e7c2a9d10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Tables may already exist when the app ran db.create_all() first
    conn = op.get_bind()
    existing = sa.inspect(conn).get_table_names()

    if 'users' not in existing:
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('username', sa.String(length=50), nullable=False),
            sa.Column('password_hash', sa.String(length=255), nullable=True),
            sa.Column('is_password_protected', sa.Boolean(), nullable=False),
            sa.Column('currency', sa.String(length=3), nullable=False),
            sa.Column('theme', sa.String(length=10), nullable=False),
            sa.Column('date_format', sa.String(length=20), nullable=False),
            sa.Column('failed_login_attempts', sa.Integer(), nullable=False),
            sa.Column('locked_until', sa.DateTime(), nullable=True),
            sa.Column('last_login', sa.DateTime(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )

    if 'categories' not in existing:
        op.create_table('categories',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=50), nullable=False),
            sa.Column('color', sa.String(length=7), nullable=False),
            sa.Column('icon', sa.String(length=50), nullable=True),
            sa.Column('is_default', sa.Boolean(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_categories_name'), 'categories', ['name'], unique=True)

    if 'expenses' not in existing:
        op.create_table('expenses',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('category_id', sa.Integer(), nullable=False),
            sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
            sa.Column('date', sa.Date(), nullable=False),
            sa.Column('description', sa.String(length=255), nullable=True),
            sa.Column('payment_method', sa.String(length=50), nullable=False),
            sa.Column('original_currency', sa.String(length=3), nullable=False),
            sa.Column('location', sa.String(length=500), nullable=True),
            sa.Column('is_recurring', sa.Boolean(), nullable=False),
            sa.Column('recurring_frequency', sa.String(length=50), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_expenses_user_id'), 'expenses', ['user_id'], unique=False)
        op.create_index(op.f('ix_expenses_category_id'), 'expenses', ['category_id'], unique=False)
        op.create_index(op.f('ix_expenses_date'), 'expenses', ['date'], unique=False)
        op.create_index('ix_expenses_date_category', 'expenses', ['date', 'category_id'], unique=False)

    if 'budgets' not in existing:
        op.create_table('budgets',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('category_id', sa.Integer(), nullable=True),
            sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
            sa.Column('month', sa.Integer(), nullable=False),
            sa.Column('year', sa.Integer(), nullable=False),
            sa.Column('original_currency', sa.String(length=3), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('category_id', 'month', 'year', 'user_id', name='unique_budget_per_category_month')
        )
        op.create_index(op.f('ix_budgets_user_id'), 'budgets', ['user_id'], unique=False)
        op.create_index('ix_budgets_month_year', 'budgets', ['month', 'year'], unique=False)


def downgrade():
    op.drop_index('ix_budgets_month_year', table_name='budgets')
    op.drop_index(op.f('ix_budgets_user_id'), table_name='budgets')
    op.drop_table('budgets')
    op.drop_index('ix_expenses_date_category', table_name='expenses')
    op.drop_index(op.f('ix_expenses_date'), table_name='expenses')
    op.drop_index(op.f('ix_expenses_category_id'), table_name='expenses')
    op.drop_index(op.f('ix_expenses_user_id'), table_name='expenses')
    op.drop_table('expenses')
    op.drop_index(op.f('ix_categories_name'), table_name='categories')
    op.drop_table('categories')
    op.drop_table('users')
