"""
Shared pytest fixtures for the ExpenseTracker test suite.

All tests run against an in-memory SQLite database (TestingConfig).
A single app context is pushed for the whole session so that SQLAlchemy
objects remain attached throughout.  Each test starts with the default
profile and categories seeded, and clean_db wipes all rows afterwards so
tests are fully independent.
"""
from datetime import date
from decimal import Decimal

import pytest
from flask import g

from app import create_app, seed_initial_data
from extensions import db as _db


# ---------------------------------------------------------------------------
# Application / database lifecycle
# ---------------------------------------------------------------------------

@pytest.fixture(scope='session')
def app():
    """Create a test Flask application with an in-memory SQLite database."""
    application = create_app('testing')
    ctx = application.app_context()
    ctx.push()
    _db.create_all()
    yield application
    _db.session.remove()
    _db.drop_all()
    ctx.pop()


@pytest.fixture(autouse=True)
def clean_db(app):
    """Seed first-run data, then wipe every table after each test."""
    # Flask-Login caches the user on g, which lives as long as the app context
    g.pop('_login_user', None)
    seed_initial_data()
    yield
    _db.session.rollback()
    for table in reversed(_db.metadata.sorted_tables):
        _db.session.execute(table.delete())
    _db.session.commit()
    _db.session.expunge_all()
    g.pop('_login_user', None)


@pytest.fixture
def client(app):
    return app.test_client()


# ---------------------------------------------------------------------------
# Common model helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def user(app):
    """The default profile created at startup."""
    from models.users import User
    return User.query.order_by(User.id).first()


@pytest.fixture
def food(app):
    from models.categories import Category
    return Category.query.filter_by(name='Food & Dining').one()


@pytest.fixture
def transport(app):
    from models.categories import Category
    return Category.query.filter_by(name='Transportation').one()


@pytest.fixture
def make_expense(app, user, food):
    """Return a helper that inserts an expense for the default profile."""
    from models.expenses import Expense

    def _make(amount, on=None, category=None, owner=None, **fields):
        expense = Expense(
            user_id=(owner or user).id,
            category_id=(category or food).id,
            amount=Decimal(str(amount)),
            date=on or date.today(),
            payment_method=fields.pop('payment_method', 'Cash'),
            **fields
        )
        _db.session.add(expense)
        _db.session.commit()
        return expense
    return _make


@pytest.fixture
def make_budget(app, user):
    """Return a helper that inserts a budget for the default profile."""
    from models.budgets import Budget

    def _make(amount, month=None, year=None, category=None, owner=None):
        today = date.today()
        budget = Budget(
            user_id=(owner or user).id,
            category_id=category.id if category is not None else None,
            amount=Decimal(str(amount)),
            month=month or today.month,
            year=year or today.year,
        )
        _db.session.add(budget)
        _db.session.commit()
        return budget
    return _make
