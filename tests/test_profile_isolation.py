"""
Tests for owner-scoped queries.

user_query() and user_get() must never leak one profile's expenses or
budgets to another, and a request with no acting profile must see nothing.
"""
from datetime import date

import pytest

from extensions import db
from models.budgets import Budget
from models.categories import Category
from models.expenses import Expense
from models.users import User
from utils.db_helpers import user_get, user_get_or_404, user_query
from utils.errors import NotFoundError


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def two_user_ids(app, user):
    other = User(username='second')
    db.session.add(other)
    db.session.commit()
    return user.id, other.id


@pytest.fixture
def patch_user(monkeypatch):
    """Return a helper that re-patches get_user_id within a test."""
    def _set(user_id):
        monkeypatch.setattr('utils.db_helpers.get_user_id', lambda: user_id)
    return _set


def _make_expense(user_id, description='Test Expense'):
    e = Expense(
        user_id=user_id,
        category_id=Category.query.first().id,
        amount=10,
        date=date(2026, 3, 1),
        description=description,
    )
    db.session.add(e)
    db.session.commit()
    return e


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestUserQueryIsolation:
    def test_query_returns_own_records_only(self, app, two_user_ids, patch_user):
        u1_id, u2_id = two_user_ids
        _make_expense(u1_id, 'Mine')
        _make_expense(u2_id, 'Theirs')

        patch_user(u1_id)
        descriptions = {e.description for e in user_query(Expense).all()}

        assert descriptions == {'Mine'}, \
            "user_query must not return another profile's records"

    def test_query_excludes_all_records_without_profile(self, app, two_user_ids, patch_user):
        u1_id, _ = two_user_ids
        _make_expense(u1_id)

        patch_user(None)
        assert user_query(Expense).all() == []

    def test_query_on_unowned_model_raises(self, app):
        with pytest.raises(AttributeError):
            user_query(Category)

    def test_budgets_are_scoped_too(self, app, two_user_ids, patch_user):
        u1_id, u2_id = two_user_ids
        db.session.add(Budget(user_id=u2_id, amount=100, month=3, year=2026))
        db.session.commit()

        patch_user(u1_id)
        assert user_query(Budget).count() == 0


class TestUserGetIsolation:
    def test_returns_own_record(self, app, two_user_ids, patch_user):
        u1_id, _ = two_user_ids
        expense = _make_expense(u1_id)

        patch_user(u1_id)
        assert user_get(Expense, expense.id).id == expense.id

    def test_returns_none_for_other_profiles_record(self, app, two_user_ids, patch_user):
        u1_id, u2_id = two_user_ids
        expense = _make_expense(u2_id)

        patch_user(u1_id)
        assert user_get(Expense, expense.id) is None

    def test_get_or_404_raises(self, app, two_user_ids, patch_user):
        u1_id, u2_id = two_user_ids
        expense = _make_expense(u2_id)

        patch_user(u1_id)
        with pytest.raises(NotFoundError):
            user_get_or_404(Expense, expense.id)
