"""
Database query helpers for owner-scoped data.

Expenses and budgets belong to a user.  Every query against those models
should go through these helpers so that one profile never sees another
profile's records.

The desktop app runs with a single default profile.  Until that profile
turns on password protection, requests without a login session are served
as the default profile; afterwards a Flask-Login session is required.

Usage
-----
In any blueprint route or service function::

    from utils.db_helpers import user_query, user_get_or_404, get_user_id

    expenses = user_query(Expense).order_by(Expense.date.desc()).all()
    budget = user_get_or_404(Budget, budget_id, 'Budget not found')
    expense = Expense(user_id=get_user_id(), ...)
"""

from flask_login import current_user

from extensions import db
from models.users import User
from utils.errors import APIError, NotFoundError


# ---------------------------------------------------------------------------
# Current owner
# ---------------------------------------------------------------------------

def get_default_user():
    """Return the first profile, or ``None`` before first-run setup."""
    return User.query.order_by(User.id).first()


def get_current_user():
    """Return the acting ``User`` for this request, or ``None``."""
    if current_user.is_authenticated:
        return current_user._get_current_object()
    default = get_default_user()
    if default is not None and not default.is_password_protected:
        return default
    return None


def get_user_id():
    """Return the acting user's id, or ``None`` if access is not allowed."""
    user = get_current_user()
    return user.id if user is not None else None


def require_access():
    """``before_request`` hook for API blueprints."""
    if get_user_id() is None:
        raise APIError('Authentication required', 401)


# ---------------------------------------------------------------------------
# Scoped queries
# ---------------------------------------------------------------------------

def user_query(model):
    """Return a query on *model* pre-filtered to the acting user.

    Examples::

        user_query(Expense).all()
        user_query(Budget).filter_by(month=3, year=2026).all()
    """
    if not hasattr(model, 'user_id'):
        raise AttributeError(
            f"user_query() called on {model.__name__} but it has no user_id column."
        )
    uid = get_user_id()
    if uid is None:
        # Return a query that always yields zero rows rather than leaking data
        return model.query.filter(model.id == -1)
    return model.query.filter_by(user_id=uid)


def user_get(model, record_id):
    """Fetch a single record by *record_id*, scoped to the acting user.

    Returns ``None`` if the record does not exist or belongs to someone else.
    """
    uid = get_user_id()
    if uid is None:
        return None
    return model.query.filter_by(id=record_id, user_id=uid).first()


def user_get_or_404(model, record_id, message=None):
    """Like ``user_get`` but raises a 404 ``APIError`` if nothing is found."""
    record = user_get(model, record_id)
    if record is None:
        raise NotFoundError(message or f'{model.__name__} not found')
    return record


def get_or_404(model, record_id, message=None):
    """Fetch an unscoped record (e.g. a shared Category) or raise 404."""
    record = db.session.get(model, record_id)
    if record is None:
        raise NotFoundError(message or f'{model.__name__} not found')
    return record
