from decimal import Decimal

from flask import current_app, request
from sqlalchemy import or_

from . import expenses_bp
from .forms import ExpenseForm, ExpenseUpdateForm
from extensions import db
from models.categories import Category
from models.expenses import Expense
from services.analytics_service import AnalyticsService
from utils.api import date_arg, int_arg, load_form, success
from utils.db_helpers import get_or_404, get_user_id, user_get_or_404, user_query
from utils.errors import ValidationError

UPDATABLE_FIELDS = (
    'amount', 'date', 'category_id', 'description', 'payment_method',
    'location', 'is_recurring', 'recurring_frequency', 'original_currency',
)


def _filtered_query():
    """Owner's expenses narrowed by the common query string filters"""
    query = user_query(Expense)

    category_id = int_arg('categoryId', min_value=1)
    if category_id is not None:
        query = query.filter(Expense.category_id == category_id)

    start_date = date_arg('startDate')
    if start_date is not None:
        query = query.filter(Expense.date >= start_date)
    end_date = date_arg('endDate')
    if end_date is not None:
        query = query.filter(Expense.date <= end_date)

    min_amount = _decimal_arg('minAmount')
    if min_amount is not None:
        query = query.filter(Expense.amount >= min_amount)
    max_amount = _decimal_arg('maxAmount')
    if max_amount is not None:
        query = query.filter(Expense.amount <= max_amount)

    return query


def _decimal_arg(name):
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        return Decimal(raw)
    except ArithmeticError:
        raise ValidationError(f'{name} must be a number')


def _ordered(query):
    return query.order_by(Expense.date.desc(), Expense.created_at.desc(), Expense.id.desc())


@expenses_bp.route('', methods=['GET'])
def list_expenses():
    """List expenses, newest first, with optional filters and paging"""
    limit = int_arg('limit', current_app.config.get('MAX_RECORDS_PER_PAGE', 100), 1, 1000)
    offset = int_arg('offset', 0, 0)

    query = _filtered_query()
    total = query.count()
    expenses = _ordered(query).offset(offset).limit(limit).all()

    return success({
        'expenses': [expense.to_dict() for expense in expenses],
        'pagination': {'total': total, 'limit': limit, 'offset': offset},
    })


@expenses_bp.route('/<int:expense_id>', methods=['GET'])
def get_expense(expense_id):
    expense = user_get_or_404(Expense, expense_id, 'Expense not found')
    return success(expense.to_dict())


@expenses_bp.route('', methods=['POST'])
def create_expense():
    form, _ = load_form(ExpenseForm)
    get_or_404(Category, form.category_id.data, 'Category not found')

    expense = Expense(
        user_id=get_user_id(),
        amount=form.amount.data,
        date=form.date.data,
        category_id=form.category_id.data,
        description=form.description.data or '',
        payment_method=form.payment_method.data,
        location=form.location.data or '',
        is_recurring=form.is_recurring.data,
        recurring_frequency=form.recurring_frequency.data or 'monthly',
        original_currency=form.original_currency.data or 'USD',
    )
    db.session.add(expense)
    db.session.commit()

    current_app.logger.info(f'Expense created: id={expense.id} amount={expense.amount} category={expense.category_id}')
    return success(expense.to_dict(), 'Expense created successfully', 201)


@expenses_bp.route('/<int:expense_id>', methods=['PUT'])
def update_expense(expense_id):
    expense = user_get_or_404(Expense, expense_id, 'Expense not found')
    form, provided = load_form(ExpenseUpdateForm, require_any=True)

    if 'category_id' in provided and form.category_id.data is not None:
        get_or_404(Category, form.category_id.data, 'Category not found')

    for field in UPDATABLE_FIELDS:
        if field not in provided:
            continue
        value = form[field].data
        if field in ('description', 'location'):
            value = value or ''
        if value is not None:
            setattr(expense, field, value)
    db.session.commit()

    current_app.logger.info(f'Expense updated: id={expense.id} fields={sorted(provided)}')
    return success(expense.to_dict(), 'Expense updated successfully')


@expenses_bp.route('/<int:expense_id>', methods=['DELETE'])
def delete_expense(expense_id):
    expense = user_get_or_404(Expense, expense_id, 'Expense not found')
    db.session.delete(expense)
    db.session.commit()

    current_app.logger.info(f'Expense deleted: id={expense_id}')
    return success(message='Expense deleted successfully')


@expenses_bp.route('/search', methods=['GET'])
def search_expenses():
    """Case-insensitive match on description or payment method"""
    term = (request.args.get('searchTerm') or '').strip()
    if not term:
        raise ValidationError('Search term is required')
    if len(term) > 100:
        raise ValidationError('Search term must be at most 100 characters')

    pattern = f'%{term}%'
    expenses = _ordered(user_query(Expense).filter(or_(
        Expense.description.ilike(pattern),
        Expense.payment_method.ilike(pattern),
    ))).all()

    return success({
        'expenses': [expense.to_dict() for expense in expenses],
        'count': len(expenses),
        'searchTerm': term,
    })


@expenses_bp.route('/date-range', methods=['GET'])
def expenses_by_date_range():
    start_date = date_arg('startDate', required=True)
    end_date = date_arg('endDate', required=True)
    if start_date > end_date:
        raise ValidationError('startDate must be on or before endDate')

    expenses = _ordered(user_query(Expense).filter(
        Expense.date >= start_date,
        Expense.date <= end_date,
    )).all()

    return success({
        'expenses': [expense.to_dict() for expense in expenses],
        'summary': {
            'count': len(expenses),
            'totalAmount': float(AnalyticsService.total(expenses)),
            'startDate': start_date.isoformat(),
            'endDate': end_date.isoformat(),
        },
    })


@expenses_bp.route('/summary', methods=['GET'])
def expenses_summary():
    """Totals grouped by category"""
    expenses = _filtered_query().all()
    categories = AnalyticsService.summarize_by_category(expenses)

    return success({
        'categories': categories,
        'totalAmount': float(AnalyticsService.total(expenses)),
        'totalCount': len(expenses),
    })
