from datetime import date

from . import budgets_bp
from .forms import BudgetForm, BudgetUpdateForm
from models.budgets import Budget
from services.budget_service import BudgetService
from utils.api import load_form, period_args, success
from utils.db_helpers import get_user_id, user_get_or_404


def _with_status(budget):
    data = budget.to_dict()
    data['status'] = BudgetService.get_budget_status(budget).to_dict()
    return data


def _budgets_for(month, year):
    budgets = BudgetService.get_budgets_for_period(get_user_id(), month, year)
    return [_with_status(budget) for budget in budgets]


@budgets_bp.route('', methods=['GET'])
def list_budgets():
    """Budgets of a month with their live status"""
    month, year = period_args()
    return success(_budgets_for(month, year))


@budgets_bp.route('/current', methods=['GET'])
def current_budgets():
    today = date.today()
    return success(_budgets_for(today.month, today.year))


@budgets_bp.route('/status', methods=['GET'])
def budget_status():
    month, year = period_args()
    return success(BudgetService.get_status_report(get_user_id(), month, year))


@budgets_bp.route('/alerts', methods=['GET'])
def budget_alerts():
    month, year = period_args()
    alerts = BudgetService.check_budget_alerts(get_user_id(), month, year)
    return success({'alerts': alerts, 'count': len(alerts)})


@budgets_bp.route('/<int:budget_id>', methods=['GET'])
def get_budget(budget_id):
    budget = user_get_or_404(Budget, budget_id, 'Budget not found')
    return success(_with_status(budget))


@budgets_bp.route('', methods=['POST'])
def create_budget():
    form, _ = load_form(BudgetForm)
    budget = BudgetService.create_budget(
        user_id=get_user_id(),
        amount=form.amount.data,
        month=form.month.data,
        year=form.year.data,
        category_id=form.category_id.data,
        original_currency=form.original_currency.data,
    )
    return success(_with_status(budget), 'Budget created successfully', 201)


@budgets_bp.route('/<int:budget_id>', methods=['PUT'])
def update_budget(budget_id):
    budget = user_get_or_404(Budget, budget_id, 'Budget not found')
    form, _ = load_form(BudgetUpdateForm, require_any=True)
    budget = BudgetService.update_budget(
        budget,
        amount=form.amount.data,
        month=form.month.data,
        year=form.year.data,
    )
    return success(_with_status(budget), 'Budget updated successfully')


@budgets_bp.route('/<int:budget_id>', methods=['DELETE'])
def delete_budget(budget_id):
    budget = user_get_or_404(Budget, budget_id, 'Budget not found')
    BudgetService.delete_budget(budget)
    return success(message='Budget deleted successfully')
