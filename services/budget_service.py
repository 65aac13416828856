"""
Budget Service
==============
Point-in-time budget status: how much of a monthly budget has been spent,
what remains, the percentage used and the resulting alert level.

Status is never stored.  It is recomputed on every request from the expenses
recorded at that moment, in two steps:

  fetch_expenses()  - the I/O: the owner's expenses inside the budget period,
                      narrowed to the budget's category unless it is the
                      "total" budget.
  evaluate()        - the policy: a pure function of the budget amount and
                      the fetched expenses.

Alert levels
------------
  percentage > 100        -> exceeded
  80 < percentage <= 100  -> warning
  otherwise               -> normal

Exactly 80% is still normal and exactly 100% is a warning, not exceeded.
A zero budget reports 0% (and therefore normal) whatever has been spent.

Amounts are summed as stored.  Expenses entered in different original
currencies are added together without conversion.
"""
import calendar
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from flask import current_app

from extensions import db
from models.budgets import Budget
from models.categories import Category
from models.expenses import Expense
from utils.errors import ConflictError, NotFoundError

ALERT_NORMAL = 'normal'
ALERT_WARNING = 'warning'
ALERT_EXCEEDED = 'exceeded'
ALERT_LEVELS = (ALERT_NORMAL, ALERT_WARNING, ALERT_EXCEEDED)

WARNING_THRESHOLD = Decimal('80')
EXCEEDED_THRESHOLD = Decimal('100')

TOTAL_BUDGET_NAME = 'Total Budget'


@dataclass(frozen=True)
class BudgetStatus:
    """Derived status of one budget at the time it was evaluated."""
    amount: Decimal
    spent: Decimal
    remaining: Decimal
    percentage: Decimal
    alert_level: str

    def to_dict(self):
        return {
            'amount': float(self.amount),
            'spent': float(self.spent),
            'remaining': float(self.remaining),
            'percentage': float(self.percentage),
            'alertLevel': self.alert_level,
        }


def _to_decimal(value):
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def classify(percentage):
    """Map a percentage used onto an alert level."""
    if percentage > EXCEEDED_THRESHOLD:
        return ALERT_EXCEEDED
    if percentage > WARNING_THRESHOLD:
        return ALERT_WARNING
    return ALERT_NORMAL


def evaluate(budget, expenses):
    """Compute the status of *budget* from already-fetched *expenses*.

    *budget* needs an ``amount``; each expense needs an ``amount``.  The
    caller is responsible for passing only the expenses that match the
    budget's owner, period and scope.
    """
    amount = _to_decimal(budget.amount)
    spent = sum((_to_decimal(expense.amount) for expense in expenses), Decimal('0'))
    remaining = amount - spent
    if amount == 0:
        percentage = Decimal('0')
    else:
        percentage = (spent / amount) * 100
    return BudgetStatus(
        amount=amount,
        spent=spent,
        remaining=remaining,
        percentage=percentage,
        alert_level=classify(percentage),
    )


def alert_message(status):
    # Ties round up: 80.25 -> "80.3"
    shown = status.percentage.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)
    if status.alert_level == ALERT_EXCEEDED:
        return f"Budget exceeded! You've spent {shown}% of your budget."
    return f"Budget warning! You've used {shown}% of your budget."


class BudgetService:
    @staticmethod
    def get_period_bounds(month, year):
        """First and last calendar day of the month, both inclusive"""
        _, last_day = calendar.monthrange(year, month)
        return date(year, month, 1), date(year, month, last_day)

    @staticmethod
    def fetch_expenses(user_id, period_start, period_end, category_id=None):
        """All of the owner's expenses dated within the period.

        With *category_id* only that category's expenses are returned;
        without it every category counts.
        """
        query = Expense.query.filter(
            Expense.user_id == user_id,
            Expense.date >= period_start,
            Expense.date <= period_end,
        )
        if category_id is not None:
            query = query.filter(Expense.category_id == category_id)
        return query.all()

    @staticmethod
    def get_budget_status(budget):
        """Get current status of a budget including spent vs allocated"""
        start, end = BudgetService.get_period_bounds(budget.month, budget.year)
        expenses = BudgetService.fetch_expenses(budget.user_id, start, end, budget.category_id)
        return evaluate(budget, expenses)

    @staticmethod
    def get_budgets_for_period(user_id, month, year):
        return Budget.query.filter_by(
            user_id=user_id, month=month, year=year
        ).order_by(Budget.category_id.asc()).all()

    @staticmethod
    def find_budget(user_id, category_id, month, year):
        """The budget for one scope/period, or None"""
        return Budget.query.filter_by(
            user_id=user_id, category_id=category_id, month=month, year=year
        ).first()

    @staticmethod
    def create_budget(user_id, amount, month, year, category_id=None, original_currency='USD'):
        """Create a new budget"""
        if category_id is not None and db.session.get(Category, category_id) is None:
            raise NotFoundError('Category not found')

        if BudgetService.find_budget(user_id, category_id, month, year) is not None:
            scope = 'category' if category_id is not None else 'month'
            raise ConflictError(f'Budget already exists for this {scope}. Use PUT to update.')

        budget = Budget(
            user_id=user_id,
            category_id=category_id,
            amount=amount,
            month=month,
            year=year,
            original_currency=original_currency or 'USD',
        )
        db.session.add(budget)
        db.session.commit()

        current_app.logger.info(
            f'Budget created: id={budget.id} amount={budget.amount} '
            f'category={budget.category_id} period={budget.month}/{budget.year}'
        )
        return budget

    @staticmethod
    def update_budget(budget, amount=None, month=None, year=None):
        new_month = month if month is not None else budget.month
        new_year = year if year is not None else budget.year

        if (new_month, new_year) != (budget.month, budget.year):
            clash = BudgetService.find_budget(budget.user_id, budget.category_id, new_month, new_year)
            if clash is not None and clash.id != budget.id:
                raise ConflictError('A budget for this scope already exists in that month')

        if amount is not None:
            budget.amount = amount
        budget.month = new_month
        budget.year = new_year
        db.session.commit()

        current_app.logger.info(f'Budget updated: id={budget.id} amount={budget.amount} period={budget.month}/{budget.year}')
        return budget

    @staticmethod
    def delete_budget(budget):
        budget_id, category_id = budget.id, budget.category_id
        db.session.delete(budget)
        db.session.commit()
        current_app.logger.info(f'Budget deleted: id={budget_id} category={category_id}')

    @staticmethod
    def status_entry(budget, status):
        """Flattened status row as shown on the budget overview"""
        entry = {
            'budgetId': budget.id,
            'categoryId': budget.category_id,
            'categoryName': budget.category.name if budget.category else TOTAL_BUDGET_NAME,
            'color': budget.category.color if budget.category else None,
        }
        entry.update(status.to_dict())
        return entry

    @staticmethod
    def get_status_report(user_id, month, year):
        """Every budget of the period with its status, grouped by alert level"""
        budgets = BudgetService.get_budgets_for_period(user_id, month, year)
        entries = [
            BudgetService.status_entry(budget, BudgetService.get_budget_status(budget))
            for budget in budgets
        ]
        alerts = {level: [e for e in entries if e['alertLevel'] == level] for level in ALERT_LEVELS}
        return {
            'budgets': entries,
            'alerts': alerts,
            'summary': {
                'total': len(entries),
                'normal': len(alerts[ALERT_NORMAL]),
                'warning': len(alerts[ALERT_WARNING]),
                'exceeded': len(alerts[ALERT_EXCEEDED]),
            },
            'month': month,
            'year': year,
        }

    @staticmethod
    def check_budget_alerts(user_id, month, year):
        """Check for budgets that are close to or over limit"""
        alerts = []
        for budget in BudgetService.get_budgets_for_period(user_id, month, year):
            status = BudgetService.get_budget_status(budget)
            if status.alert_level == ALERT_NORMAL:
                continue
            entry = BudgetService.status_entry(budget, status)
            entry['message'] = alert_message(status)
            alerts.append(entry)
        return alerts
