"""
Analytics Service
=================
Aggregations behind the dashboard and the charts.  Grouping is done in
Python over the already-filtered expense rows; a personal ledger holds a few
thousand rows at most.

Primary entry points
--------------------
  summarize_by_category()  - count/total per category (expenses summary)
  pie_chart()              - category distribution
  monthly_totals()         - last N calendar months, oldest first
  trend()                  - per-day or per-week totals over a date range
  dashboard()              - current month overview
"""
import math
from collections import OrderedDict
from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from models.categories import Category
from models.expenses import Expense
from services.budget_service import BudgetService

FALLBACK_COLOR = '#6B7280'


class AnalyticsService:
    @staticmethod
    def total(expenses):
        return sum((expense.amount for expense in expenses), Decimal('0'))

    @staticmethod
    def query_expenses(user_id, start_date=None, end_date=None, category_id=None):
        query = Expense.query.filter(Expense.user_id == user_id)
        if start_date is not None:
            query = query.filter(Expense.date >= start_date)
        if end_date is not None:
            query = query.filter(Expense.date <= end_date)
        if category_id is not None:
            query = query.filter(Expense.category_id == category_id)
        return query

    @staticmethod
    def summarize_by_category(expenses):
        """Group expenses by category name, in first-seen order"""
        groups = OrderedDict()
        for expense in expenses:
            name = expense.category.name if expense.category else Category.UNCATEGORIZED
            group = groups.get(name)
            if group is None:
                group = groups[name] = {
                    'categoryId': expense.category_id,
                    'categoryName': name,
                    'color': expense.category.color if expense.category else None,
                    'count': 0,
                    'total': Decimal('0'),
                }
            group['count'] += 1
            group['total'] += expense.amount

        for group in groups.values():
            group['total'] = float(group['total'])
        return list(groups.values())

    @staticmethod
    def top_categories(expenses, limit=5):
        groups = AnalyticsService.summarize_by_category(expenses)
        groups.sort(key=lambda g: g['total'], reverse=True)
        return [
            {'name': g['categoryName'], 'total': g['total'], 'count': g['count'], 'color': g['color']}
            for g in groups[:limit]
        ]

    @staticmethod
    def pie_chart(expenses):
        return [
            {'name': g['categoryName'], 'value': g['total'], 'color': g['color'] or FALLBACK_COLOR}
            for g in AnalyticsService.summarize_by_category(expenses)
        ]

    @staticmethod
    def monthly_totals(user_id, months=12, today=None):
        """Total and count per calendar month for the last *months* months"""
        today = today or date.today()
        first_of_month = today.replace(day=1)
        data = []
        for offset in range(months - 1, -1, -1):
            target = first_of_month - relativedelta(months=offset)
            start, end = BudgetService.get_period_bounds(target.month, target.year)
            expenses = BudgetService.fetch_expenses(user_id, start, end)
            data.append({
                'month': target.strftime('%b %Y'),
                'value': float(AnalyticsService.total(expenses)),
                'count': len(expenses),
            })
        return data

    @staticmethod
    def trend_key(day, group_by='day'):
        if group_by == 'week':
            return f"Week {math.ceil(day.day / 7)}, {day.strftime('%b')}"
        return f"{day.strftime('%b')} {day.day}"

    @staticmethod
    def trend(expenses, group_by='day'):
        """Totals keyed by day ("Jan 5") or week of month ("Week 1, Jan")"""
        totals = OrderedDict()
        for expense in sorted(expenses, key=lambda e: e.date):
            key = AnalyticsService.trend_key(expense.date, group_by)
            totals[key] = totals.get(key, Decimal('0')) + expense.amount
        return [{'date': key, 'value': float(value)} for key, value in totals.items()]

    @staticmethod
    def dashboard(user_id, today=None):
        today = today or date.today()
        start, end = BudgetService.get_period_bounds(today.month, today.year)
        expenses = BudgetService.fetch_expenses(user_id, start, end)

        budgets = BudgetService.get_budgets_for_period(user_id, today.month, today.year)
        budget_status = [
            BudgetService.status_entry(budget, BudgetService.get_budget_status(budget))
            for budget in budgets
        ]

        recent = Expense.query.filter_by(user_id=user_id).order_by(
            Expense.created_at.desc(), Expense.id.desc()
        ).limit(10).all()

        return {
            'summary': {
                'totalExpenses': float(AnalyticsService.total(expenses)),
                'expenseCount': len(expenses),
                'budgetStatus': budget_status,
                'month': today.month,
                'year': today.year,
            },
            'recentExpenses': [expense.to_dict() for expense in recent],
            'topCategories': AnalyticsService.top_categories(expenses),
        }
