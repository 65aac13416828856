"""
Tests for budget status evaluation.

The first half exercises the pure evaluate() function with plain objects;
the second half goes through BudgetService with real rows so that period,
scope and owner filtering are covered.
"""
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from extensions import db
from models.users import User
from services.budget_service import (
    ALERT_EXCEEDED,
    ALERT_NORMAL,
    ALERT_WARNING,
    BudgetService,
    alert_message,
    classify,
    evaluate,
)
from utils.errors import ConflictError, NotFoundError


def _budget(amount):
    return SimpleNamespace(amount=Decimal(str(amount)))


def _expenses(*amounts):
    return [SimpleNamespace(amount=Decimal(str(a))) for a in amounts]


# ---------------------------------------------------------------------------
# evaluate() - pure policy
# ---------------------------------------------------------------------------

class TestEvaluate:
    def test_no_expenses_is_normal_with_full_remaining(self):
        status = evaluate(_budget(500), [])
        assert status.spent == Decimal('0')
        assert status.remaining == Decimal('500')
        assert status.percentage == Decimal('0')
        assert status.alert_level == ALERT_NORMAL

    def test_spent_is_sum_of_amounts(self):
        status = evaluate(_budget(100), _expenses('10.10', '20.20', '30.30'))
        assert status.spent == Decimal('60.60')
        assert status.remaining == Decimal('39.40')

    def test_exactly_eighty_percent_is_normal(self):
        status = evaluate(_budget(100), _expenses(80))
        assert status.percentage == Decimal('80')
        assert status.alert_level == ALERT_NORMAL

    def test_just_over_eighty_percent_is_warning(self):
        status = evaluate(_budget(100), _expenses('80.01'))
        assert status.percentage == Decimal('80.01')
        assert status.alert_level == ALERT_WARNING

    def test_exactly_one_hundred_percent_is_warning(self):
        status = evaluate(_budget(100), _expenses(60, 40))
        assert status.percentage == Decimal('100')
        assert status.remaining == Decimal('0')
        assert status.alert_level == ALERT_WARNING

    def test_just_over_one_hundred_percent_is_exceeded(self):
        status = evaluate(_budget(100), _expenses('100.01'))
        assert status.percentage == Decimal('100.01')
        assert status.alert_level == ALERT_EXCEEDED
        assert status.remaining == Decimal('-0.01')

    def test_zero_budget_reports_zero_percent(self):
        status = evaluate(_budget(0), _expenses(25))
        assert status.percentage == Decimal('0')
        assert status.alert_level == ALERT_NORMAL
        assert status.remaining == Decimal('-25')

    def test_remaining_is_amount_minus_spent(self):
        for spent in ('0', '12.34', '250', '999.99'):
            status = evaluate(_budget('250.50'), _expenses(spent))
            assert status.remaining == Decimal('250.50') - Decimal(spent)

    def test_alert_level_never_decreases_as_spending_grows(self):
        order = {ALERT_NORMAL: 0, ALERT_WARNING: 1, ALERT_EXCEEDED: 2}
        previous = 0
        for cents in range(0, 15001, 250):
            level = evaluate(_budget(100), _expenses(Decimal(cents) / 100)).alert_level
            assert order[level] >= previous
            previous = order[level]

    def test_accepts_float_amounts(self):
        status = evaluate(SimpleNamespace(amount=200.0), [SimpleNamespace(amount=50.5)])
        assert status.spent == Decimal('50.5')
        assert status.percentage == Decimal('25.25')

    def test_to_dict_uses_camel_case_alert_level(self):
        data = evaluate(_budget(100), _expenses(90)).to_dict()
        assert data == {
            'amount': 100.0,
            'spent': 90.0,
            'remaining': 10.0,
            'percentage': 90.0,
            'alertLevel': ALERT_WARNING,
        }


class TestClassify:
    @pytest.mark.parametrize('percentage, expected', [
        (Decimal('0'), ALERT_NORMAL),
        (Decimal('80'), ALERT_NORMAL),
        (Decimal('80.0001'), ALERT_WARNING),
        (Decimal('100'), ALERT_WARNING),
        (Decimal('100.0001'), ALERT_EXCEEDED),
        (Decimal('350'), ALERT_EXCEEDED),
    ])
    def test_thresholds(self, percentage, expected):
        assert classify(percentage) == expected


# ---------------------------------------------------------------------------
# Period bounds and expense fetching
# ---------------------------------------------------------------------------

class TestPeriodBounds:
    def test_regular_month(self):
        assert BudgetService.get_period_bounds(4, 2026) == (date(2026, 4, 1), date(2026, 4, 30))

    def test_leap_february(self):
        assert BudgetService.get_period_bounds(2, 2028) == (date(2028, 2, 1), date(2028, 2, 29))

    def test_december(self):
        assert BudgetService.get_period_bounds(12, 2025) == (date(2025, 12, 1), date(2025, 12, 31))


class TestGetBudgetStatus:
    def test_category_budget_counts_only_its_category(self, app, food, transport, make_budget, make_expense):
        budget = make_budget(200, month=3, year=2026, category=food)
        make_expense(50, date(2026, 3, 10), food)
        make_expense(500, date(2026, 3, 10), transport)

        status = BudgetService.get_budget_status(budget)

        assert status.spent == Decimal('50.00')
        assert status.alert_level == ALERT_NORMAL

    def test_total_budget_counts_every_category(self, app, food, transport, make_budget, make_expense):
        budget = make_budget(200, month=3, year=2026)
        make_expense(50, date(2026, 3, 10), food)
        make_expense(120, date(2026, 3, 11), transport)

        status = BudgetService.get_budget_status(budget)

        assert status.spent == Decimal('170.00')
        assert status.alert_level == ALERT_WARNING

    def test_period_is_inclusive_of_first_and_last_day(self, app, make_budget, make_expense):
        budget = make_budget(100, month=3, year=2026)
        make_expense(10, date(2026, 3, 1))
        make_expense(20, date(2026, 3, 31))
        make_expense(40, date(2026, 2, 28))
        make_expense(80, date(2026, 4, 1))

        assert BudgetService.get_budget_status(budget).spent == Decimal('30.00')

    def test_other_profiles_expenses_are_ignored(self, app, make_budget, make_expense):
        other = User(username='other')
        db.session.add(other)
        db.session.commit()

        budget = make_budget(100, month=3, year=2026)
        make_expense(30, date(2026, 3, 5))
        make_expense(90, date(2026, 3, 5), owner=other)

        assert BudgetService.get_budget_status(budget).spent == Decimal('30.00')

    def test_recomputed_after_new_expense(self, app, make_budget, make_expense):
        budget = make_budget(100, month=3, year=2026)
        make_expense(50, date(2026, 3, 5))
        assert BudgetService.get_budget_status(budget).alert_level == ALERT_NORMAL

        make_expense(60, date(2026, 3, 6))
        assert BudgetService.get_budget_status(budget).alert_level == ALERT_EXCEEDED

    def test_stored_decimal_boundary_is_exact(self, app, make_budget, make_expense):
        budget = make_budget(100, month=3, year=2026)
        make_expense('80.01', date(2026, 3, 5))
        assert BudgetService.get_budget_status(budget).alert_level == ALERT_WARNING


# ---------------------------------------------------------------------------
# Reports and alerts
# ---------------------------------------------------------------------------

class TestStatusReport:
    def test_groups_budgets_by_alert_level(self, app, user, food, transport, make_budget, make_expense):
        make_budget(100, month=3, year=2026, category=food)
        make_budget(100, month=3, year=2026, category=transport)
        make_budget(1000, month=3, year=2026)
        make_expense(90, date(2026, 3, 2), food)
        make_expense(150, date(2026, 3, 2), transport)

        report = BudgetService.get_status_report(user.id, 3, 2026)

        assert report['summary'] == {'total': 3, 'normal': 1, 'warning': 1, 'exceeded': 1}
        assert [e['categoryName'] for e in report['alerts']['warning']] == ['Food & Dining']
        assert [e['categoryName'] for e in report['alerts']['exceeded']] == ['Transportation']
        assert [e['categoryName'] for e in report['alerts']['normal']] == ['Total Budget']

    def test_alerts_skip_normal_budgets_and_carry_messages(self, app, user, food, make_budget, make_expense):
        make_budget(100, month=3, year=2026, category=food)
        make_budget(1000, month=3, year=2026)
        make_expense('120.50', date(2026, 3, 2), food)

        alerts = BudgetService.check_budget_alerts(user.id, 3, 2026)

        assert len(alerts) == 1
        assert alerts[0]['alertLevel'] == ALERT_EXCEEDED
        assert alerts[0]['message'] == "Budget exceeded! You've spent 120.5% of your budget."

    def test_warning_message(self, app, user, food, make_budget, make_expense):
        make_budget(100, month=3, year=2026, category=food)
        make_expense(85, date(2026, 3, 2), food)

        alerts = BudgetService.check_budget_alerts(user.id, 3, 2026)

        assert alerts[0]['message'] == "Budget warning! You've used 85.0% of your budget."

    def test_message_rounds_ties_up(self, app, user, food, make_budget, make_expense):
        make_budget(100, month=3, year=2026, category=food)
        make_expense('80.25', date(2026, 3, 2), food)

        alerts = BudgetService.check_budget_alerts(user.id, 3, 2026)

        assert alerts[0]['message'] == "Budget warning! You've used 80.3% of your budget."

    def test_exceeded_message_rounds_ties_up(self):
        status = evaluate(_budget(100), _expenses('100.25'))
        assert alert_message(status) == "Budget exceeded! You've spent 100.3% of your budget."


class TestCreateBudget:
    def test_duplicate_category_budget_conflicts(self, app, user, food):
        BudgetService.create_budget(user.id, Decimal('100'), 3, 2026, food.id)
        with pytest.raises(ConflictError):
            BudgetService.create_budget(user.id, Decimal('200'), 3, 2026, food.id)

    def test_duplicate_total_budget_conflicts(self, app, user):
        BudgetService.create_budget(user.id, Decimal('100'), 3, 2026)
        with pytest.raises(ConflictError):
            BudgetService.create_budget(user.id, Decimal('200'), 3, 2026)

    def test_unknown_category_is_not_found(self, app, user):
        with pytest.raises(NotFoundError):
            BudgetService.create_budget(user.id, Decimal('100'), 3, 2026, 9999)

    def test_moving_onto_an_existing_period_conflicts(self, app, user, food):
        BudgetService.create_budget(user.id, Decimal('100'), 3, 2026, food.id)
        april = BudgetService.create_budget(user.id, Decimal('100'), 4, 2026, food.id)
        with pytest.raises(ConflictError):
            BudgetService.update_budget(april, month=3)
