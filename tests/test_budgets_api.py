"""
Tests for the /api/budgets blueprint.
"""
from datetime import date

import pytest

from extensions import db
from models.budgets import Budget


# ---------------------------------------------------------------------------
# Create / update / delete
# ---------------------------------------------------------------------------

class TestCreateBudget:
    def test_create_category_budget(self, client, food):
        resp = client.post('/api/budgets', json={
            'amount': 300, 'categoryId': food.id, 'month': 3, 'year': 2026,
        })

        assert resp.status_code == 201
        data = resp.get_json()['data']
        assert data['amount'] == 300.0
        assert data['scope'] == 'category'
        assert data['status']['alertLevel'] == 'normal'
        assert data['status']['remaining'] == 300.0

    def test_create_total_budget_with_null_category(self, client):
        resp = client.post('/api/budgets', json={
            'amount': 1500, 'categoryId': None, 'month': 3, 'year': 2026,
        })

        assert resp.status_code == 201
        data = resp.get_json()['data']
        assert data['categoryId'] is None
        assert data['scope'] == 'total'

    def test_duplicate_is_409(self, client, food):
        payload = {'amount': 300, 'categoryId': food.id, 'month': 3, 'year': 2026}
        client.post('/api/budgets', json=payload)
        assert client.post('/api/budgets', json=payload).status_code == 409

    def test_duplicate_total_budget_is_409(self, client):
        payload = {'amount': 300, 'month': 3, 'year': 2026}
        client.post('/api/budgets', json=payload)
        assert client.post('/api/budgets', json=payload).status_code == 409

    def test_unknown_category_is_404(self, client):
        resp = client.post('/api/budgets', json={'amount': 300, 'categoryId': 9999, 'month': 3, 'year': 2026})
        assert resp.status_code == 404

    @pytest.mark.parametrize('payload', [
        {'amount': 0, 'month': 3, 'year': 2026},
        {'amount': -10, 'month': 3, 'year': 2026},
        {'amount': 100, 'month': 0, 'year': 2026},
        {'amount': 100, 'month': 13, 'year': 2026},
        {'amount': 100, 'month': 3, 'year': 1999},
        {'amount': 100, 'month': 3, 'year': 2101},
        {'amount': 100, 'year': 2026},
    ])
    def test_validation(self, client, payload):
        assert client.post('/api/budgets', json=payload).status_code == 400


class TestUpdateDeleteBudget:
    def test_update_amount_recomputes_status(self, client, food, make_budget, make_expense):
        budget = make_budget(100, month=3, year=2026, category=food)
        make_expense(90, date(2026, 3, 3), food)

        resp = client.put(f'/api/budgets/{budget.id}', json={'amount': 200})

        status = resp.get_json()['data']['status']
        assert status['percentage'] == 45.0
        assert status['alertLevel'] == 'normal'

    def test_update_onto_existing_period_is_409(self, client, food, make_budget):
        make_budget(100, month=3, year=2026, category=food)
        april = make_budget(100, month=4, year=2026, category=food)

        resp = client.put(f'/api/budgets/{april.id}', json={'month': 3})
        assert resp.status_code == 409

    def test_update_with_empty_body_is_400(self, client, make_budget):
        budget = make_budget(100)
        assert client.put(f'/api/budgets/{budget.id}', json={}).status_code == 400

    def test_delete(self, client, make_budget):
        budget = make_budget(100)
        budget_id = budget.id

        assert client.delete(f'/api/budgets/{budget_id}').status_code == 200
        assert db.session.get(Budget, budget_id) is None

    def test_get_missing_is_404(self, client):
        assert client.get('/api/budgets/9999').status_code == 404


# ---------------------------------------------------------------------------
# Status and alerts
# ---------------------------------------------------------------------------

class TestBudgetStatusEndpoints:
    def test_list_includes_status(self, client, food, make_budget, make_expense):
        make_budget(100, month=3, year=2026, category=food)
        make_expense('80.01', date(2026, 3, 3), food)

        data = client.get('/api/budgets?month=3&year=2026').get_json()['data']

        assert len(data) == 1
        assert data[0]['status']['alertLevel'] == 'warning'
        assert data[0]['status']['spent'] == 80.01

    def test_current_uses_this_month(self, client, make_budget, make_expense):
        make_budget(100)
        make_expense(150)

        data = client.get('/api/budgets/current').get_json()['data']

        assert data[0]['status']['alertLevel'] == 'exceeded'

    def test_status_report(self, client, food, transport, make_budget, make_expense):
        make_budget(100, month=3, year=2026, category=food)
        make_budget(100, month=3, year=2026, category=transport)
        make_budget(1000, month=3, year=2026)
        make_expense(100, date(2026, 3, 3), food)
        make_expense('100.01', date(2026, 3, 3), transport)

        data = client.get('/api/budgets/status?month=3&year=2026').get_json()['data']

        assert data['month'] == 3 and data['year'] == 2026
        assert data['summary'] == {'total': 3, 'normal': 1, 'warning': 1, 'exceeded': 1}
        names = {b['categoryName'] for b in data['budgets']}
        assert names == {'Food & Dining', 'Transportation', 'Total Budget'}

    def test_alerts(self, client, food, make_budget, make_expense):
        make_budget(100, month=3, year=2026, category=food)
        make_expense(95, date(2026, 3, 3), food)

        data = client.get('/api/budgets/alerts?month=3&year=2026').get_json()['data']

        assert data['count'] == 1
        assert data['alerts'][0]['alertLevel'] == 'warning'
        assert data['alerts'][0]['message'].startswith('Budget warning!')

    def test_invalid_period_is_400(self, client):
        assert client.get('/api/budgets/status?month=13').status_code == 400
