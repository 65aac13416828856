from decimal import Decimal

from flask import current_app
from sqlalchemy import func

from extensions import db
from models.budgets import Budget
from models.categories import Category
from models.expenses import Expense
from services.budget_service import BudgetService
from utils.errors import APIError, ConflictError, ValidationError


DEFAULT_CATEGORIES = [
    {'name': 'Food & Dining', 'color': '#EF4444', 'icon': 'Utensils'},
    {'name': 'Transportation', 'color': '#3B82F6', 'icon': 'Car'},
    {'name': 'Housing', 'color': '#8B5CF6', 'icon': 'Home'},
    {'name': 'Entertainment', 'color': '#EC4899', 'icon': 'Film'},
    {'name': 'Healthcare', 'color': '#10B981', 'icon': 'Heart'},
    {'name': 'Shopping', 'color': '#F59E0B', 'icon': 'ShoppingBag'},
    {'name': 'Utilities', 'color': '#6366F1', 'icon': 'Zap'},
    {'name': 'Education', 'color': '#14B8A6', 'icon': 'BookOpen'},
    {'name': 'Bills & Subscriptions', 'color': '#F97316', 'icon': 'FileText'},
    {'name': 'Travel', 'color': '#06B6D4', 'icon': 'Plane'},
    {'name': 'Personal Care', 'color': '#A855F7', 'icon': 'Sparkles'},
    {'name': 'Gifts & Donations', 'color': '#EC4899', 'icon': 'Gift'},
    {'name': Category.UNCATEGORIZED, 'color': '#6B7280', 'icon': 'HelpCircle'},
]


class CategoryService:
    @staticmethod
    def seed_default_categories():
        """Insert any missing default categories. Returns the number created."""
        created = 0
        for data in DEFAULT_CATEGORIES:
            if Category.query.filter_by(name=data['name']).first() is None:
                db.session.add(Category(is_default=True, **data))
                created += 1
        if created:
            db.session.commit()
            current_app.logger.info(f'Seeded {created} default categories')
        return created

    @staticmethod
    def get_uncategorized():
        return Category.query.filter_by(name=Category.UNCATEGORIZED).first()

    @staticmethod
    def _name_taken(name, exclude_id=None):
        query = Category.query.filter(func.lower(Category.name) == name.strip().lower())
        if exclude_id is not None:
            query = query.filter(Category.id != exclude_id)
        return query.first() is not None

    @staticmethod
    def create_category(name, color, icon=None):
        name = name.strip()
        if CategoryService._name_taken(name):
            raise ConflictError(f'Category "{name}" already exists')
        category = Category(name=name, color=color.upper(), icon=icon, is_default=False)
        db.session.add(category)
        db.session.commit()
        current_app.logger.info(f'Category created: id={category.id} name={category.name}')
        return category

    @staticmethod
    def update_category(category, name=None, color=None, icon=None):
        if name is not None:
            name = name.strip()
            if CategoryService._name_taken(name, exclude_id=category.id):
                raise ConflictError(f'Category "{name}" already exists')
            category.name = name
        if color is not None:
            category.color = color.upper()
        if icon is not None:
            category.icon = icon
        db.session.commit()
        current_app.logger.info(f'Category updated: id={category.id}')
        return category

    @staticmethod
    def delete_category(category):
        """Delete a custom category.

        Its expenses move to Uncategorized and its budgets are removed.
        Returns the number of expenses reassigned.
        """
        if not category.can_delete():
            raise ValidationError('Default categories cannot be deleted')

        fallback = CategoryService.get_uncategorized()
        if fallback is None:
            raise APIError('Uncategorized category is missing', 500)

        category_id, name = category.id, category.name
        reassigned = Expense.query.filter_by(category_id=category_id).update(
            {'category_id': fallback.id}, synchronize_session=False
        )
        Budget.query.filter_by(category_id=category_id).delete(synchronize_session=False)
        db.session.delete(category)
        db.session.commit()

        current_app.logger.info(
            f'Category deleted: id={category_id} name={name}, '
            f'{reassigned} expenses moved to {Category.UNCATEGORIZED}'
        )
        return reassigned

    @staticmethod
    def total_spent(category_id, user_id, month, year):
        """Owner's spend in the category for one month"""
        start, end = BudgetService.get_period_bounds(month, year)
        expenses = BudgetService.fetch_expenses(user_id, start, end, category_id)
        return sum((expense.amount for expense in expenses), Decimal('0'))

    @staticmethod
    def get_stats(category_id, user_id):
        count, total, last_date = db.session.query(
            func.count(Expense.id),
            func.coalesce(func.sum(Expense.amount), 0),
            func.max(Expense.date),
        ).filter(
            Expense.category_id == category_id,
            Expense.user_id == user_id,
        ).one()

        total = Decimal(str(total))
        average = (total / count) if count else Decimal('0')
        return {
            'categoryId': category_id,
            'expenseCount': count,
            'totalSpent': float(total),
            'averageExpense': round(float(average), 2),
            'lastExpenseDate': last_date.isoformat() if last_date else None,
        }
