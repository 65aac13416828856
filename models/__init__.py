# Models package - Import all models for Flask-SQLAlchemy

from models.budgets import Budget
from models.categories import Category
from models.expenses import Expense
from models.users import User

__all__ = [
    'Budget',
    'Category',
    'Expense',
    'User',
]
