"""
Budget Forms
"""
from flask_wtf import FlaskForm
from wtforms import DecimalField, IntegerField, StringField
from wtforms.validators import AnyOf, InputRequired, NumberRange, Optional

from models.expenses import Expense
from utils.validators import PositiveAmount

MONTH_MESSAGE = 'Month must be between 1 and 12'
YEAR_MESSAGE = 'Year must be between 2000 and 2100'


class BudgetForm(FlaskForm):
    """Create a budget; no category means the overall monthly budget"""
    amount = DecimalField('Amount', validators=[
        InputRequired(message='Budget amount is required'),
        PositiveAmount(message='Budget amount must be positive')
    ])
    category_id = IntegerField('Category', validators=[Optional(), NumberRange(min=1)])
    month = IntegerField('Month', validators=[
        InputRequired(message='Month is required'),
        NumberRange(min=1, max=12, message=MONTH_MESSAGE)
    ])
    year = IntegerField('Year', validators=[
        InputRequired(message='Year is required'),
        NumberRange(min=2000, max=2100, message=YEAR_MESSAGE)
    ])
    original_currency = StringField('Currency', validators=[
        Optional(),
        AnyOf(Expense.CURRENCIES, message='Currency must be one of: USD, EUR, GBP, XAF')
    ])


class BudgetUpdateForm(FlaskForm):
    amount = DecimalField('Amount', validators=[
        Optional(),
        PositiveAmount(message='Budget amount must be positive')
    ])
    month = IntegerField('Month', validators=[Optional(), NumberRange(min=1, max=12, message=MONTH_MESSAGE)])
    year = IntegerField('Year', validators=[Optional(), NumberRange(min=2000, max=2100, message=YEAR_MESSAGE)])
