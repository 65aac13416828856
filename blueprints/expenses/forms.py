"""
Expense Forms
Validation for expense JSON bodies
"""
from flask_wtf import FlaskForm
from wtforms import BooleanField, DateField, DecimalField, IntegerField, StringField
from wtforms.validators import AnyOf, InputRequired, Length, NumberRange, Optional

from models.expenses import Expense
from utils.validators import DATE_FORMATS, PositiveAmount


class ExpenseForm(FlaskForm):
    """Create an expense"""
    amount = DecimalField('Amount', validators=[
        InputRequired(message='Amount is required'),
        PositiveAmount()
    ])
    date = DateField('Date', format=DATE_FORMATS, validators=[
        InputRequired(message='Date is required')
    ])
    category_id = IntegerField('Category', validators=[
        InputRequired(message='Category is required'),
        NumberRange(min=1, message='Category ID must be positive')
    ])
    description = StringField('Description', validators=[Optional(), Length(max=255)])
    payment_method = StringField('Payment Method', validators=[
        InputRequired(message='Payment method is required'),
        AnyOf(Expense.PAYMENT_METHODS, message='Invalid payment method')
    ])
    location = StringField('Location', validators=[Optional(), Length(max=500)])
    is_recurring = BooleanField('Recurring')
    recurring_frequency = StringField('Frequency', validators=[
        Optional(),
        AnyOf(Expense.RECURRING_FREQUENCIES, message='Invalid recurring frequency')
    ])
    original_currency = StringField('Currency', validators=[
        Optional(),
        AnyOf(Expense.CURRENCIES, message='Currency must be one of: USD, EUR, GBP, XAF')
    ])


class ExpenseUpdateForm(FlaskForm):
    """Partial update: every field optional, at least one required by the route"""
    amount = DecimalField('Amount', validators=[Optional(), PositiveAmount()])
    date = DateField('Date', format=DATE_FORMATS, validators=[Optional()])
    category_id = IntegerField('Category', validators=[Optional(), NumberRange(min=1)])
    description = StringField('Description', validators=[Optional(), Length(max=255)])
    payment_method = StringField('Payment Method', validators=[
        Optional(),
        AnyOf(Expense.PAYMENT_METHODS, message='Invalid payment method')
    ])
    location = StringField('Location', validators=[Optional(), Length(max=500)])
    is_recurring = BooleanField('Recurring')
    recurring_frequency = StringField('Frequency', validators=[
        Optional(),
        AnyOf(Expense.RECURRING_FREQUENCIES, message='Invalid recurring frequency')
    ])
    original_currency = StringField('Currency', validators=[
        Optional(),
        AnyOf(Expense.CURRENCIES, message='Currency must be one of: USD, EUR, GBP, XAF')
    ])
