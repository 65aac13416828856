"""
Settings Forms
"""
from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import AnyOf, Length, Optional, Regexp

from models.users import User


class SettingsForm(FlaskForm):
    username = StringField('Username', validators=[
        Optional(),
        Length(min=1, max=50, message='Username must be between 1 and 50 characters')
    ])
    currency = StringField('Currency', validators=[
        Optional(),
        Regexp(r'^[A-Za-z]{3}$', message='Currency must be a 3-letter code')
    ])
    theme = StringField('Theme', validators=[
        Optional(),
        AnyOf(User.THEMES, message='Theme must be one of: light, dark, auto')
    ])
    date_format = StringField('Date Format', validators=[Optional(), Length(max=20)])
