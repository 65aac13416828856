"""
Authentication Forms
Password setup, login and password management
"""
from flask_wtf import FlaskForm
from wtforms import PasswordField
from wtforms.validators import InputRequired, Length


class SetupPasswordForm(FlaskForm):
    """Minimum length and confirmation are checked by AuthService"""
    password = PasswordField('Password', validators=[
        InputRequired(message='Password is required'),
        Length(max=100, message='Password must be at most 100 characters')
    ])
    confirm_password = PasswordField('Confirm Password', validators=[
        InputRequired(message='Password confirmation is required')
    ])


class LoginForm(FlaskForm):
    password = PasswordField('Password', validators=[
        InputRequired(message='Password is required')
    ])


class ChangePasswordForm(FlaskForm):
    current_password = PasswordField('Current Password', validators=[
        InputRequired(message='Current password is required')
    ])
    new_password = PasswordField('New Password', validators=[
        InputRequired(message='New password is required'),
        Length(max=100, message='Password must be at most 100 characters')
    ])
    confirm_password = PasswordField('Confirm Password', validators=[
        InputRequired(message='Password confirmation is required')
    ])


class PasswordConfirmForm(FlaskForm):
    """Re-enter the password before disabling protection"""
    password = PasswordField('Password', validators=[
        InputRequired(message='Password is required')
    ])
