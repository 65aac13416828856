"""
Authentication Routes
Optional password protection for the single local profile
"""
from flask import current_app
from flask_login import current_user, login_user, logout_user

from . import auth_bp
from .forms import ChangePasswordForm, LoginForm, PasswordConfirmForm, SetupPasswordForm
from extensions import limiter
from services.auth_service import AuthService
from utils.api import load_form, success
from utils.db_helpers import get_current_user, get_default_user
from utils.errors import APIError, NotFoundError


def _default_user_or_404():
    user = get_default_user()
    if user is None:
        raise NotFoundError('User not found')
    return user


def _acting_user():
    user = get_current_user()
    if user is None:
        raise APIError('Authentication required', 401)
    return user


def _login_rate_limit():
    return current_app.config.get('LOGIN_RATE_LIMIT', '10 per minute')


@auth_bp.route('/status', methods=['GET'])
def status():
    user = _default_user_or_404()
    protected = user.is_password_protected
    return success({
        'isPasswordProtected': protected,
        'requiresAuthentication': protected and not current_user.is_authenticated,
        'isAuthenticated': current_user.is_authenticated,
    })


@auth_bp.route('/setup-password', methods=['POST'])
def setup_password():
    """First-time password setup; the caller is logged in afterwards"""
    user = _default_user_or_404()
    form, _ = load_form(SetupPasswordForm)
    AuthService.setup_password(user, form.password.data, form.confirm_password.data)
    login_user(user)
    return success(user.to_dict(), 'Password protection enabled successfully')


@auth_bp.route('/login', methods=['POST'])
@limiter.limit(_login_rate_limit)
def login():
    user = _default_user_or_404()
    form, _ = load_form(LoginForm)
    AuthService.attempt_login(user, form.password.data)
    login_user(user)
    return success({'user': user.to_dict()}, 'Login successful')


@auth_bp.route('/logout', methods=['POST'])
def logout():
    if current_user.is_authenticated:
        current_app.logger.info(f'User {current_user.id} logged out')
    logout_user()
    return success(message='Logged out successfully')


@auth_bp.route('/verify', methods=['GET'])
def verify():
    return success(_acting_user().to_dict())


@auth_bp.route('/change-password', methods=['PUT'])
def change_password():
    user = _acting_user()
    form, _ = load_form(ChangePasswordForm)
    AuthService.change_password(
        user,
        form.current_password.data,
        form.new_password.data,
        form.confirm_password.data,
    )
    return success(message='Password changed successfully')


@auth_bp.route('/password-protection', methods=['DELETE'])
def disable_password_protection():
    user = _acting_user()
    form, _ = load_form(PasswordConfirmForm)
    AuthService.disable_protection(user, form.password.data)
    logout_user()
    return success(message='Password protection disabled successfully')
