"""
Auth Service
Default profile bootstrap and password login with lockout
"""
from flask import current_app

from extensions import db
from models.users import User
from utils.errors import APIError, ValidationError


class AuthService:
    @staticmethod
    def ensure_default_user():
        """Create the single default profile if the database has none"""
        user = User.query.order_by(User.id).first()
        if user is not None:
            return user

        user = User(
            username='default',
            currency=current_app.config.get('DEFAULT_CURRENCY', 'USD'),
            theme=current_app.config.get('DEFAULT_THEME', 'light'),
            date_format=current_app.config.get('DEFAULT_DATE_FORMAT', 'MM/DD/YYYY'),
        )
        db.session.add(user)
        db.session.commit()
        current_app.logger.info(f'Default user created: id={user.id}')
        return user

    @staticmethod
    def validate_new_password(password, confirm_password):
        min_length = current_app.config.get('PASSWORD_MIN_LENGTH', 8)
        if len(password) < min_length:
            raise ValidationError(f'Password must be at least {min_length} characters')
        if password != confirm_password:
            raise ValidationError('Passwords do not match')

    @staticmethod
    def setup_password(user, password, confirm_password):
        if user.is_password_protected:
            raise ValidationError('Password protection is already enabled')
        AuthService.validate_new_password(password, confirm_password)

        user.set_password(password)
        user.reset_failed_logins()
        user.update_last_login()
        db.session.commit()
        current_app.logger.info(f'Password protection enabled for user {user.id}')
        return user

    @staticmethod
    def attempt_login(user, password):
        """Check *password* for *user*, maintaining the lockout counters.

        Raises ``APIError`` with 400 (not protected), 429 (locked) or
        401 (wrong password).
        """
        if not user.is_password_protected:
            raise ValidationError('Password protection is not enabled')

        if user.lock_expired():
            user.reset_failed_logins()
            db.session.commit()

        if user.is_locked():
            minutes = user.remaining_lock_minutes()
            current_app.logger.warning(f'Login attempt on locked account {user.id}')
            raise APIError(
                f'Too many failed attempts. Account locked. Try again in {minutes} minutes.',
                429,
            )

        if not user.check_password(password):
            max_attempts = current_app.config.get('MAX_LOGIN_ATTEMPTS', 3)
            lockout = current_app.config.get('LOCKOUT_DURATION')
            locked = user.record_failed_login(max_attempts, lockout)
            db.session.commit()
            if locked:
                current_app.logger.warning(f'Account {user.id} locked after {user.failed_login_attempts} failed logins')
                minutes = int(lockout.total_seconds() // 60)
                raise APIError(f'Too many failed attempts. Account locked for {minutes} minutes.', 429)

            remaining = max(0, max_attempts - user.failed_login_attempts)
            current_app.logger.info(f'Failed login for user {user.id}, {remaining} attempts remaining')
            raise APIError(f'Invalid password. {remaining} attempts remaining.', 401)

        user.reset_failed_logins()
        user.update_last_login()
        db.session.commit()
        current_app.logger.info(f'User {user.id} logged in')
        return user

    @staticmethod
    def change_password(user, current_password, new_password, confirm_password):
        if not user.is_password_protected:
            raise ValidationError('Password protection is not enabled')
        if not user.check_password(current_password):
            raise APIError('Current password is incorrect', 401)
        AuthService.validate_new_password(new_password, confirm_password)

        user.set_password(new_password)
        db.session.commit()
        current_app.logger.info(f'Password changed for user {user.id}')
        return user

    @staticmethod
    def disable_protection(user, password):
        if not user.is_password_protected:
            raise ValidationError('Password protection is not enabled')
        if not user.check_password(password):
            raise APIError('Incorrect password', 401)

        user.clear_password()
        db.session.commit()
        current_app.logger.info(f'Password protection disabled for user {user.id}')
        return user
