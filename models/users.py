"""
User Model
Single-profile desktop user with optional password protection
"""
from extensions import db
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from datetime import datetime, timezone


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(UserMixin, db.Model):
    """User profile, preferences and login security state"""
    __tablename__ = 'users'

    THEMES = ('light', 'dark', 'auto')

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), nullable=False, default='default')
    password_hash = db.Column(db.String(255), nullable=True)
    is_password_protected = db.Column(db.Boolean, default=False, nullable=False)

    # Preferences
    currency = db.Column(db.String(3), nullable=False, default='USD')
    theme = db.Column(db.String(10), nullable=False, default='light')
    date_format = db.Column(db.String(20), nullable=False, default='MM/DD/YYYY')

    # Login security fields
    failed_login_attempts = db.Column(db.Integer, default=0, nullable=False)
    locked_until = db.Column(db.DateTime)
    last_login = db.Column(db.DateTime)

    created_at = db.Column(db.DateTime, default=_utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=_utcnow, onupdate=_utcnow)

    expenses = db.relationship('Expense', backref='user', lazy='dynamic', cascade='all, delete-orphan')
    budgets = db.relationship('Budget', backref='user', lazy='dynamic', cascade='all, delete-orphan')

    def set_password(self, password):
        """Hash and set the user's password, enabling protection"""
        self.password_hash = generate_password_hash(password)
        self.is_password_protected = True

    def check_password(self, password):
        """Check if provided password matches the hash"""
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def clear_password(self):
        """Disable password protection"""
        self.password_hash = None
        self.is_password_protected = False
        self.reset_failed_logins()

    def update_last_login(self):
        self.last_login = _utcnow()

    def is_locked(self):
        """Check if account is locked due to failed login attempts"""
        return bool(self.locked_until and self.locked_until > _utcnow())

    def lock_expired(self):
        """True when a lock was set but has since run out"""
        return bool(self.locked_until and self.locked_until <= _utcnow())

    def record_failed_login(self, max_attempts, lockout_duration):
        """Record a failed login attempt and lock if threshold reached.

        Returns True when this attempt caused the account to lock.
        """
        self.failed_login_attempts = (self.failed_login_attempts or 0) + 1
        if self.failed_login_attempts >= max_attempts and lockout_duration:
            self.locked_until = _utcnow() + lockout_duration
            return True
        return False

    def reset_failed_logins(self):
        """Reset failed login attempts after successful login or lock expiry"""
        self.failed_login_attempts = 0
        self.locked_until = None

    def remaining_lock_minutes(self):
        if not self.is_locked():
            return 0
        seconds = (self.locked_until - _utcnow()).total_seconds()
        return int(seconds // 60) + 1

    def get_settings(self):
        return {
            'username': self.username,
            'currency': self.currency,
            'theme': self.theme,
            'dateFormat': self.date_format,
            'isPasswordProtected': self.is_password_protected,
        }

    def update_settings(self, **settings):
        """Apply preference changes; unknown keys are ignored"""
        for field in ('username', 'currency', 'theme', 'date_format'):
            if field in settings and settings[field] is not None:
                setattr(self, field, settings[field])

    def to_dict(self):
        return {
            'userId': self.id,
            'username': self.username,
            'currency': self.currency,
            'theme': self.theme,
            'dateFormat': self.date_format,
            'isPasswordProtected': self.is_password_protected,
        }

    def __repr__(self):
        return f'<User {self.username}>'
