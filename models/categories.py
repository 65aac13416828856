from extensions import db
from datetime import datetime, timezone


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Category(db.Model):
    """Expense category shared by every profile (Food & Dining, Travel, ...)"""
    __tablename__ = 'categories'

    UNCATEGORIZED = 'Uncategorized'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), unique=True, nullable=False, index=True)
    color = db.Column(db.String(7), nullable=False, default='#3B82F6')  # #RRGGBB
    icon = db.Column(db.String(50))
    is_default = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=_utcnow)
    updated_at = db.Column(db.DateTime, default=_utcnow, onupdate=_utcnow)

    expenses = db.relationship('Expense', backref='category', lazy='dynamic')
    budgets = db.relationship('Budget', backref='category', lazy='dynamic')

    def can_delete(self):
        """Default categories are permanent"""
        return not self.is_default

    def to_dict(self):
        return {
            'categoryId': self.id,
            'name': self.name,
            'color': self.color,
            'icon': self.icon,
            'isDefault': self.is_default,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<Category {self.name}>'
