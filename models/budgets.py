from extensions import db
from datetime import datetime, timezone


class Budget(db.Model):
    """Monthly spending limit; category_id NULL means the overall monthly budget"""
    __tablename__ = 'budgets'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=True)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    month = db.Column(db.Integer, nullable=False)  # 1-12
    year = db.Column(db.Integer, nullable=False)
    original_currency = db.Column(db.String(3), nullable=False, default='USD')
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None))
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None), onupdate=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    __table_args__ = (
        db.UniqueConstraint('category_id', 'month', 'year', 'user_id',
                            name='unique_budget_per_category_month'),
        db.Index('ix_budgets_month_year', 'month', 'year'),
    )

    @property
    def scope(self):
        return 'total' if self.category_id is None else 'category'

    @property
    def display_name(self):
        return self.category.name if self.category else 'Total Budget'

    def to_dict(self):
        return {
            'budgetId': self.id,
            'amount': float(self.amount),
            'categoryId': self.category_id,
            'scope': self.scope,
            'month': self.month,
            'year': self.year,
            'userId': self.user_id,
            'originalCurrency': self.original_currency,
            'category': self.category.to_dict() if self.category else None,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<Budget {self.id}: {self.amount}>'
