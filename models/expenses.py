from extensions import db
from datetime import datetime, timezone


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Expense(db.Model):
    __tablename__ = 'expenses'

    PAYMENT_METHODS = ('Cash', 'Card', 'Bank Transfer', 'Digital Wallet', 'Other')
    CURRENCIES = ('USD', 'EUR', 'GBP', 'XAF')
    RECURRING_FREQUENCIES = ('daily', 'weekly', 'monthly', 'yearly')

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=False, index=True)

    amount = db.Column(db.Numeric(10, 2), nullable=False)
    date = db.Column(db.Date, nullable=False, index=True)
    description = db.Column(db.String(255), default='')
    payment_method = db.Column(db.String(50), nullable=False, default='Cash')
    # Amount is stored as entered, in this currency (no conversion)
    original_currency = db.Column(db.String(3), nullable=False, default='USD')
    location = db.Column(db.String(500), default='')

    is_recurring = db.Column(db.Boolean, default=False, nullable=False)
    recurring_frequency = db.Column(db.String(50), default='monthly')

    created_at = db.Column(db.DateTime, default=_utcnow)
    updated_at = db.Column(db.DateTime, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        db.Index('ix_expenses_date_category', 'date', 'category_id'),
    )

    def to_dict(self, include_category=True):
        data = {
            'expenseId': self.id,
            'amount': float(self.amount),
            'date': self.date.isoformat(),
            'categoryId': self.category_id,
            'description': self.description or '',
            'paymentMethod': self.payment_method,
            'originalCurrency': self.original_currency,
            'location': self.location or '',
            'isRecurring': self.is_recurring,
            'recurringFrequency': self.recurring_frequency,
            'userId': self.user_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_category:
            data['category'] = self.category.to_dict() if self.category else None
        return data

    def __repr__(self):
        return f'<Expense {self.id}: {self.amount} on {self.date}>'
