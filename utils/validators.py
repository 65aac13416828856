"""
Shared WTForms validators and field options for the API forms.
"""
from wtforms.validators import ValidationError

# Accepted request date formats: plain dates and full ISO timestamps
DATE_FORMATS = ['%Y-%m-%d', '%Y-%m-%dT%H:%M:%S', '%Y-%m-%dT%H:%M:%S.%fZ', '%Y-%m-%dT%H:%M:%SZ']

HEX_COLOR = r'^#[0-9A-Fa-f]{6}$'


class PositiveAmount:
    """Amount must be greater than zero with at most two decimal places"""

    def __init__(self, message=None):
        self.message = message or 'Amount must be positive'

    def __call__(self, form, field):
        if field.data is None:
            return
        if field.data <= 0:
            raise ValidationError(self.message)
        if field.data.as_tuple().exponent < -2:
            raise ValidationError('Amount must have at most 2 decimal places')
