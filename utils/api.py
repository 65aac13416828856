"""
JSON request/response helpers shared by the API blueprints.

Bodies use camelCase keys on the wire (``categoryId``, ``paymentMethod``)
while forms and models use snake_case; ``load_form`` bridges the two.
"""
import re
from datetime import date

from flask import jsonify, request
from werkzeug.datastructures import ImmutableMultiDict

from utils.errors import ValidationError

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def to_snake_case(key):
    return _CAMEL_BOUNDARY.sub('_', key).lower()


def success(data=None, message=None, status=200):
    body = {'success': True}
    if message:
        body['message'] = message
    if data is not None:
        body['data'] = data
    return jsonify(body), status


def _join_errors(errors):
    messages = []
    for field, field_errors in errors.items():
        for error in field_errors:
            messages.append(f'{field}: {error}')
    return ', '.join(messages)


def load_form(form_cls, require_any=False):
    """Validate the JSON body with *form_cls*.

    Returns ``(form, provided)`` where *provided* is the set of form field
    names present in the body (explicit ``null`` included), so update
    routes can apply partial changes.
    """
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError('Request body must be a JSON object')

    data = {}
    provided = set()
    for key, value in payload.items():
        name = to_snake_case(key)
        provided.add(name)
        if value is None:
            continue
        # WTForms coerces from text; str() keeps decimals like 80.01 exact
        data[name] = value if isinstance(value, bool) else str(value)

    form = form_cls(formdata=ImmutableMultiDict(data), meta={'csrf': False})
    provided &= set(form._fields)

    if require_any and not provided:
        raise ValidationError('At least one field must be provided')
    if not form.validate():
        raise ValidationError(_join_errors(form.errors), details=form.errors)
    return form, provided


# ---------------------------------------------------------------------------
# Query string parsing
# ---------------------------------------------------------------------------

def int_arg(name, default=None, min_value=None, max_value=None):
    raw = request.args.get(name)
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f'{name} must be an integer')
    if min_value is not None and value < min_value:
        raise ValidationError(f'{name} must be at least {min_value}')
    if max_value is not None and value > max_value:
        raise ValidationError(f'{name} must be at most {max_value}')
    return value


def date_arg(name, default=None, required=False):
    raw = request.args.get(name)
    if raw is None or raw == '':
        if required:
            raise ValidationError(f'{name} is required')
        return default
    try:
        # Accept both YYYY-MM-DD and full ISO timestamps
        return date.fromisoformat(raw[:10])
    except ValueError:
        raise ValidationError(f'{name} must be a valid ISO date')


def period_args():
    """Return ``(month, year)`` from the query string, defaulting to today."""
    today = date.today()
    month = int_arg('month', today.month, 1, 12)
    year = int_arg('year', today.year, 2000, 2100)
    return month, year
