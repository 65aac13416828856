from flask import current_app

from . import settings_bp
from .forms import SettingsForm
from extensions import db
from utils.api import load_form, success
from utils.db_helpers import get_current_user


@settings_bp.route('', methods=['GET'])
def get_settings():
    return success(get_current_user().get_settings())


@settings_bp.route('', methods=['PUT'])
def update_settings():
    """Update profile preferences; only the fields sent are changed"""
    user = get_current_user()
    form, provided = load_form(SettingsForm, require_any=True)

    changes = {field: form[field].data or None for field in provided}
    if changes.get('currency'):
        changes['currency'] = changes['currency'].upper()
    user.update_settings(**changes)
    db.session.commit()

    current_app.logger.info(f'Settings updated for user {user.id}: {sorted(changes)}')
    return success(user.get_settings(), 'Settings updated successfully')
