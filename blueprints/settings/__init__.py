from flask import Blueprint

from utils.db_helpers import require_access

settings_bp = Blueprint('settings', __name__)

@settings_bp.before_request
def require_profile():
    require_access()

from . import routes
