from flask import Blueprint

from utils.db_helpers import require_access

analytics_bp = Blueprint('analytics', __name__)

@analytics_bp.before_request
def require_profile():
    require_access()

from . import routes
