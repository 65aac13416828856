from flask import Blueprint

from utils.db_helpers import require_access

categories_bp = Blueprint('categories', __name__)

# Every route acts on behalf of the current profile
@categories_bp.before_request
def require_profile():
    require_access()

from . import routes
