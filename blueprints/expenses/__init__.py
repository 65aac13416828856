from flask import Blueprint

from utils.db_helpers import require_access

expenses_bp = Blueprint('expenses', __name__)

# Every route acts on behalf of the current profile
@expenses_bp.before_request
def require_profile():
    require_access()

from . import routes
