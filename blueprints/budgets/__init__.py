from flask import Blueprint

from utils.db_helpers import require_access

budgets_bp = Blueprint('budgets', __name__)

# Every route acts on behalf of the current profile
@budgets_bp.before_request
def require_profile():
    require_access()

from . import routes
