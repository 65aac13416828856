from flask import Blueprint

from utils.db_helpers import require_access

backup_bp = Blueprint('backup', __name__)

# Backups contain every profile's data
@backup_bp.before_request
def require_profile():
    require_access()

from . import routes
