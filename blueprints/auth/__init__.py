from flask import Blueprint

# No access hook here: these routes are how a locked profile gets in
auth_bp = Blueprint('auth', __name__)

from . import routes
