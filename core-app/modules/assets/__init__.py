from flask import Blueprint

assets_bp = Blueprint(
    'assets',
    __name__,
    url_prefix='/api/assets'
)

from . import routes
